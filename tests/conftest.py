from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from sixpair.core.model import HIDDeviceInfo, PairingProtocol

DS3_INFO = HIDDeviceInfo(
    vendor_id=0x054C,
    product_id=0x0268,
    manufacturer="Sony",
    product="PLAYSTATION(R)3 Controller",
)
DS4_INFO = HIDDeviceInfo(
    vendor_id=0x054C,
    product_id=0x05C4,
    manufacturer="Sony Computer Entertainment",
    product="Wireless Controller",
    serial_number="1ca0b8000001",
)
KEYBOARD_INFO = HIDDeviceInfo(
    vendor_id=0x046D,
    product_id=0xC31C,
    manufacturer="Logitech",
    product="USB Keyboard",
)


class FakeHandle:
    """In-memory controller that stores the paired MAC like real hardware."""

    def __init__(
        self,
        protocol: PairingProtocol,
        stored: bytes = bytes.fromhex("001a7dda7113"),
        *,
        manufacturer: str | None = "Sony",
        product: str | None = "PLAYSTATION(R)3 Controller",
        serial: str | None = None,
    ) -> None:
        self.protocol = protocol
        self.stored = stored
        self.manufacturer = manufacturer
        self.product = product
        self.serial = serial
        self.reply: bytes | None = None
        self.get_error: Exception | None = None
        self.send_error: Exception | None = None
        self.string_error: Exception | None = None
        self.write_stores = True
        self.requests: list[bytes] = []
        self.sent: list[bytes] = []
        self.close_calls = 0

    def get_feature_report(self, request: bytes) -> bytes:
        self.requests.append(bytes(request))
        if self.get_error is not None:
            raise self.get_error
        if self.reply is not None:
            return self.reply
        if self.protocol is PairingProtocol.SIXAXIS:
            return b"\xf5\x00" + self.stored
        return b"\x12" + bytes(9) + self.stored[::-1]

    def send_feature_report(self, data: bytes) -> int:
        self.sent.append(bytes(data))
        if self.send_error is not None:
            raise self.send_error
        if self.write_stores:
            if self.protocol is PairingProtocol.SIXAXIS:
                self.stored = bytes(data[2:8])
            else:
                self.stored = bytes(data[1:7])[::-1]
        return len(data)

    def _string(self, value: str | None) -> str | None:
        if self.string_error is not None:
            raise self.string_error
        return value

    def get_manufacturer_string(self) -> str | None:
        return self._string(self.manufacturer)

    def get_product_string(self) -> str | None:
        return self._string(self.product)

    def get_serial_number_string(self) -> str | None:
        return self._string(self.serial)

    def close(self) -> None:
        self.close_calls += 1


class FakeTransport:
    def __init__(self, devices: Sequence[HIDDeviceInfo], handle: FakeHandle) -> None:
        self.devices = list(devices)
        self.handle = handle
        self.enumerate_error: Exception | None = None
        self.open_error: Exception | None = None
        self.opened: list[tuple[int, int]] = []

    def enumerate(self) -> list[HIDDeviceInfo]:
        if self.enumerate_error is not None:
            raise self.enumerate_error
        return list(self.devices)

    def open(self, vendor_id: int, product_id: int) -> FakeHandle:
        self.opened.append((vendor_id, product_id))
        if self.open_error is not None:
            raise self.open_error
        return self.handle


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.delenv("SIXPAIR_CONFIG", raising=False)


@pytest.fixture
def make_transport() -> Callable[..., FakeTransport]:
    def _make(
        devices: Sequence[HIDDeviceInfo],
        protocol: PairingProtocol = PairingProtocol.SIXAXIS,
        **handle_kwargs,
    ) -> FakeTransport:
        return FakeTransport(devices, FakeHandle(protocol, **handle_kwargs))

    return _make


@pytest.fixture
def sixaxis_transport(make_transport) -> FakeTransport:
    return make_transport([KEYBOARD_INFO, DS3_INFO], PairingProtocol.SIXAXIS)


@pytest.fixture
def ds4_transport(make_transport) -> FakeTransport:
    return make_transport(
        [DS4_INFO],
        PairingProtocol.DUALSHOCK4,
        stored=bytes.fromhex("a4c138000001"),
        manufacturer="Sony Computer Entertainment",
        product="Wireless Controller",
        serial="1ca0b8000001",
    )
