from __future__ import annotations

import pytest

from sixpair.core.errors import PairingVerificationError, TransportIOError
from sixpair.core.model import MACAddress, PairingProtocol, USBDeviceId
from sixpair.core.service import PairingService


def test_list_devices_marks_known_controllers(sixaxis_transport) -> None:
    service = PairingService(transport=sixaxis_transport)
    devices = service.list_devices()

    assert [d.info.device_id for d in devices] == [USBDeviceId(0x046D, 0xC31C), USBDeviceId(0x054C, 0x0268)]
    assert devices[0].known is None
    assert devices[1].known.name == "Sony PlayStation 3 Controller"


def test_read_mac_happy_path(ds4_transport) -> None:
    service = PairingService(transport=ds4_transport)
    result = service.read_mac(include_serial=True)

    assert result.mac == MACAddress.parse("A4:C1:38:00:00:01")
    assert result.protocol is PairingProtocol.DUALSHOCK4
    assert result.controller == "Sony Computer Entertainment Wireless Controller (1ca0b8000001)"
    assert ds4_transport.handle.close_calls == 1


def test_pair_writes_and_verifies(sixaxis_transport) -> None:
    service = PairingService(transport=sixaxis_transport)
    new_mac = MACAddress.parse("11:22:33:44:55:66")

    result = service.pair(new_mac)

    assert result.previous_mac == MACAddress.parse("00:1A:7D:DA:71:13")
    assert result.mac == new_mac
    assert result.verified is True
    assert sixaxis_transport.handle.sent == [bytes.fromhex("f500112233445566")]
    assert len(sixaxis_transport.handle.requests) == 2
    assert sixaxis_transport.handle.close_calls == 1


def test_pair_without_verify_only_writes(ds4_transport) -> None:
    service = PairingService(transport=ds4_transport)
    result = service.pair(MACAddress.parse("01:02:03:04:05:06"), verify=False)

    assert result.previous_mac is None
    assert result.verified is False
    assert ds4_transport.handle.requests == []
    assert ds4_transport.handle.stored == bytes([1, 2, 3, 4, 5, 6])


def test_pair_verification_mismatch(sixaxis_transport) -> None:
    sixaxis_transport.handle.write_stores = False
    service = PairingService(transport=sixaxis_transport)

    with pytest.raises(PairingVerificationError) as exc:
        service.pair(MACAddress.parse("11:22:33:44:55:66"))

    assert "00:1A:7D:DA:71:13" in str(exc.value)
    assert sixaxis_transport.handle.close_calls == 1


def test_pair_send_failure_releases_handle(sixaxis_transport) -> None:
    sixaxis_transport.handle.send_error = OSError("send_feature_report failed")
    service = PairingService(transport=sixaxis_transport)

    with pytest.raises(TransportIOError):
        service.pair(MACAddress.parse("11:22:33:44:55:66"))

    assert sixaxis_transport.handle.close_calls == 1


def test_explicit_device_and_protocol(sixaxis_transport) -> None:
    service = PairingService(transport=sixaxis_transport)
    result = service.read_mac(USBDeviceId(0x054C, 0x0268), PairingProtocol.SIXAXIS)
    assert result.mac.format() == "00:1A:7D:DA:71:13"
