"""USB HID transport implementation using hidapi."""

from __future__ import annotations

from typing import Any

from sixpair.core.errors import TransportIOError, TransportOpenError
from sixpair.core.model import HIDDeviceInfo


def _load_hid() -> Any:
    try:
        import hid  # type: ignore
    except ImportError as exc:
        raise TransportOpenError(
            "USB HID access requires 'hidapi' (pip install hidapi) and the native "
            "hidapi library (libhidapi-hidraw0 or hidapi-devel)."
        ) from exc
    return hid


def _optional_string(value: Any) -> str | None:
    if not value:
        return None
    return str(value)


class HidapiDevice:
    def __init__(self, device: Any) -> None:
        self._device = device

    def _last_error(self) -> str:
        try:
            message = self._device.error()
        except (OSError, ValueError):
            return "unknown error"
        return message or "unknown error"

    def get_feature_report(self, request: bytes) -> bytes:
        try:
            data = self._device.get_feature_report(request[0], len(request))
        except (OSError, ValueError) as exc:
            raise TransportIOError(
                f"Feature report 0x{request[0]:02X} query failed: {exc}"
            ) from exc
        return bytes(data)

    def send_feature_report(self, data: bytes) -> int:
        try:
            written = self._device.send_feature_report(data)
        except (OSError, ValueError) as exc:
            raise TransportIOError(f"Feature report 0x{data[0]:02X} send failed: {exc}") from exc
        if written < 0:
            raise TransportIOError(
                f"Feature report 0x{data[0]:02X} send failed: {self._last_error()}"
            )
        return written

    def _read_string(self, getter_name: str) -> str | None:
        try:
            return _optional_string(getattr(self._device, getter_name)())
        except (OSError, ValueError):
            return None

    def get_manufacturer_string(self) -> str | None:
        return self._read_string("get_manufacturer_string")

    def get_product_string(self) -> str | None:
        return self._read_string("get_product_string")

    def get_serial_number_string(self) -> str | None:
        return self._read_string("get_serial_number_string")

    def close(self) -> None:
        self._device.close()


class HidapiTransport:
    def __init__(self) -> None:
        self._hid = _load_hid()

    def enumerate(self) -> list[HIDDeviceInfo]:
        try:
            entries = self._hid.enumerate()
        except OSError as exc:
            raise TransportOpenError(f"HID enumeration failed: {exc}") from exc

        return [
            HIDDeviceInfo(
                vendor_id=int(entry["vendor_id"]),
                product_id=int(entry["product_id"]),
                path=entry.get("path"),
                manufacturer=_optional_string(entry.get("manufacturer_string")),
                product=_optional_string(entry.get("product_string")),
                serial_number=_optional_string(entry.get("serial_number")),
            )
            for entry in entries
        ]

    def open(self, vendor_id: int, product_id: int) -> HidapiDevice:
        device = self._hid.device()
        try:
            device.open(vendor_id, product_id)
        except OSError as exc:
            raise TransportOpenError(
                f"Could not open HID device (VID={vendor_id:04X}, PID={product_id:04X}): {exc}. "
                "Check udev permissions or run with elevated privileges."
            ) from exc
        return HidapiDevice(device)
