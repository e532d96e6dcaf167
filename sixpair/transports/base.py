"""Transport interfaces."""

from __future__ import annotations

from typing import Protocol

from sixpair.core.model import HIDDeviceInfo


class HIDHandle(Protocol):
    def get_feature_report(self, request: bytes) -> bytes:
        """Query the feature report named by ``request[0]``, sized ``len(request)``."""

    def send_feature_report(self, data: bytes) -> int:
        """Send a report-ID-tagged feature report and return the bytes written."""

    def get_manufacturer_string(self) -> str | None: ...

    def get_product_string(self) -> str | None: ...

    def get_serial_number_string(self) -> str | None: ...

    def close(self) -> None: ...


class HIDTransport(Protocol):
    def enumerate(self) -> list[HIDDeviceInfo]:
        """Return every HID device currently visible to the host."""

    def open(self, vendor_id: int, product_id: int) -> HIDHandle:
        """Open the first device with the given IDs for exclusive use."""
