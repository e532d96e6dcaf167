"""Open controller handle plus the protocol used to talk to it."""

from __future__ import annotations

import logging
from types import TracebackType

from sixpair.core import codec
from sixpair.core.device_match import match_device
from sixpair.core.errors import (
    SessionClosedError,
    TransportIOError,
    TransportOpenError,
)
from sixpair.core.model import MACAddress, MatchedDevice, PairingProtocol, USBDeviceId
from sixpair.transports.base import HIDHandle, HIDTransport

LOGGER = logging.getLogger(__name__)


class ControllerSession:
    """A single open controller.

    Use :meth:`open` to create one, preferably as a context manager so the HID
    handle is released however the block exits::

        with ControllerSession.open(transport) as session:
            print(session.get_paired_mac())
    """

    def __init__(self, handle: HIDHandle, device: MatchedDevice) -> None:
        self._handle: HIDHandle | None = handle
        self._device = device

    @classmethod
    def open(
        cls,
        transport: HIDTransport,
        device_id: USBDeviceId | None = None,
        protocol: PairingProtocol | None = None,
    ) -> ControllerSession:
        try:
            devices = transport.enumerate()
        except OSError as exc:
            raise TransportOpenError(f"HID enumeration failed: {exc}") from exc

        matched = match_device(devices, device_id=device_id, protocol=protocol)
        info = matched.info
        try:
            handle = transport.open(info.vendor_id, info.product_id)
        except OSError as exc:
            raise TransportOpenError(
                f"Could not open HID device {info.device_id}: {exc}"
            ) from exc

        LOGGER.debug("Opened %s using %s protocol", info.device_id, matched.protocol.value)
        return cls(handle, matched)

    @property
    def device(self) -> MatchedDevice:
        return self._device

    @property
    def protocol(self) -> PairingProtocol:
        return self._device.protocol

    @property
    def closed(self) -> bool:
        return self._handle is None

    def _require_handle(self) -> HIDHandle:
        if self._handle is None:
            raise SessionClosedError("Controller session is closed")
        return self._handle

    def display_name(self, include_serial: bool = False) -> str:
        """Manufacturer and product strings, with ``?`` for anything unavailable."""
        handle = self._require_handle()
        manufacturer = _safe_string(handle.get_manufacturer_string)
        product = _safe_string(handle.get_product_string)
        if include_serial:
            serial = _safe_string(handle.get_serial_number_string)
            return f"{manufacturer} {product} ({serial})"
        return f"{manufacturer} {product}"

    def get_paired_mac(self) -> MACAddress:
        handle = self._require_handle()
        request = codec.get_request(self.protocol)
        try:
            response = handle.get_feature_report(bytes(request))
        except OSError as exc:
            raise TransportIOError(
                f"Feature report 0x{request[0]:02X} query failed: {exc}"
            ) from exc
        LOGGER.debug("Feature report 0x%02X reply: %s", request[0], bytes(response).hex(" "))
        return codec.decode(self.protocol, response)

    def set_paired_mac(self, mac: MACAddress) -> None:
        handle = self._require_handle()
        report = codec.encode(self.protocol, mac)
        LOGGER.debug("Sending feature report: %s", report.hex(" "))
        try:
            handle.send_feature_report(report)
        except OSError as exc:
            raise TransportIOError(f"Feature report 0x{report[0]:02X} send failed: {exc}") from exc

    def close(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        handle.close()

    def __enter__(self) -> ControllerSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


def _safe_string(getter) -> str:
    try:
        value = getter()
    except OSError:
        return "?"
    return value or "?"
