"""Stable public API for building tooling on top of sixpair.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from sixpair.core.codec import decode, encode, get_request
from sixpair.core.errors import (
    DeviceSelectionError,
    InvalidByteError,
    MacAddressError,
    MalformedAddressError,
    NoSupportedDeviceFoundError,
    PairingVerificationError,
    ProtocolRequiredError,
    ResponseError,
    SessionClosedError,
    SixpairError,
    TransportError,
    TransportIOError,
    TransportOpenError,
    UnexpectedResponseHeaderError,
    UnexpectedResponseLengthError,
)
from sixpair.core.model import (
    HIDDeviceInfo,
    KnownDeviceRecord,
    MACAddress,
    MatchedDevice,
    PairingProtocol,
    USBDeviceId,
)
from sixpair.core.registry import KNOWN_DEVICES
from sixpair.core.service import ListedDevice, PairingService, PairResult, ReadResult
from sixpair.core.session import ControllerSession
from sixpair.transports.base import HIDHandle, HIDTransport

__all__ = [
    "SixpairError",
    "MacAddressError",
    "MalformedAddressError",
    "InvalidByteError",
    "DeviceSelectionError",
    "ProtocolRequiredError",
    "NoSupportedDeviceFoundError",
    "TransportError",
    "TransportOpenError",
    "TransportIOError",
    "ResponseError",
    "UnexpectedResponseLengthError",
    "UnexpectedResponseHeaderError",
    "SessionClosedError",
    "PairingVerificationError",
    "HIDDeviceInfo",
    "KnownDeviceRecord",
    "MACAddress",
    "MatchedDevice",
    "PairingProtocol",
    "USBDeviceId",
    "KNOWN_DEVICES",
    "ControllerSession",
    "HIDHandle",
    "HIDTransport",
    "ListedDevice",
    "PairResult",
    "ReadResult",
    "decode",
    "encode",
    "get_request",
    "Client",
]


class Client:
    """Public client for reading and rewriting a controller's paired host.

    A `Client` wraps device enumeration, protocol matching and feature report
    I/O behind a stable API intended for third-party tools. Pass ``transport``
    to drive something other than the local hidapi backend.
    """

    def __init__(self, *, transport: HIDTransport | None = None) -> None:
        self._service = PairingService(transport=transport)

    def list_devices(self) -> list[ListedDevice]:
        return self._service.list_devices()

    def open(
        self,
        *,
        device_id: USBDeviceId | None = None,
        protocol: PairingProtocol | None = None,
    ) -> ControllerSession:
        return self._service.open_session(device_id=device_id, protocol=protocol)

    def get_paired_mac(
        self,
        *,
        device_id: USBDeviceId | None = None,
        protocol: PairingProtocol | None = None,
    ) -> MACAddress:
        return self._service.read_mac(device_id, protocol).mac

    def set_paired_mac(
        self,
        mac: MACAddress | str,
        *,
        device_id: USBDeviceId | None = None,
        protocol: PairingProtocol | None = None,
        verify: bool = True,
    ) -> PairResult:
        address = mac if isinstance(mac, MACAddress) else MACAddress.parse(mac)
        return self._service.pair(address, device_id, protocol, verify=verify)
