"""Enumerated-device to protocol matching logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sixpair.core.errors import NoSupportedDeviceFoundError, ProtocolRequiredError
from sixpair.core.model import HIDDeviceInfo, MatchedDevice, PairingProtocol, USBDeviceId
from sixpair.core.registry import lookup_known_device

LOGGER = logging.getLogger(__name__)


def describe_device(device: HIDDeviceInfo) -> str:
    known = lookup_known_device(device.vendor_id, device.product_id)
    ids = f"(VID={device.vendor_id:04X}, PID={device.product_id:04X})"
    return f"{known.name} {ids}" if known else ids


def match_device(
    devices: Iterable[HIDDeviceInfo],
    device_id: USBDeviceId | None = None,
    protocol: PairingProtocol | None = None,
) -> MatchedDevice:
    """Pick the first device to open and resolve the protocol it speaks.

    With ``device_id`` only that exact VID/PID qualifies and ``protocol`` must be
    given by the caller, since the registry cannot vouch for unknown IDs. Without
    it, the first device found in the registry wins and its protocol is adopted.
    """
    for device in devices:
        LOGGER.info("Considering device: %s", describe_device(device))
        known = lookup_known_device(device.vendor_id, device.product_id)

        if device_id is not None:
            if device.device_id != device_id:
                continue
            if protocol is None:
                raise ProtocolRequiredError(
                    f"Device {device_id} found, but no protocol specified. "
                    "Use --protocol to choose one."
                )
            return MatchedDevice(info=device, protocol=protocol, name=known.name if known else None)

        if known is not None:
            return MatchedDevice(info=device, protocol=known.protocol, name=known.name)

    if device_id is not None:
        raise NoSupportedDeviceFoundError(f"No device found with ID {device_id}.")
    raise NoSupportedDeviceFoundError(
        "No supported devices found. Connect a controller over USB or use --device to target one."
    )
