"""Service layer used by the CLI and the public API."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sixpair.core.errors import PairingVerificationError
from sixpair.core.model import HIDDeviceInfo, KnownDeviceRecord, MACAddress, PairingProtocol, USBDeviceId
from sixpair.core.registry import lookup_known_device
from sixpair.core.session import ControllerSession
from sixpair.transports.base import HIDTransport
from sixpair.transports.hidapi import HidapiTransport

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListedDevice:
    info: HIDDeviceInfo
    known: KnownDeviceRecord | None


@dataclass(frozen=True)
class ReadResult:
    controller: str
    protocol: PairingProtocol
    mac: MACAddress


@dataclass(frozen=True)
class PairResult:
    controller: str
    protocol: PairingProtocol
    mac: MACAddress
    previous_mac: MACAddress | None
    verified: bool


class PairingService:
    def __init__(self, *, transport: HIDTransport | None = None) -> None:
        self.transport = transport or HidapiTransport()

    def list_devices(self) -> list[ListedDevice]:
        return [
            ListedDevice(info=info, known=lookup_known_device(info.vendor_id, info.product_id))
            for info in self.transport.enumerate()
        ]

    def open_session(
        self,
        device_id: USBDeviceId | None = None,
        protocol: PairingProtocol | None = None,
    ) -> ControllerSession:
        return ControllerSession.open(self.transport, device_id=device_id, protocol=protocol)

    def read_mac(
        self,
        device_id: USBDeviceId | None = None,
        protocol: PairingProtocol | None = None,
        *,
        include_serial: bool = False,
    ) -> ReadResult:
        with self.open_session(device_id, protocol) as session:
            return ReadResult(
                controller=session.display_name(include_serial),
                protocol=session.protocol,
                mac=session.get_paired_mac(),
            )

    def pair(
        self,
        mac: MACAddress,
        device_id: USBDeviceId | None = None,
        protocol: PairingProtocol | None = None,
        *,
        verify: bool = True,
        include_serial: bool = False,
    ) -> PairResult:
        """Write ``mac`` as the paired host address, then optionally read it back."""
        with self.open_session(device_id, protocol) as session:
            controller = session.display_name(include_serial)
            previous = session.get_paired_mac() if verify else None
            if previous is not None:
                LOGGER.info("Current MAC address of %s: %s", controller, previous)

            session.set_paired_mac(mac)

            if verify:
                current = session.get_paired_mac()
                if current != mac:
                    raise PairingVerificationError(
                        f"Controller reports MAC address {current} after pairing, expected {mac}"
                    )

            return PairResult(
                controller=controller,
                protocol=session.protocol,
                mac=mac,
                previous_mac=previous,
                verified=verify,
            )
