"""Core data models used across matcher, codec, session, and CLI."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from sixpair.core.errors import InvalidByteError, MalformedAddressError

_MAC_SEGMENTS = 6
_HEX_BYTE_RE = re.compile(r"[0-9A-Fa-f]{1,2}")
_USB_ID_RE = re.compile(r"(?:0[xX])?([0-9A-Fa-f]{1,4}):(?:0[xX])?([0-9A-Fa-f]{1,4})")


@dataclass(frozen=True)
class MACAddress:
    """A 6-byte hardware address, most significant byte first."""

    octets: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "octets", bytes(self.octets))
        if len(self.octets) != _MAC_SEGMENTS:
            raise ValueError(f"MAC address must be {_MAC_SEGMENTS} bytes, got {len(self.octets)}")

    @classmethod
    def from_bytes(cls, data: Iterable[int]) -> MACAddress:
        return cls(octets=bytes(data))

    @classmethod
    def parse(cls, text: str) -> MACAddress:
        """Parse ``xx:xx:xx:xx:xx:xx`` (case-insensitive) into a MACAddress."""
        segments = text.strip().split(":")
        if len(segments) != _MAC_SEGMENTS:
            raise MalformedAddressError(expected=_MAC_SEGMENTS, actual=len(segments))

        values: list[int] = []
        for position, segment in enumerate(segments, start=1):
            if not _HEX_BYTE_RE.fullmatch(segment):
                raise InvalidByteError(position=position, text=segment)
            values.append(int(segment, 16))
        return cls(octets=bytes(values))

    def format(self) -> str:
        return ":".join(f"{octet:02X}" for octet in self.octets)

    def __bytes__(self) -> bytes:
        return self.octets

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class USBDeviceId:
    vendor: int
    product: int

    def __post_init__(self) -> None:
        for label, value in (("vendor", self.vendor), ("product", self.product)):
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f"USB {label} ID must be a 16-bit value, got {value!r}")

    @classmethod
    def parse(cls, text: str) -> USBDeviceId:
        """Parse a ``VVVV:PPPP`` hex pair as printed by lsusb."""
        match = _USB_ID_RE.fullmatch(text.strip())
        if not match:
            raise ValueError(f"Invalid USB device ID '{text}'. Expected VVVV:PPPP in hex")
        return cls(vendor=int(match.group(1), 16), product=int(match.group(2), 16))

    def __str__(self) -> str:
        return f"{self.vendor:04X}:{self.product:04X}"


class PairingProtocol(str, Enum):
    """Feature report protocol spoken by a controller family."""

    SIXAXIS = "sixaxis"
    DUALSHOCK4 = "dualshock4"


@dataclass(frozen=True)
class KnownDeviceRecord:
    name: str
    id: USBDeviceId
    protocol: PairingProtocol


@dataclass(frozen=True)
class HIDDeviceInfo:
    vendor_id: int
    product_id: int
    path: bytes | str | None = None
    manufacturer: str | None = None
    product: str | None = None
    serial_number: str | None = None

    @property
    def device_id(self) -> USBDeviceId:
        return USBDeviceId(vendor=self.vendor_id, product=self.product_id)


@dataclass(frozen=True)
class MatchedDevice:
    info: HIDDeviceInfo
    protocol: PairingProtocol
    name: str | None = None
