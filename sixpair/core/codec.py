"""Feature report layouts and MAC encode/decode for each pairing protocol.

Sixaxis (PS3, Move) keeps the MAC in display order behind a two byte
``F5 00`` header, using the same report to read and write. DualShock 4 reads
report 0x12 and writes report 0x13, and stores the MAC least significant
byte first.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sixpair.core.errors import UnexpectedResponseHeaderError, UnexpectedResponseLengthError
from sixpair.core.model import MACAddress, PairingProtocol

MAC_LENGTH = 6


@dataclass(frozen=True)
class ReportLayout:
    report_id: int
    length: int
    mac_offset: int
    reversed_mac: bool = False
    header: bytes = b""

    def mac_slice(self) -> slice:
        return slice(self.mac_offset, self.mac_offset + MAC_LENGTH)


@dataclass(frozen=True)
class ProtocolLayouts:
    get: ReportLayout
    set: ReportLayout


_SIXAXIS = ProtocolLayouts(
    get=ReportLayout(report_id=0xF5, length=8, mac_offset=2, header=b"\xf5\x00"),
    set=ReportLayout(report_id=0xF5, length=8, mac_offset=2),
)

# Set bytes 7..23 hold an optional link key; left zeroed.
_DUALSHOCK4 = ProtocolLayouts(
    get=ReportLayout(report_id=0x12, length=16, mac_offset=10, reversed_mac=True),
    set=ReportLayout(report_id=0x13, length=23, mac_offset=1, reversed_mac=True),
)


def layouts_for(protocol: PairingProtocol) -> ProtocolLayouts:
    match protocol:
        case PairingProtocol.SIXAXIS:
            return _SIXAXIS
        case PairingProtocol.DUALSHOCK4:
            return _DUALSHOCK4
        case _:
            raise ValueError(f"Unsupported pairing protocol {protocol!r}")


def get_request(protocol: PairingProtocol) -> bytearray:
    """Return a zeroed get-report buffer with the report ID pre-set."""
    layout = layouts_for(protocol).get
    request = bytearray(layout.length)
    request[0] = layout.report_id
    return request


def decode(protocol: PairingProtocol, buffer: bytes | Sequence[int]) -> MACAddress:
    layout = layouts_for(protocol).get
    data = bytes(buffer)
    if len(data) != layout.length:
        raise UnexpectedResponseLengthError(expected=layout.length, actual=len(data))
    if layout.header and data[: len(layout.header)] != layout.header:
        raise UnexpectedResponseHeaderError(
            expected=layout.header, actual=data[: len(layout.header)]
        )

    octets = data[layout.mac_slice()]
    if layout.reversed_mac:
        octets = octets[::-1]
    return MACAddress.from_bytes(octets)


def encode(protocol: PairingProtocol, mac: MACAddress) -> bytes:
    layout = layouts_for(protocol).set
    octets = bytes(mac)
    if layout.reversed_mac:
        octets = octets[::-1]

    report = bytearray(layout.length)
    report[0] = layout.report_id
    report[layout.mac_slice()] = octets
    return bytes(report)
