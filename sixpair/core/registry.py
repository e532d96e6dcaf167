"""Static table of supported Sony controllers."""

from __future__ import annotations

from sixpair.core.model import KnownDeviceRecord, PairingProtocol, USBDeviceId

SONY_VENDOR_ID = 0x054C

KNOWN_DEVICES: tuple[KnownDeviceRecord, ...] = (
    KnownDeviceRecord(
        name="Sony PlayStation 3 Controller",
        id=USBDeviceId(vendor=SONY_VENDOR_ID, product=0x0268),
        protocol=PairingProtocol.SIXAXIS,
    ),
    KnownDeviceRecord(
        name="Sony Move Motion Controller",
        id=USBDeviceId(vendor=SONY_VENDOR_ID, product=0x042F),
        protocol=PairingProtocol.SIXAXIS,
    ),
    KnownDeviceRecord(
        name="Sony DualShock 4 Controller",
        id=USBDeviceId(vendor=SONY_VENDOR_ID, product=0x05C4),
        protocol=PairingProtocol.DUALSHOCK4,
    ),
)


def lookup_known_device(vendor_id: int, product_id: int) -> KnownDeviceRecord | None:
    for record in KNOWN_DEVICES:
        if record.id.vendor == vendor_id and record.id.product == product_id:
            return record
    return None
