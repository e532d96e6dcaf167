"""Domain-specific errors for sixpair."""

from __future__ import annotations


class SixpairError(Exception):
    """Base error for sixpair."""


class MacAddressError(SixpairError, ValueError):
    """Raised when a MAC address string cannot be parsed."""


class MalformedAddressError(MacAddressError):
    """Raised when a MAC address does not have the expected number of segments."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Invalid number of bytes. Expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class InvalidByteError(MacAddressError):
    """Raised when one MAC address segment is not a hex byte."""

    def __init__(self, position: int, text: str) -> None:
        super().__init__(f"Invalid character at position #{position} ('{text}')")
        self.position = position
        self.text = text


class DeviceSelectionError(SixpairError):
    """Raised when device matching cannot resolve a single target."""


class ProtocolRequiredError(DeviceSelectionError):
    """Raised when an explicit device ID is given without a protocol."""


class NoSupportedDeviceFoundError(DeviceSelectionError):
    """Raised when no enumerated device matches the registry or the filter."""


class TransportError(SixpairError):
    """Base transport error."""


class TransportOpenError(TransportError):
    """Raised on HID enumeration or open failures."""


class TransportIOError(TransportError):
    """Raised when a feature report exchange fails."""


class ResponseError(SixpairError):
    """Base error for malformed device replies."""


class UnexpectedResponseLengthError(ResponseError):
    """Raised when a feature report reply has the wrong size."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Unexpected response length: expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class UnexpectedResponseHeaderError(ResponseError):
    """Raised when a feature report reply starts with the wrong header bytes."""

    def __init__(self, expected: bytes, actual: bytes) -> None:
        super().__init__(
            f"Unexpected response header: expected {expected.hex(' ')}, got {actual.hex(' ')}"
        )
        self.expected = expected
        self.actual = actual


class SessionClosedError(SixpairError):
    """Raised when a closed controller session is used."""


class PairingVerificationError(SixpairError):
    """Raised when the MAC read back after pairing differs from the one written."""


class ConfigError(SixpairError):
    """Base configuration error."""


class ConfigLoadError(ConfigError):
    """Raised when the configuration file cannot be read."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration does not conform to schema or semantics."""
