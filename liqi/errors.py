"""
liqi — Error taxonomy

Every failure aborts decoding of the current frame. Lower-level exceptions
are re-raised as one of these with the original chained as __cause__.
"""

from __future__ import annotations


class LiqiError(Exception):
    """Base class for all decoding errors."""


class FormatError(LiqiError):
    """Malformed block structure, bad discriminator, truncated data."""


class InvalidMessageType(FormatError):
    """Leading byte of a frame is not a known message type."""

    def __init__(self, value: int | None):
        self.value = value
        if value is None:
            super().__init__("Empty frame")
        else:
            super().__init__(f"Invalid message type: {value}")


class NotFoundError(LiqiError):
    """Unknown schema name, service/method path or request id."""

    def __init__(self, message: str, name: str | int = ""):
        super().__init__(message)
        self.name = name


class EncodingError(LiqiError):
    """Invalid UTF-8 in a name field or invalid base64."""


class SchemaError(LiqiError):
    """Payload bytes do not satisfy the resolved schema."""
