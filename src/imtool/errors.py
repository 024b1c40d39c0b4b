"""Exception types raised by imtool."""

from __future__ import annotations


class ImtoolError(Exception):
    """Base class for every error imtool raises on purpose."""


class InvalidArgument(ImtoolError, ValueError):
    """Malformed or out-of-range caller input for an operation."""

    def __init__(self, operation: str, value: object, reason: str = "") -> None:
        self.operation = operation
        self.value = value
        self.reason = reason
        message = f"Invalid {operation}: {value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PaletteTooLarge(ImtoolError):
    """The palette cannot be addressed by the widest supported index."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Color table too large: {size} colors")


class ImageFormatError(ImtoolError, ValueError):
    """A file does not hold a well-formed image."""

    def __init__(self, source: object, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class CompressedFormatError(ImageFormatError):
    """A C6 payload is malformed."""
