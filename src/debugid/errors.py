"""Exceptions raised when identifiers cannot be constructed or parsed."""

from __future__ import annotations


class ParseDebugIdError(ValueError):
    """Raised when input does not form a valid debug identifier."""

    def __init__(self, message: str = "invalid debug identifier") -> None:
        super().__init__(message)


class InvalidLengthError(ParseDebugIdError):
    """Raw bytes have the wrong length for the requested identifier layout."""


class InvalidFormatError(ParseDebugIdError):
    """Text or a binary record matches none of the recognized layouts."""


class ParseCodeIdError(ValueError):
    """Raised when a code identifier is not an even-length hex string."""

    def __init__(self, message: str = "invalid code identifier") -> None:
        super().__init__(message)


__all__ = [
    "InvalidFormatError",
    "InvalidLengthError",
    "ParseCodeIdError",
    "ParseDebugIdError",
]
