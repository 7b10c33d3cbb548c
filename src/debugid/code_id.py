"""Code identifiers for executables and libraries.

A code identifier is a platform-defined, variable-length hex string: the
GNU build id on ELF, the UUID on Mach-O, or timestamp plus image size on
PE. Text input is normalized by dropping everything that is not an ASCII
hex digit and lowercasing the rest, so any text yields a code identifier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from debugid.errors import ParseCodeIdError

_NON_HEX = re.compile(r"[^0-9a-fA-F]+")
_HEX_PAIRS = re.compile(r"(?:[0-9a-fA-F]{2})*")


def normalize_code_id(text: str) -> str:
    """Drop non-hex characters and lowercase the remaining digits.

    Examples:
        >>> normalize_code_id("5AB380779000-")
        '5ab380779000'
    """
    return _NON_HEX.sub("", text).lower()


@dataclass(frozen=True, order=True, repr=False)
class CodeId:
    """Normalized code identifier; the empty string is the nil value."""

    value: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", normalize_code_id(self.value))

    @classmethod
    def from_text(cls, text: str) -> CodeId:
        return cls(text)

    @classmethod
    def from_binary(cls, data: bytes) -> CodeId:
        """Render each byte as two lowercase hex digits."""
        return cls(bytes(data).hex())

    @classmethod
    def parse_hex(cls, text: str) -> CodeId:
        """Strictly parse an even-length hex string.

        Raises:
            ParseCodeIdError: ``text`` contains non-hex characters or an odd
                number of digits.
        """
        if not _HEX_PAIRS.fullmatch(text):
            raise ParseCodeIdError
        return cls(text)

    @property
    def is_nil(self) -> bool:
        return not self.value

    def to_bytes(self) -> bytes:
        if len(self.value) % 2:
            raise ParseCodeIdError
        return bytes.fromhex(self.value)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"CodeId({self.value!r})"


__all__ = ["CodeId", "normalize_code_id"]
