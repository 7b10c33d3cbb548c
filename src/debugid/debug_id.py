"""Debug identifiers for debug information files.

A debug identifier pairs a 128-bit UUID with a 32-bit appendix. On Windows
the appendix is the PDB age, an incrementing build counter; on every other
platform it is zero. The oldest PDB format (PDB 2.0) has no GUID and uses a
32-bit timestamp in place of the UUID.

Two textual grammars are recognized by the same routine:

- the general form, e.g. ``dfb8e43a-f242-3d73-a453-aeb6a777ef75-a``, with
  or without hyphens; characters past the eighth appendix digit are ignored.
- the Breakpad form, e.g. ``DFB8E43AF2423D73A453AEB6A777EF75a``, which
  forbids hyphens and always carries the appendix.

Examples:
    >>> debug_id = DebugId.parse("dfb8e43a-f242-3d73-a453-aeb6a777ef75-a")
    >>> str(debug_id)
    'dfb8e43a-f242-3d73-a453-aeb6a777ef75-a'
    >>> debug_id.breakpad()
    'DFB8E43AF2423D73A453AEB6A777EF75a'
"""

from __future__ import annotations

import logging
import re
import struct
import uuid
from dataclasses import dataclass
from enum import IntEnum

from debugid.errors import InvalidFormatError, InvalidLengthError

logger = logging.getLogger(__name__)

MAX_U32 = 0xFFFFFFFF

# Fixed binary record: payload, little-endian appendix, 12 reserved bytes.
# The last reserved byte holds the kind tag; the rest are always zero.
RECORD_SIZE = 32
_RECORD = struct.Struct("<16sI11sB")
_RESERVED = bytes(11)

_HEX = re.compile(r"[0-9a-fA-F]+")
_HYPHENATED_UUID = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_SIMPLE_UUID = re.compile(r"[0-9a-fA-F]{32}")

_HYPHENATED_UUID_LEN = 36
_SIMPLE_UUID_LEN = 32
_TIMESTAMP_LEN = 8
_MAX_APPENDIX_LEN = 8


class DebugIdKind(IntEnum):
    """Which value occupies the identifier payload."""

    UUID = 0
    PDB20 = 1


@dataclass(frozen=True)
class ParseOptions:
    """Switches selecting one of the accepted textual grammars."""

    allow_hyphens: bool
    require_appendix: bool
    allow_tail: bool


GENERAL_OPTIONS = ParseOptions(
    allow_hyphens=True, require_appendix=False, allow_tail=True
)
BREAKPAD_OPTIONS = ParseOptions(
    allow_hyphens=False, require_appendix=True, allow_tail=False
)


def _check_u32(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"{name} must be an int, got {type(value).__name__}"
        raise TypeError(msg)
    if not 0 <= value <= MAX_U32:
        msg = f"{name} must fit in an unsigned 32-bit integer, got {value}"
        raise ValueError(msg)


def _parse_hex_u32(text: str) -> int | None:
    # int(..., 16) also accepts signs, whitespace, underscores and 0x.
    if not _HEX.fullmatch(text):
        return None
    value = int(text, 16)
    if value > MAX_U32:
        return None
    return value


@dataclass(frozen=True, order=True, repr=False)
class DebugId:
    """Unique identifier for a debug information file.

    Equality, ordering and hashing follow ``(kind, payload, appendix)``.
    For PDB 2.0 identifiers the payload holds the big-endian timestamp in
    its first four bytes and zeros elsewhere.
    """

    kind: DebugIdKind = DebugIdKind.UUID
    payload: bytes = bytes(16)
    appendix: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", DebugIdKind(self.kind))
        if not isinstance(self.payload, (bytes, bytearray)):
            msg = f"payload must be bytes, got {type(self.payload).__name__}"
            raise TypeError(msg)
        object.__setattr__(self, "payload", bytes(self.payload))
        if len(self.payload) != 16:
            msg = f"debug identifier payload must be 16 bytes, got {len(self.payload)}"
            raise InvalidLengthError(msg)
        _check_u32("appendix", self.appendix)
        if self.kind is DebugIdKind.PDB20 and any(self.payload[4:]):
            msg = "PDB 2.0 identifiers only carry a 4-byte timestamp"
            raise InvalidFormatError(msg)

    @classmethod
    def nil(cls) -> DebugId:
        """Return the all-zero UUID identifier with appendix 0."""
        return cls()

    @classmethod
    def from_uuid(cls, value: uuid.UUID) -> DebugId:
        return cls.from_parts(value, 0)

    @classmethod
    def from_parts(
        cls, value: uuid.UUID | bytes | bytearray, appendix: int
    ) -> DebugId:
        """Construct an identifier from a UUID (or its 16 bytes) and appendix."""
        if isinstance(value, uuid.UUID):
            raw = value.bytes
        elif isinstance(value, (bytes, bytearray)):
            raw = bytes(value)
        else:
            msg = f"expected a UUID or 16 bytes, got {type(value).__name__}"
            raise TypeError(msg)
        return cls(kind=DebugIdKind.UUID, payload=raw, appendix=appendix)

    @classmethod
    def from_pdb20(cls, timestamp: int, appendix: int) -> DebugId:
        """Construct a PDB 2.0 identifier from its timestamp and age."""
        _check_u32("timestamp", timestamp)
        payload = timestamp.to_bytes(4, "big") + bytes(12)
        return cls(kind=DebugIdKind.PDB20, payload=payload, appendix=appendix)

    @classmethod
    def from_guid_age(cls, guid: bytes, age: int) -> DebugId:
        """Construct an identifier from a Microsoft little-endian GUID and age.

        The first three GUID fields are stored little-endian on Windows and
        are swapped into the big-endian UUID byte order.
        """
        if len(guid) != 16:
            msg = f"GUID must be 16 bytes, got {len(guid)}"
            raise InvalidLengthError(msg)
        return cls.from_parts(uuid.UUID(bytes_le=bytes(guid)), age)

    @classmethod
    def parse(cls, text: str) -> DebugId:
        """Parse the general textual form."""
        return parse_debug_id(text, GENERAL_OPTIONS)

    @classmethod
    def from_breakpad(cls, text: str) -> DebugId:
        """Parse a Breakpad identifier."""
        return parse_debug_id(text, BREAKPAD_OPTIONS)

    @classmethod
    def from_record(cls, data: bytes) -> DebugId:
        """Decode the fixed 32-byte binary record produced by `to_record`."""
        if len(data) != RECORD_SIZE:
            msg = f"debug identifier record must be {RECORD_SIZE} bytes, got {len(data)}"
            raise InvalidLengthError(msg)
        payload, appendix, reserved, tag = _RECORD.unpack(data)
        if reserved != _RESERVED:
            msg = "reserved bytes of a debug identifier record must be zero"
            raise InvalidFormatError(msg)
        try:
            kind = DebugIdKind(tag)
        except ValueError as exc:
            msg = f"unknown debug identifier kind {tag}"
            raise InvalidFormatError(msg) from exc
        return cls(kind=kind, payload=payload, appendix=appendix)

    @property
    def uuid(self) -> uuid.UUID:
        """The payload viewed as a UUID."""
        return uuid.UUID(bytes=self.payload)

    @property
    def timestamp(self) -> int | None:
        """The PDB 2.0 timestamp, or ``None`` for UUID identifiers."""
        if self.kind is DebugIdKind.PDB20:
            return int.from_bytes(self.payload[:4], "big")
        return None

    @property
    def is_pdb20(self) -> bool:
        return self.kind is DebugIdKind.PDB20

    @property
    def is_nil(self) -> bool:
        return self == DebugId()

    def to_record(self) -> bytes:
        return _RECORD.pack(self.payload, self.appendix, _RESERVED, int(self.kind))

    def breakpad(self) -> str:
        """Render the Breakpad form, which always includes the appendix."""
        if self.kind is DebugIdKind.PDB20:
            return f"{self.timestamp:08X}{self.appendix:x}"
        return f"{self.uuid.hex.upper()}{self.appendix:x}"

    def __str__(self) -> str:
        if self.kind is DebugIdKind.PDB20:
            text = f"{self.timestamp:08X}"
        else:
            text = str(self.uuid)
        if self.appendix:
            text += f"-{self.appendix:x}"
        return text

    def __repr__(self) -> str:
        if self.kind is DebugIdKind.PDB20:
            return f"DebugId(timestamp={self.timestamp}, appendix={self.appendix})"
        return f"DebugId(uuid={str(self.uuid)!r}, appendix={self.appendix})"


def _reject(text: str, reason: str) -> None:
    logger.debug("Rejected debug identifier %r: %s", text, reason)


def _recognize(text: str, options: ParseOptions) -> DebugId | None:
    if not text.isascii():
        return _reject(text, "non-ASCII input")

    hyphenated = text[_TIMESTAMP_LEN : _TIMESTAMP_LEN + 1] == "-"
    if hyphenated and not options.allow_hyphens:
        return _reject(text, "hyphens are not allowed")

    # PDB 2.0: 8 timestamp digits, optional hyphen, 1-8 appendix digits.
    # A UUID needs at least 32 characters, so the windows never overlap.
    if len(text) == _TIMESTAMP_LEN and not options.require_appendix:
        timestamp = _parse_hex_u32(text)
        if timestamp is None:
            return _reject(text, "invalid PDB 2.0 timestamp")
        return DebugId.from_pdb20(timestamp, 0)

    min_len, max_len = (10, 17) if hyphenated else (9, 16)
    if min_len <= len(text) <= max_len:
        timestamp = _parse_hex_u32(text[:_TIMESTAMP_LEN])
        appendix = _parse_hex_u32(text[min_len - 1 :])
        if timestamp is None or appendix is None:
            return _reject(text, "invalid PDB 2.0 timestamp or age")
        return DebugId.from_pdb20(timestamp, appendix)

    if hyphenated:
        uuid_len, uuid_pattern = _HYPHENATED_UUID_LEN, _HYPHENATED_UUID
    else:
        uuid_len, uuid_pattern = _SIMPLE_UUID_LEN, _SIMPLE_UUID
    uuid_text = text[:uuid_len]
    if not uuid_pattern.fullmatch(uuid_text):
        return _reject(text, "invalid UUID")
    value = uuid.UUID(uuid_text)

    rest = text[uuid_len:]
    if not rest:
        if options.require_appendix:
            return _reject(text, "missing appendix")
        return DebugId.from_parts(value, 0)

    # The appendix is separated by a hyphen iff the UUID is hyphenated.
    if hyphenated != rest.startswith("-"):
        return _reject(text, "appendix separator does not match UUID form")
    if hyphenated:
        rest = rest[1:]

    if options.allow_tail and len(rest) > _MAX_APPENDIX_LEN:
        rest = rest[:_MAX_APPENDIX_LEN]
    appendix = _parse_hex_u32(rest)
    if appendix is None:
        return _reject(text, "invalid appendix")
    return DebugId.from_parts(value, appendix)


def parse_debug_id(text: str, options: ParseOptions = GENERAL_OPTIONS) -> DebugId:
    """Parse ``text`` under the grammar selected by ``options``.

    Raises:
        InvalidFormatError: ``text`` matches no accepted layout.
    """
    result = _recognize(text, options)
    if result is None:
        raise InvalidFormatError
    return result


__all__ = [
    "BREAKPAD_OPTIONS",
    "GENERAL_OPTIONS",
    "MAX_U32",
    "RECORD_SIZE",
    "DebugId",
    "DebugIdKind",
    "ParseOptions",
    "parse_debug_id",
]
