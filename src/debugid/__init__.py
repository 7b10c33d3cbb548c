"""Identifiers that tie binaries to their debug information files.

`DebugId` identifies a debug information file (UUID or PDB 2.0 timestamp
plus an appendix); `CodeId` identifies the executable or library itself.
"""

from debugid.code_id import CodeId
from debugid.debug_id import (
    BREAKPAD_OPTIONS,
    GENERAL_OPTIONS,
    DebugId,
    DebugIdKind,
    ParseOptions,
    parse_debug_id,
)
from debugid.errors import (
    InvalidFormatError,
    InvalidLengthError,
    ParseCodeIdError,
    ParseDebugIdError,
)


def __getattr__(name: str) -> object:
    if name in {
        "BreakpadDebugFileRecord",
        "BreakpadDebugIdField",
        "CodeIdField",
        "DebugFileRecord",
        "DebugIdField",
    }:
        from debugid import models

        return getattr(models, name)

    if name in {"ValidationMessage", "ValidationResult", "validate_debug_files"}:
        from debugid import validation

        return getattr(validation, name)

    msg = f"module 'debugid' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "BREAKPAD_OPTIONS",
    "GENERAL_OPTIONS",
    "BreakpadDebugFileRecord",
    "BreakpadDebugIdField",
    "CodeId",
    "CodeIdField",
    "DebugFileRecord",
    "DebugId",
    "DebugIdField",
    "DebugIdKind",
    "InvalidFormatError",
    "InvalidLengthError",
    "ParseCodeIdError",
    "ParseDebugIdError",
    "ParseOptions",
    "ValidationMessage",
    "ValidationResult",
    "parse_debug_id",
    "validate_debug_files",
]
