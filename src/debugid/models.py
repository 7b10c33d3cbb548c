"""Pydantic field types and records that carry identifiers.

Identifiers serialize to their canonical text and validate by running the
matching parser on incoming strings; a parse failure surfaces as a
pydantic ``ValidationError``.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, PlainValidator

from debugid.code_id import CodeId
from debugid.debug_id import DebugId

# Schema version constant
SCHEMA_VERSION = 1


def _require_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        msg = f"{what} must be a string, got {type(value).__name__}"
        raise ValueError(msg)
    return value


def _validate_debug_id(value: Any) -> DebugId:
    if isinstance(value, DebugId):
        return value
    return DebugId.parse(_require_str(value, "debug identifier"))


def _validate_breakpad_id(value: Any) -> DebugId:
    if isinstance(value, DebugId):
        return value
    return DebugId.from_breakpad(_require_str(value, "debug identifier"))


def _validate_code_id(value: Any) -> CodeId:
    if isinstance(value, CodeId):
        return value
    return CodeId(_require_str(value, "code identifier"))


DebugIdField = Annotated[
    DebugId,
    PlainValidator(_validate_debug_id),
    PlainSerializer(DebugId.__str__, return_type=str),
]

BreakpadDebugIdField = Annotated[
    DebugId,
    PlainValidator(_validate_breakpad_id),
    PlainSerializer(DebugId.breakpad, return_type=str),
]

CodeIdField = Annotated[
    CodeId,
    PlainValidator(_validate_code_id),
    PlainSerializer(CodeId.__str__, return_type=str),
]


class DebugFileRecord(BaseModel):
    """A debug information file and the binary it belongs to."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int = Field(default=SCHEMA_VERSION)
    debug_id: DebugIdField
    code_id: CodeIdField | None = None
    debug_file: str | None = Field(
        default=None, description="Path or name of the debug information file"
    )
    code_file: str | None = Field(
        default=None, description="Path or name of the executable or library"
    )
    arch: str | None = Field(default=None, description="CPU architecture name")


class BreakpadDebugFileRecord(DebugFileRecord):
    """A debug file record whose identifier uses the Breakpad form."""

    debug_id: BreakpadDebugIdField


__all__ = [
    "SCHEMA_VERSION",
    "BreakpadDebugFileRecord",
    "BreakpadDebugIdField",
    "CodeIdField",
    "DebugFileRecord",
    "DebugIdField",
]
