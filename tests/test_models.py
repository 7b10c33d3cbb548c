from __future__ import annotations

import uuid

import orjson
import pytest
from pydantic import BaseModel, ValidationError

from debugid.code_id import CodeId
from debugid.debug_id import DebugId
from debugid.models import (
    SCHEMA_VERSION,
    BreakpadDebugFileRecord,
    DebugFileRecord,
    DebugIdField,
)

UUID = uuid.UUID("dfb8e43a-f242-3d73-a453-aeb6a777ef75")


def test_record_parses_general_form() -> None:
    record = DebugFileRecord.model_validate(
        {
            "debug_id": "DFB8E43A-F242-3D73-A453-AEB6A777EF75-A",
            "code_id": "5AB38077-9000",
            "debug_file": "app.pdb",
        }
    )

    assert record.schema_version == SCHEMA_VERSION
    assert record.debug_id == DebugId.from_parts(UUID, 10)
    assert record.code_id == CodeId("5ab380779000")
    assert record.code_file is None


def test_record_serializes_canonical_text() -> None:
    record = DebugFileRecord(
        debug_id=DebugId.from_parts(UUID, 10),
        code_id=CodeId.from_binary(b"\xde\xad"),
        arch="x86_64",
    )

    assert record.model_dump() == {
        "schema_version": SCHEMA_VERSION,
        "debug_id": "dfb8e43a-f242-3d73-a453-aeb6a777ef75-a",
        "code_id": "dead",
        "debug_file": None,
        "code_file": None,
        "arch": "x86_64",
    }
    assert orjson.loads(record.model_dump_json())["debug_id"] == (
        "dfb8e43a-f242-3d73-a453-aeb6a777ef75-a"
    )


def test_record_json_round_trip() -> None:
    record = DebugFileRecord(debug_id=DebugId.from_pdb20(0x5AB38077, 1))

    restored = DebugFileRecord.model_validate_json(record.model_dump_json())

    assert restored == record
    assert restored.debug_id.is_pdb20


@pytest.mark.parametrize(
    "value", ["", "dfb8e43a-f242-3d73-a453-aeb6a777ef7", 42, None, b"\x00" * 16]
)
def test_record_rejects_invalid_debug_id(value: object) -> None:
    with pytest.raises(ValidationError):
        DebugFileRecord.model_validate({"debug_id": value})


def test_invalid_debug_id_reports_value_error() -> None:
    with pytest.raises(ValidationError, match="invalid debug identifier"):
        DebugFileRecord.model_validate({"debug_id": "bogus"})


def test_record_forbids_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        DebugFileRecord.model_validate(
            {"debug_id": str(DebugId.from_parts(UUID, 0)), "bogus": True}
        )


def test_record_is_frozen_and_hashable() -> None:
    record = DebugFileRecord(debug_id=DebugId.from_parts(UUID, 1))

    with pytest.raises(ValidationError):
        record.arch = "arm64"  # type: ignore[misc]
    assert len({record, DebugFileRecord(debug_id=DebugId.from_parts(UUID, 1))}) == 1


def test_breakpad_record_uses_breakpad_grammar() -> None:
    record = BreakpadDebugFileRecord.model_validate(
        {"debug_id": "DFB8E43AF2423D73A453AEB6A777EF750"}
    )

    assert record.debug_id == DebugId.from_parts(UUID, 0)
    assert record.model_dump()["debug_id"] == "DFB8E43AF2423D73A453AEB6A777EF750"

    with pytest.raises(ValidationError):
        BreakpadDebugFileRecord.model_validate(
            {"debug_id": "dfb8e43a-f242-3d73-a453-aeb6a777ef75"}
        )


def test_field_type_in_custom_model() -> None:
    class Module(BaseModel):
        name: str
        debug_id: DebugIdField

    module = Module(name="libc.so", debug_id="dfb8e43af2423d73a453aeb6a777ef75")

    assert module.debug_id == DebugId.from_uuid(UUID)
    assert module.model_dump(mode="json") == {
        "name": "libc.so",
        "debug_id": "dfb8e43a-f242-3d73-a453-aeb6a777ef75",
    }
