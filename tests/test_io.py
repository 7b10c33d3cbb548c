from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import orjson
import pytest
from pydantic import ValidationError

from debugid.code_id import CodeId
from debugid.debug_id import DebugId
from debugid.io import load_debug_files, write_debug_files
from debugid.models import BreakpadDebugFileRecord, DebugFileRecord

if TYPE_CHECKING:
    from pathlib import Path

UUID = uuid.UUID("dfb8e43a-f242-3d73-a453-aeb6a777ef75")


def test_write_then_load(tmp_path: Path) -> None:
    records = [
        DebugFileRecord(
            debug_id=DebugId.from_parts(UUID, 10),
            code_id=CodeId("5ab380779000"),
            debug_file="app.pdb",
        ),
        DebugFileRecord(debug_id=DebugId.from_pdb20(0x5AB38077, 1)),
    ]
    path = tmp_path / "debug_files.jsonl"

    count = write_debug_files(path, records)

    assert count == 2
    assert load_debug_files(path) == records


def test_written_lines_use_sorted_keys_and_text_ids(tmp_path: Path) -> None:
    path = tmp_path / "debug_files.jsonl"
    write_debug_files(path, [DebugFileRecord(debug_id=DebugId.from_parts(UUID, 10))])

    lines = path.read_bytes().splitlines()

    assert len(lines) == 1
    payload = orjson.loads(lines[0])
    assert list(payload) == sorted(payload)
    assert payload["debug_id"] == "dfb8e43a-f242-3d73-a453-aeb6a777ef75-a"


def test_breakpad_manifest(tmp_path: Path) -> None:
    path = tmp_path / "breakpad.jsonl"
    write_debug_files(
        path, [BreakpadDebugFileRecord(debug_id=DebugId.from_parts(UUID, 0))]
    )

    assert b"DFB8E43AF2423D73A453AEB6A777EF750" in path.read_bytes()
    assert load_debug_files(path, breakpad=True)[0].debug_id == (
        DebugId.from_parts(UUID, 0)
    )


def test_load_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "debug_files.jsonl"
    path.write_text(
        '\n{"debug_id": "dfb8e43a-f242-3d73-a453-aeb6a777ef75"}\n\n',
        encoding="utf-8",
    )

    assert [r.debug_id for r in load_debug_files(path)] == [DebugId.from_uuid(UUID)]


def test_load_raises_on_invalid_identifier(tmp_path: Path) -> None:
    path = tmp_path / "debug_files.jsonl"
    path.write_text('{"debug_id": "nope"}\n', encoding="utf-8")

    with pytest.raises(ValidationError):
        load_debug_files(path)
