"""JSON Lines persistence for debug file records."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

from debugid.models import BreakpadDebugFileRecord, DebugFileRecord

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


def record_model(*, breakpad: bool = False) -> type[DebugFileRecord]:
    return BreakpadDebugFileRecord if breakpad else DebugFileRecord


def write_debug_files(path: Path, records: Iterable[DebugFileRecord]) -> int:
    """Write one sorted-key JSON object per line and return the record count."""
    count = 0
    with path.open("wb") as f:
        for rec in records:
            payload = rec.model_dump(mode="json")
            f.write(orjson.dumps(payload, option=orjson.OPT_SORT_KEYS))
            f.write(b"\n")
            count += 1
    return count


def load_debug_files(path: Path, *, breakpad: bool = False) -> list[DebugFileRecord]:
    """Load records from a JSONL file, skipping blank lines."""
    model = record_model(breakpad=breakpad)
    records: list[DebugFileRecord] = []
    with path.open("rb") as handle:
        for raw_line in handle:
            line = raw_line.strip()
            if line:
                records.append(model.model_validate(orjson.loads(line)))
    return records


__all__ = ["load_debug_files", "record_model", "write_debug_files"]
