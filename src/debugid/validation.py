"""Validation helpers for debug file manifests (JSON Lines)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from debugid.config import ValidationConfig, load_config
from debugid.io import record_model
from debugid.models import SCHEMA_VERSION, DebugFileRecord

if TYPE_CHECKING:
    from pathlib import Path

    from debugid.debug_id import DebugId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationMessage:
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)
    records: list[DebugFileRecord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_debug_files(
    path: Path,
    *,
    config: ValidationConfig | None = None,
    root: Path | None = None,
) -> ValidationResult:
    """Validate every record of a debug file manifest without raising.

    Args:
        path: JSON Lines manifest to validate
        config: Validation rules; takes precedence over ``root``
        root: Directory whose debugid.toml supplies the rules when no
            ``config`` is given

    Raises:
        ConfigError: ``root`` holds a debugid.toml that cannot be loaded.
    """
    if config is None:
        config = ValidationConfig() if root is None else load_config(root).validation
    result = ValidationResult()

    if not path.is_file():
        result.errors.append(
            ValidationMessage(path=path, message="Manifest file does not exist.")
        )
        return result

    try:
        handle = path.open("rb")
    except OSError as exc:
        logger.warning("Could not open manifest %s: %s", path, exc)
        result.errors.append(
            ValidationMessage(path=path, message=f"Failed to read file: {exc}.")
        )
        return result

    model = record_model(breakpad=config.breakpad)
    seen: dict[DebugId, int] = {}
    missing_schema_emitted = False
    with handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                result.errors.append(
                    ValidationMessage(
                        path=path, line=line_number, message=f"Invalid JSON: {exc}."
                    )
                )
                continue

            try:
                record = model.model_validate(data)
            except ValidationError as exc:
                result.errors.append(
                    ValidationMessage(
                        path=path,
                        line=line_number,
                        message=f"Schema validation failed: {exc}.",
                    )
                )
                continue

            schema_present = isinstance(data, dict) and "schema_version" in data
            if not schema_present:
                message = f"Missing schema_version; defaulted to {SCHEMA_VERSION}."
                if config.strict_schema_version:
                    result.errors.append(
                        ValidationMessage(path=path, line=line_number, message=message)
                    )
                    continue
                if not missing_schema_emitted:
                    result.warnings.append(
                        ValidationMessage(path=path, line=line_number, message=message)
                    )
                    missing_schema_emitted = True
            elif record.schema_version != SCHEMA_VERSION:
                result.errors.append(
                    ValidationMessage(
                        path=path,
                        line=line_number,
                        message=(
                            "Schema version mismatch: "
                            f"expected {SCHEMA_VERSION}, got {record.schema_version}."
                        ),
                    )
                )
                continue

            if config.require_code_id and (
                record.code_id is None or record.code_id.is_nil
            ):
                result.errors.append(
                    ValidationMessage(
                        path=path, line=line_number, message="Missing code_id."
                    )
                )
                continue

            first_line = seen.setdefault(record.debug_id, line_number)
            if first_line != line_number:
                target = result.warnings if config.allow_duplicates else result.errors
                target.append(
                    ValidationMessage(
                        path=path,
                        line=line_number,
                        message=(
                            f"Duplicate debug_id {record.debug_id}; "
                            f"first seen on line {first_line}."
                        ),
                    )
                )
                if not config.allow_duplicates:
                    continue

            result.records.append(record)

    logger.debug(
        "Validated %s: %d records, %d errors, %d warnings",
        path,
        len(result.records),
        len(result.errors),
        len(result.warnings),
    )
    return result


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_debug_files",
]
