from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

CONFIG_FILENAME = "debugid.toml"


class ValidationConfig(BaseModel):
    """Rules applied when validating debug file manifests."""

    model_config = ConfigDict(extra="forbid")

    breakpad: bool = Field(
        default=False,
        description="Parse debug identifiers with the Breakpad grammar",
    )
    require_code_id: bool = Field(
        default=False,
        description="Report records without a code identifier as errors",
    )
    strict_schema_version: bool = Field(
        default=False,
        description="Treat a missing schema_version as an error",
    )
    allow_duplicates: bool = Field(
        default=True,
        description="Report repeated debug identifiers as warnings, not errors",
    )


class DebugIdConfig(BaseModel):
    """Configuration for debug identifier tooling."""

    model_config = ConfigDict(extra="forbid")

    validation: ValidationConfig = Field(
        default_factory=ValidationConfig,
        description="Manifest validation rules",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> DebugIdConfig:
    """Load configuration from debugid.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return DebugIdConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return DebugIdConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DebugIdConfig",
    "ValidationConfig",
    "load_config",
]
