"""Pydantic-based configuration schema and YAML loader.

A project may carry an ``autoenv.yaml`` next to its sources:

    output: .env.example
    merge_existing: true
    ignore: [HOME, PATH]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from autoenv.core.errors import ConfigError

DEFAULT_CONFIG_NAME = "autoenv.yaml"

SAMPLE_HEADER = "# autoenv configuration\n# output: generated file name, relative to the scanned directory\n\n"


class AutoEnvConfig(BaseModel):
    """Generator settings; everything optional with sensible defaults."""

    model_config = ConfigDict(extra="forbid")

    output: str = Field(".env", description="Name of the generated env file")
    merge_existing: bool = Field(True, description="Keep values already present in the output file")
    ignore: list[str] = Field(default_factory=list, description="Variable names never emitted")
    workers: Optional[int] = Field(None, ge=1, description="Scan threads (default: executor sizing)")


def load_yaml(path: Path) -> dict[str, Any]:
    try:
        obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError("Failed to read config file", path) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML config ({exc})", path) from exc
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ConfigError("Config must be a mapping", path)
    return obj


def load_config(path: Path) -> AutoEnvConfig:
    obj = load_yaml(path)
    try:
        return AutoEnvConfig(**obj)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config ({exc.error_count()} errors: {exc})", path) from exc


def resolve_config(config_path: Optional[Path], scan_root: Path) -> AutoEnvConfig:
    """Load configuration with fallback.

    Priority:
    1) Explicit ``config_path`` (must exist and be valid)
    2) ``<scan_root>/autoenv.yaml`` if present
    3) Defaults
    """
    if config_path is not None:
        return load_config(config_path)
    default = scan_root / DEFAULT_CONFIG_NAME
    if default.exists():
        return load_config(default)
    return AutoEnvConfig()


def dump_config(config: AutoEnvConfig) -> str:
    return yaml.safe_dump(config.model_dump(exclude_none=True), sort_keys=False)


def sample_config() -> str:
    cfg = AutoEnvConfig(ignore=["HOME", "PATH", "USER"])
    return SAMPLE_HEADER + dump_config(cfg)
