from __future__ import annotations

from pathlib import Path
from typing import Optional


class AutoEnvError(Exception):
    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(f"{message}: {path}" if path is not None else message)
        self.path = path


class SourceReadError(AutoEnvError):
    """Scan root or a source file could not be read."""


class EnvFileError(AutoEnvError):
    """Existing output file unreadable, or output could not be written."""


class ConfigError(AutoEnvError):
    """Explicitly provided configuration is malformed."""
