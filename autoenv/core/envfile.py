"""Reading and writing line-oriented ``KEY=value`` files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .errors import EnvFileError

logger = logging.getLogger(__name__)


def parse_env(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines; comments, blanks and malformed lines are skipped.

    Keys and values are stripped of surrounding whitespace. A key repeated
    later in the file overrides the earlier value.
    """
    values: dict[str, str] = {}
    for ln in text.splitlines():
        ln = ln.strip()
        if not ln or ln.startswith("#"):
            continue
        key, sep, value = ln.partition("=")
        key = key.strip()
        if not sep or not key or any(c.isspace() for c in key):
            logger.debug("Skipping malformed env line: %r", ln)
            continue
        values[key] = value.strip()
    return values


def read_existing_env(path: Path) -> Optional[dict[str, str]]:
    """Load an existing env file, or None when there is none."""
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EnvFileError("Failed to read existing env file", path) from exc
    return parse_env(text)


def write_env_file(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise EnvFileError("Failed to write env file", path) from exc
