"""Locate and read Rust sources under a scan root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .errors import SourceReadError

logger = logging.getLogger(__name__)

SKIP_DIRS = {"target"}
SOURCE_SUFFIX = ".rs"


def _skipped(rel: Path) -> bool:
    # build output and hidden directories (.git, .cargo, ...)
    return any(part in SKIP_DIRS or part.startswith(".") for part in rel.parts[:-1])


def find_source_files(root: Path) -> list[Path]:
    if not root.is_dir():
        raise SourceReadError("Scan root is not a readable directory", root)
    files: list[Path] = []
    try:
        for p in root.rglob(f"*{SOURCE_SUFFIX}"):
            if not p.is_file() or _skipped(p.relative_to(root)):
                continue
            files.append(p)
    except OSError as exc:
        raise SourceReadError("Failed to walk directory", root) from exc
    files.sort()
    logger.debug("Found %d source files under %s", len(files), root)
    return files


def read_sources(paths: Iterable[Path]) -> list[tuple[Path, str]]:
    sources: list[tuple[Path, str]] = []
    for p in paths:
        try:
            text = p.read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            raise SourceReadError("Failed to read file", p) from exc
        sources.append((p, text))
    return sources
