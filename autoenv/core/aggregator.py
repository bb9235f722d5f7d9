"""Per-file scanning and parallel aggregation into one VariableSet.

Each worker scans its own ``(path, text)`` pair and returns a local list of
occurrences; the calling thread is the only writer of the resulting
VariableSet, so no locking is needed.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from .extractor import extract_name
from .matcher import find_candidates, has_candidates
from .types import Occurrence, VariableSet

logger = logging.getLogger(__name__)

SourceFile = Tuple[Union[str, Path], str]


def _char_literal_end(s: str, i: int) -> Optional[int]:
    """Index just past a char literal opening at ``s[i]``, or None for a lifetime."""
    if s.startswith("\\", i + 1):
        # '\n', '\'', '\x41', '\u{1F600}'
        close = s.find("'", i + 3)
        return close + 1 if close != -1 else None
    if s.startswith("'", i + 2):
        return i + 3
    return None


def _is_code(line_prefix: str) -> bool:
    """False when the end of ``line_prefix`` sits inside a ``//`` comment or a string."""
    in_str = False
    escaped = False
    prev = ""
    i = 0
    while i < len(line_prefix):
        ch = line_prefix[i]
        i += 1
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == "'":
            end = _char_literal_end(line_prefix, i - 1)
            if end is not None:
                i = end
                prev = ""
                continue
        if ch == '"':
            in_str = True
            prev = ""
            continue
        if ch == "/" and prev == "/":
            return False
        prev = ch
    return not in_str


def scan_text(path: Union[str, Path], text: str) -> list[Occurrence]:
    """Return every literal env-var read in ``text``, in source order."""
    if not has_candidates(text):
        return []
    candidates = find_candidates(text)
    path = Path(path)
    found: list[Occurrence] = []
    line = 1
    pos = 0
    for cand in candidates:
        line += text.count("\n", pos, cand.offset)
        pos = cand.offset
        line_start = text.rfind("\n", 0, cand.offset) + 1
        if not _is_code(text[line_start : cand.offset]):
            continue
        name = extract_name(text, cand.end)
        if name is not None:
            found.append(Occurrence(name=name, path=path, line=line))
    return found


def _scan_pair(item: SourceFile) -> list[Occurrence]:
    path, text = item
    return scan_text(path, text)


def aggregate(files: Iterable[SourceFile], workers: Optional[int] = None) -> VariableSet:
    """Scan all files concurrently and union the discovered names.

    The resulting name set does not depend on file order or repetition. Which
    occurrence is kept as "first" for a name seen in several files is not
    specified.
    """
    items = list(files)
    variables = VariableSet()
    if not items:
        return variables
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for occs in pool.map(_scan_pair, items):
            variables.update(occs)
    logger.debug("Scanned %d files, %d distinct variables", len(items), len(variables))
    return variables


def filter_ignored(variables: VariableSet, ignore: Iterable[str]) -> VariableSet:
    """Drop every name in ``ignore`` (exact, case-sensitive match)."""
    skip = set(ignore)
    return VariableSet({k: v for k, v in variables.occurrences.items() if k not in skip})
