"""Coarse detection of environment-variable call sites.

All recognized prefixes are folded into one compiled alternation so a file is
scanned exactly once regardless of how many call forms are supported. Matches
are leftmost and non-overlapping: ``std::env::var(`` is reported once as
``STD_VAR`` and never again as ``ENV_VAR`` or ``VAR``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .types import CallPattern


def _build_pattern() -> re.Pattern[str]:
    # Longest first so that `var_os` wins over `var` at the same position.
    prefixes = sorted((p.value for p in CallPattern), key=len, reverse=True)
    alternation = "|".join(re.escape(p) for p in prefixes)
    # Not part of a longer identifier or a method call, and followed by `(`.
    return re.compile(rf"(?<![\w.])(?:{alternation})(?=\s*\()")


CALL_RE = _build_pattern()


@dataclass(frozen=True, slots=True)
class Candidate:
    offset: int
    kind: CallPattern

    @property
    def end(self) -> int:
        """Offset just past the matched prefix."""
        return self.offset + len(self.kind.value)


def has_candidates(text: str) -> bool:
    return CALL_RE.search(text) is not None


def find_candidates(text: str) -> list[Candidate]:
    """Return every call-site prefix in ``text`` in ascending offset order."""
    return [Candidate(m.start(), CallPattern(m.group())) for m in CALL_RE.finditer(text)]
