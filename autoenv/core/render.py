"""Merge discovered names with an existing env file and render sorted output."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

HEADER = [
    "# Auto-generated environment variables",
    "# Add your values below",
    "",
]


def render(
    discovered: Iterable[str],
    existing: Optional[Mapping[str, str]] = None,
    merge: bool = True,
) -> list[str]:
    """Render header and one ``KEY=value`` line per key, keys ascending.

    With ``merge`` the keys of ``existing`` are kept and their values win;
    without it ``existing`` is ignored and every value is empty.
    """
    keep = existing if merge and existing is not None else {}
    keys = set(discovered) | set(keep)
    lines = list(HEADER)
    for key in sorted(keys):
        lines.append(f"{key}={keep.get(key, '')}")
    return lines


def render_text(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"
