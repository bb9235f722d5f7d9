"""Extract the literal variable name from a located call site.

Only a plain double-quoted literal that forms the whole argument is accepted:

    env::var("PORT")                 -> "PORT"
    env::var(
        "PORT",
    ).unwrap_or_default()            -> "PORT"
    env::var(key)                    -> None
    env::var(format!("{}_URL", p))   -> None
    env::var("A".to_owned() + b)     -> None
"""

from __future__ import annotations

import re
from enum import Enum, auto
from typing import Optional

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

# \x7F is the largest byte escape allowed in a str literal
_BYTE_ESCAPE_RE = re.compile(r"x([0-7][0-9a-fA-F])")
_UNICODE_ESCAPE_RE = re.compile(r"u\{([0-9a-fA-F][0-9a-fA-F_]{0,5})\}")


class _State(Enum):
    OPEN_PAREN = auto()
    QUOTE = auto()
    LITERAL = auto()
    ESCAPE = auto()
    CLOSE = auto()


def _decode_escape(text: str, i: int) -> tuple[Optional[str], int]:
    """Decode the escape whose letter is at ``text[i]``; returns (char, next index)."""
    ch = text[i]
    if ch in _ESCAPES:
        return _ESCAPES[ch], i + 1
    m = _BYTE_ESCAPE_RE.match(text, i) or _UNICODE_ESCAPE_RE.match(text, i)
    if m is None:
        return None, i
    code = int(m.group(1).replace("_", ""), 16)
    if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        return None, i
    return chr(code), m.end()


def extract_name(text: str, call_offset: int) -> Optional[str]:
    """Return the literal argument of the call starting at ``call_offset``.

    ``call_offset`` points just past a recognized prefix (see
    :attr:`autoenv.core.matcher.Candidate.end`). Returns None for anything that
    is not a non-empty string literal; this is never an error.
    """
    state = _State.OPEN_PAREN
    chars: list[str] = []
    trailing_comma = False
    i = call_offset
    while i < len(text):
        ch = text[i]
        if state is _State.ESCAPE:
            decoded, i = _decode_escape(text, i)
            if decoded is None:
                # unknown escape: the literal is not a plain name
                return None
            chars.append(decoded)
            state = _State.LITERAL
            continue
        i += 1
        if state is _State.OPEN_PAREN:
            if ch == "(":
                state = _State.QUOTE
            elif not ch.isspace():
                return None
        elif state is _State.QUOTE:
            if ch == '"':
                state = _State.LITERAL
            elif not ch.isspace():
                return None
        elif state is _State.LITERAL:
            if ch == "\\":
                state = _State.ESCAPE
            elif ch == '"':
                state = _State.CLOSE
            elif ch in "\r\n":
                # unterminated on this line
                return None
            else:
                chars.append(ch)
        else:
            if ch == ")":
                return "".join(chars) or None
            if ch == "," and not trailing_comma:
                trailing_comma = True
            elif not ch.isspace():
                return None
    return None
