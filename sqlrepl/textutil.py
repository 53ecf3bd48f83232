"""Small text helpers for terminal output."""

from __future__ import annotations

import os
import re

LINE_TERM = "\r\n" if os.name == "nt" else "\n"

_ANSI_RE = re.compile(r"\x1b[\[0-9]+(?:[:;][0-9]+)*m")
_RESET = "\x1b[0m"


def is_empty(s: str) -> bool:
    """Return True when ``s`` has no printable, non-space character."""
    return not any(ch.isprintable() and not ch.isspace() for ch in s)


def last_color(s: str) -> str:
    """Return the color escape sequences still active at the last line of ``s``."""
    i = s.rfind("\n")
    if i != -1:
        s = s[:i]
    i = s.rfind(_RESET)
    if i != -1:
        s = s[i + len(_RESET):]
    return "".join(m.group(0) for m in _ANSI_RE.finditer(s))