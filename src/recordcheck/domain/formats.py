"""Named string formats checked during schema conformance.

Each format is a compiled pattern plus the human phrase used in
type-error messages (``"<path> must be in <phrase> format"``).
"""

from __future__ import annotations

import re
from functools import lru_cache

FORMAT_PATTERNS: dict[str, re.Pattern[str]] = {
    "date": re.compile(r"^\d{4}-\d{2}-\d{2}$"),
    "datetime": re.compile(
        r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?$"
    ),
}

FORMAT_LABELS: dict[str, str] = {
    "date": "YYYY-MM-DD",
    "datetime": "ISO 8601 date-time",
}


def is_known_format(name: str) -> bool:
    return name in FORMAT_PATTERNS


def check_format(name: str, value: str) -> bool:
    """Return True if *value* satisfies the named format.

    Raises:
        KeyError: If *name* is not a registered format.
    """
    return FORMAT_PATTERNS[name].fullmatch(value) is not None


def format_label(name: str) -> str:
    return FORMAT_LABELS.get(name, name)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a custom field pattern where ``$`` matches only at end of input.

    Python's ``$`` also matches before a trailing newline, so a bare ``$``
    outside a character class becomes ``\\Z``.  Patterns compiled with the
    MULTILINE flag keep their per-line ``$``.
    """
    if re.compile(pattern).flags & re.MULTILINE:
        return re.compile(pattern)
    return re.compile(_anchor_end(pattern))


def _anchor_end(pattern: str) -> str:
    out: list[str] = []
    in_class = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            out.append(pattern[i : i + 2])
            i += 2
            continue
        if in_class:
            in_class = ch != "]"
        elif ch == "[":
            in_class = True
            out.append(ch)
            i += 1
            # A leading "^" negates; a "]" right after the opener is literal.
            if pattern.startswith("^", i):
                out.append("^")
                i += 1
            if pattern.startswith("]", i):
                out.append("]")
                i += 1
            continue
        elif ch == "$":
            ch = r"\Z"
        out.append(ch)
        i += 1
    return "".join(out)
