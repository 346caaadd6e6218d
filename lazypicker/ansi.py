"""Cell-width aware text shaping for terminal drawing.

Surface content is plain text, but East Asian wide characters and tabs still
occupy more than one cell, so clipping has to be done in display columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8

RESET = "\033[0m"
REVERSE = "\033[7m"
HIGHLIGHT = "\033[1;33m"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of cells ``text`` occupies, ignoring escape sequences."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    col = 0
    for ch in plain:
        col += char_display_width(ch, col)
    return col


def clip_text(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns.

    Control characters are dropped and tabs are expanded into spaces so the
    result can be written straight into a fixed-width cell range.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for ch in text:
        if ch != "\t" and unicodedata.category(ch) == "Cc":
            continue
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
    return "".join(out)


def pad_text(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` cells and right-pad it with spaces."""
    clipped = clip_text(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def split_at_cols(text: str, start: int, end: int) -> tuple[str, str, str]:
    """Split ``text`` into (before, middle, after) by display columns ``[start, end)``."""
    before: list[str] = []
    middle: list[str] = []
    after: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col < start:
            before.append(ch)
        elif col < end:
            middle.append(ch)
        else:
            after.append(ch)
        col += w
    return "".join(before), "".join(middle), "".join(after)
