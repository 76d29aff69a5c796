"""ANSI-aware measurement and shaping for view content.

Build output frequently carries color escapes; these helpers clip, pad and
wrap such lines by display columns while passing escape sequences through.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal columns used by ``ch`` when drawn at column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    if ch < " " or ch == "\x7f":
        return 0
    return 1


def display_width(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def _iter_tokens(text: str):
    """Yield ``(is_escape, token)`` pairs for ``text``."""
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                yield True, match.group(0)
                i = match.end()
                continue
        yield False, text[i]
        i += 1


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim ``text`` to ``max_cols`` display columns, expanding tabs.

    Control characters other than tab are dropped so they cannot move the
    terminal cursor out of the view.
    """
    if max_cols <= 0 or not text:
        return ""
    out: list[str] = []
    col = 0
    for is_escape, token in _iter_tokens(text):
        if is_escape:
            out.append(token)
            continue
        if col >= max_cols:
            break
        width = char_display_width(token, col)
        if token == "\t":
            width = min(width, max_cols - col)
            out.append(" " * width)
            col += width
            continue
        if width == 0 and (token < " " or token == "\x7f"):
            continue
        if col + width > max_cols:
            break
        out.append(token)
        col += width
    return "".join(out)


def pad_ansi_line(text: str, cols: int) -> str:
    """Clip ``text`` to ``cols`` and pad with spaces to exactly ``cols``."""
    clipped = clip_ansi_line(text, cols)
    padding = max(0, cols - display_width(clipped))
    if "\x1b" in clipped:
        return f"{clipped}{RESET}{' ' * padding}"
    return clipped + " " * padding


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Split ``text`` into chunks no wider than ``width`` display columns."""
    if width <= 0 or not text:
        return [""]
    chunks: list[str] = []
    chunk: list[str] = []
    col = 0
    for is_escape, token in _iter_tokens(text):
        if is_escape:
            chunk.append(token)
            continue
        w = char_display_width(token, col)
        if token == "\t":
            if col + w > width and col > 0:
                chunks.append("".join(chunk))
                chunk = []
                col = 0
                w = TAB_STOP
            w = min(w, width)
            chunk.append(" " * w)
            col += w
            continue
        if col + w > width and col > 0:
            chunks.append("".join(chunk))
            chunk = []
            col = 0
        chunk.append(token)
        col += w
    chunks.append("".join(chunk))
    return chunks
