"""Frame renderer for boxed dashboard views.

Composes one full ANSI frame from the view registry and writes it in a single
``os.write`` call. Rendering reads view state but never mutates it.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import clip_ansi_line, display_width, pad_ansi_line, strip_ansi

if TYPE_CHECKING:
    from ..views import View

BOX_HORIZONTAL = "─"
BOX_VERTICAL = "│"
BOX_TOP_LEFT = "┌"
BOX_TOP_RIGHT = "┐"
BOX_BOTTOM_LEFT = "└"
BOX_BOTTOM_RIGHT = "┘"


def _move_to(row: int, col: int) -> str:
    return f"\033[{row + 1};{col + 1}H"


def _top_border_parts(title: str, width: int) -> tuple[str, str, str]:
    """Split the top frame edge into ``(lead, label, tail)`` pieces."""
    if width <= 1:
        return BOX_TOP_LEFT[:width], "", ""
    inner = width - 2
    label = clip_ansi_line(f" {strip_ansi(title)} ", max(0, inner - 1)) if title else ""
    if not label.strip():
        return f"{BOX_TOP_LEFT}{BOX_HORIZONTAL * inner}{BOX_TOP_RIGHT}", "", ""
    fill = BOX_HORIZONTAL * max(0, inner - 1 - display_width(label))
    return f"{BOX_TOP_LEFT}{BOX_HORIZONTAL}", label, f"{fill}{BOX_TOP_RIGHT}"


def top_border(title: str, width: int) -> str:
    """Return the top frame edge with ``title`` embedded after the corner."""
    return "".join(_top_border_parts(title, width))


def bottom_border(width: int) -> str:
    if width <= 1:
        return BOX_BOTTOM_LEFT[:width]
    return f"{BOX_BOTTOM_LEFT}{BOX_HORIZONTAL * (width - 2)}{BOX_BOTTOM_RIGHT}"


def selected_row(text: str, cols: int, fg: str, bg: str, reset: str) -> str:
    """Paint a full-width selection bar, dropping the line's own colors."""
    return f"{fg}{bg}{pad_ansi_line(strip_ansi(text), cols)}{reset}"


def view_rows(view: View, theme: UITheme, focused: bool) -> list[str]:
    """Return the styled rows of one view frame, top border first."""
    rect = view.rect
    border_style = theme.border_focused if focused else theme.border
    title_style = theme.title_focused if focused else theme.title
    reset = theme.reset if (border_style or title_style) else ""
    inner = rect.inner_width

    lead, label, tail = _top_border_parts(view.title, rect.width)
    top = f"{border_style}{lead}{reset}"
    if label:
        top += f"{title_style}{label}{reset}{border_style}{tail}{reset}"

    rows = [top]
    side = f"{border_style}{BOX_VERTICAL}{reset}"
    visible = view.display_rows()
    fg = view.sel_fg or theme.selection_fg
    bg = view.sel_bg or theme.selection_bg
    for row in range(rect.inner_height):
        if row < len(visible):
            line_idx, text = visible[row]
            if view.highlight and line_idx == view.cursor_row:
                body = selected_row(text, inner, fg, bg, theme.reset or "\033[0m")
            else:
                body = pad_ansi_line(text, inner)
        else:
            body = " " * inner
        rows.append(f"{side}{body}{side}")
    if rect.height >= 2:
        rows.append(f"{border_style}{bottom_border(rect.width)}{reset}")
    return rows


def build_frame(
    views: Iterable[View],
    columns: int,
    lines: int,
    *,
    focus: str | None = None,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    """Compose a complete frame for ``views`` on a ``columns`` x ``lines`` screen.

    Rows falling outside the terminal are skipped and each row is clipped at
    the right edge, so an undersized terminal degrades instead of scrolling.
    """
    out: list[str] = ["\033[H\033[J"]
    for view in views:
        rect = view.rect
        visible_cols = min(rect.width, columns - rect.x0)
        if visible_cols <= 0:
            continue
        for offset, row_text in enumerate(view_rows(view, theme, view.name == focus)):
            y = rect.y0 + offset
            if y >= lines:
                break
            out.append(_move_to(y, rect.x0))
            out.append(clip_ansi_line(row_text, visible_cols))
            if "\033" in row_text:
                out.append("\033[0m")
    return "".join(out)


def render_frame(
    views: Iterable[View],
    columns: int,
    lines: int,
    *,
    focus: str | None = None,
    theme: UITheme = DEFAULT_THEME,
    fd: int | None = None,
) -> None:
    """Write one composed frame to ``fd`` (stdout by default)."""
    frame = build_frame(views, columns, lines, focus=focus, theme=theme)
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, frame.encode("utf-8", errors="replace"))


__all__ = [
    "bottom_border",
    "build_frame",
    "render_frame",
    "selected_row",
    "top_border",
    "view_rows",
]
