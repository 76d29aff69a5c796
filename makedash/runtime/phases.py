"""Render-pass phases: layout, one-time setup, per-pass update.

``redraw_pass`` is what the event loop calls for every frame. It lays views
out for the current terminal size, then runs ``setup_views`` exactly once
(tracked by ``AppState.setup_done``) or ``update_views`` on later passes.
Output updates drained from the pump channel are applied here as well, on
the loop thread.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from ..catalog import sorted_target_names
from ..layout import DEFAULT_GRID, GridCell, compute_layout
from ..state import DOC_VIEW, OUTPUT_VIEW, SELECTION_VIEW, AppState
from ..ui_theme import DEFAULT_THEME, UITheme
from .pump import OutputUpdate

logger = logging.getLogger(__name__)

SELECTION_TITLE = "Makefile Targets"
OUTPUT_TITLE = "Command Output"


def diagnostic_line(text: str, theme: UITheme = DEFAULT_THEME) -> str:
    """Style an inline error line for the output view."""
    if not theme.diagnostic:
        return text
    return f"{theme.diagnostic}{text}{theme.reset}"


def layout_views(
    state: AppState,
    columns: int,
    lines: int,
    grid: Sequence[GridCell] = DEFAULT_GRID,
) -> list[str]:
    """Resize views for the terminal and return names created by this pass."""
    return state.views.apply_layout(compute_layout(grid, columns, lines))


def setup_views(state: AppState, theme: UITheme = DEFAULT_THEME) -> None:
    """Style and seed views on the first pass.

    The selection view gets highlighting, selection colors, its title, every
    catalog target in lexicographic order, and focus. The output view gets its
    title and autoscroll.
    """
    selection = state.views.get(SELECTION_VIEW)
    selection.title = SELECTION_TITLE
    selection.sel_fg = theme.selection_fg
    selection.sel_bg = theme.selection_bg
    selection.highlight = True
    selection.lines = sorted_target_names(state.catalog)
    selection.cursor_row = 0
    selection.scroll_offset = 0
    state.views.set_focus(SELECTION_VIEW)

    output = state.views.get(OUTPUT_VIEW)
    output.title = OUTPUT_TITLE
    output.autoscroll = True
    state.setup_done = True


def update_views(state: AppState) -> None:
    """Show documentation for the target under the selection cursor."""
    selection = state.views.get(SELECTION_VIEW)
    doc_view = state.views.get(DOC_VIEW)
    line = selection.current_line()
    doc = state.catalog.get(line, "") if line else ""
    doc_view.set_text(doc)
    if doc:
        doc_view.wrap = True


def apply_output_updates(
    state: AppState,
    updates: Iterable[OutputUpdate],
    theme: UITheme = DEFAULT_THEME,
) -> int:
    """Append updates of the active generation to the output view.

    Updates from superseded generations are dropped. Returns how many lines
    were appended.
    """
    applied = 0
    output = None
    for update in updates:
        if update.generation != state.active_generation:
            state.discarded_updates += 1
            logger.debug(
                "dropping output of stale generation %d (active %d)",
                update.generation,
                state.active_generation,
            )
            continue
        if output is None:
            output = state.views.get(OUTPUT_VIEW)
        output.append_line(diagnostic_line(update.text, theme) if update.diagnostic else update.text)
        applied += 1
    return applied


def redraw_pass(
    state: AppState,
    columns: int,
    lines: int,
    paint: Callable[[AppState, int, int], None],
    *,
    grid: Sequence[GridCell] = DEFAULT_GRID,
    theme: UITheme = DEFAULT_THEME,
) -> None:
    """Run one full render pass and hand the result to ``paint``."""
    layout_views(state, columns, lines, grid)
    if not state.setup_done:
        setup_views(state, theme)
    else:
        update_views(state)
    paint(state, columns, lines)
