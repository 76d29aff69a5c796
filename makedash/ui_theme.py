"""Color palettes for view frames, titles and the selection bar.

A theme only affects dashboard chrome; build output keeps its own escapes.
The ``plain`` palette is used when ``NO_COLOR`` is set.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the frame renderer."""

    name: str
    reset: str
    border: str
    border_focused: str
    title: str
    title_focused: str
    selection_fg: str
    selection_bg: str
    diagnostic: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[2m",
    border_focused="\033[1;32m",
    title="\033[1m",
    title_focused="\033[1;32m",
    selection_fg="\033[30m",
    selection_bg="\033[44m",
    diagnostic="\033[31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    border="\033[2;38;5;31m",
    border_focused="\033[38;5;45m",
    title="\033[38;5;153m",
    title_focused="\033[1;38;5;45m",
    selection_fg="\033[38;5;16m",
    selection_bg="\033[48;5;39m",
    diagnostic="\033[38;5;203m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    border="",
    border_focused="",
    title="",
    title_focused="",
    selection_fg="",
    selection_bg="\033[7m",
    diagnostic="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return the theme called ``name``, falling back to the default."""
    if no_color:
        return PLAIN_THEME
    candidate = str(name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


__all__ = [
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "UITheme",
    "resolve_theme",
]
