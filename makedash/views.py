"""Named viewports and the registry that owns them.

Views hold a line buffer, a cursor, a scroll offset and a few styling flags.
The registry is the only mutable UI state and is touched solely from the
event-loop thread; background work reaches it through the update channel.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from .errors import UnknownViewError
from .layout import Rect
from .render.ansi import wrap_ansi_line


@dataclass
class View:
    """One rectangular viewport with its own content buffer."""

    name: str
    rect: Rect
    title: str = ""
    lines: list[str] = field(default_factory=list)
    cursor_row: int = 0
    scroll_offset: int = 0
    highlight: bool = False
    autoscroll: bool = False
    wrap: bool = False
    sel_fg: str = ""
    sel_bg: str = ""

    @property
    def inner_width(self) -> int:
        return self.rect.inner_width

    @property
    def inner_height(self) -> int:
        return self.rect.inner_height

    def clear(self) -> None:
        """Drop all content and reset scrolling."""
        self.lines.clear()
        self.cursor_row = 0
        self.scroll_offset = 0

    def set_text(self, text: str) -> None:
        """Replace content with ``text`` split into lines."""
        self.lines = text.splitlines()
        self.cursor_row = min(self.cursor_row, max(0, len(self.lines) - 1))
        self.scroll_offset = 0

    def append_line(self, line: str) -> None:
        """Append one line, dropping its line terminator."""
        self.lines.append(line.rstrip("\r\n"))

    def line(self, row: int) -> str:
        """Return content line ``row``, or ``""`` when out of range."""
        if 0 <= row < len(self.lines):
            return self.lines[row]
        return ""

    def current_line(self) -> str:
        """Return the line under the cursor, or ``""`` for an empty view."""
        return self.line(self.cursor_row)

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor by ``delta`` rows, clamped to the content.

        Returns whether the cursor actually moved. The scroll offset follows
        the cursor so the highlighted row stays visible.
        """
        if not self.lines:
            self.cursor_row = 0
            return False
        target = max(0, min(self.cursor_row + delta, len(self.lines) - 1))
        if target == self.cursor_row:
            return False
        self.cursor_row = target
        self._follow_cursor()
        return True

    def resize(self, rect: Rect) -> None:
        """Move the view to ``rect`` keeping content, cursor and scroll."""
        self.rect = rect
        self._follow_cursor()

    def _follow_cursor(self) -> None:
        rows = max(1, self.inner_height)
        if self.cursor_row < self.scroll_offset:
            self.scroll_offset = self.cursor_row
        elif self.cursor_row >= self.scroll_offset + rows:
            self.scroll_offset = self.cursor_row - rows + 1

    def display_rows(self) -> list[tuple[int, str]]:
        """Return ``(line_index, text)`` pairs for the rows currently visible.

        Wrapped views may yield several rows per content line. Autoscrolling
        views always show the tail of the buffer.
        """
        rows: list[tuple[int, str]] = []
        for idx, text in enumerate(self.lines):
            if self.wrap and self.inner_width > 0:
                rows.extend((idx, chunk) for chunk in wrap_ansi_line(text, self.inner_width))
            else:
                rows.append((idx, text))

        height = self.inner_height
        if height <= 0:
            return []
        if self.autoscroll:
            start = max(0, len(rows) - height)
        else:
            start = max(0, min(self.scroll_offset, max(0, len(rows) - 1)))
        return rows[start : start + height]


class ViewRegistry:
    """Views addressed by name plus the single focus marker."""

    def __init__(self) -> None:
        self._views: dict[str, View] = {}
        self._focus: str | None = None

    def __contains__(self, name: object) -> bool:
        return name in self._views

    def __iter__(self) -> Iterator[View]:
        return iter(list(self._views.values()))

    def __len__(self) -> int:
        return len(self._views)

    def get(self, name: str) -> View:
        """Return view ``name``; raise ``UnknownViewError`` if it does not exist."""
        try:
            return self._views[name]
        except KeyError:
            raise UnknownViewError(name) from None

    def set_view(self, name: str, rect: Rect) -> tuple[View, bool]:
        """Create or resize view ``name``; return it and whether it is new."""
        view = self._views.get(name)
        if view is not None:
            view.resize(rect)
            return view, False
        view = View(name=name, rect=rect, title=name)
        self._views[name] = view
        return view, True

    def apply_layout(self, rects: Mapping[str, Rect]) -> list[str]:
        """Apply a computed layout and return names of newly created views."""
        created: list[str] = []
        for name, rect in rects.items():
            _view, is_new = self.set_view(name, rect)
            if is_new:
                created.append(name)
        return created

    @property
    def focus(self) -> str | None:
        return self._focus

    def set_focus(self, name: str) -> View:
        """Give focus to view ``name`` and return it."""
        view = self.get(name)
        self._focus = name
        return view

    def focused(self) -> View | None:
        """Return the focused view, or ``None`` before setup."""
        if self._focus is None:
            return None
        return self._views.get(self._focus)
