"""Grid layout engine.

Views are declared on a 12x12 logical grid and converted into concrete
terminal rectangles for the current terminal size. Rectangles are frame
corners (inclusive), matching how the renderer draws boxed views.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

GRID_UNITS = 12
MIN_FRAME_SPAN = 1
MIN_TERMINAL_COLUMNS = 2 * GRID_UNITS
MIN_TERMINAL_ROWS = 2 * GRID_UNITS


@dataclass(frozen=True)
class GridCell:
    """Proportional placement of one named view, in grid units."""

    name: str
    width: int
    height: int
    x_offset: int
    y_offset: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("grid cell needs a name")
        for label, value in (
            ("width", self.width),
            ("height", self.height),
            ("x_offset", self.x_offset),
            ("y_offset", self.y_offset),
        ):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{self.name}: {label} must be a non-negative integer, got {value!r}")
        if self.width < 1 or self.height < 1:
            raise ValueError(f"{self.name}: width and height must be at least one grid unit")
        if self.x_offset + self.width > GRID_UNITS or self.y_offset + self.height > GRID_UNITS:
            raise ValueError(f"{self.name}: cell extends past the {GRID_UNITS}x{GRID_UNITS} grid")


@dataclass(frozen=True)
class Rect:
    """Inclusive frame corners of a view in terminal cells (0-based)."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0 + 1

    @property
    def height(self) -> int:
        return self.y1 - self.y0 + 1

    @property
    def inner_width(self) -> int:
        """Columns available for content inside the frame border."""
        return max(0, self.width - 2)

    @property
    def inner_height(self) -> int:
        """Rows available for content inside the frame border."""
        return max(0, self.height - 2)

    def overlaps(self, other: Rect) -> bool:
        return not (
            self.x1 < other.x0
            or other.x1 < self.x0
            or self.y1 < other.y0
            or other.y1 < self.y0
        )


DEFAULT_GRID: tuple[GridCell, ...] = (
    GridCell("targets", width=3, height=10, x_offset=0, y_offset=0),
    GridCell("output", width=9, height=12, x_offset=3, y_offset=0),
    GridCell("help", width=3, height=2, x_offset=0, y_offset=10),
)


def cell_rect(cell: GridCell, terminal_width: int, terminal_height: int) -> Rect:
    """Return the rectangle for one cell.

    Corners are the truncated real-valued unit multiples, computed with integer
    arithmetic so neighbouring cells agree exactly on their shared edge.
    Degenerate frames are widened to the 2x2 minimum.
    """
    columns = max(0, terminal_width)
    rows = max(0, terminal_height)
    x0 = cell.x_offset * columns // GRID_UNITS
    y0 = cell.y_offset * rows // GRID_UNITS
    x1 = (cell.x_offset + cell.width) * columns // GRID_UNITS - 1
    y1 = (cell.y_offset + cell.height) * rows // GRID_UNITS - 1
    if x1 < x0 + MIN_FRAME_SPAN:
        x1 = x0 + MIN_FRAME_SPAN
    if y1 < y0 + MIN_FRAME_SPAN:
        y1 = y0 + MIN_FRAME_SPAN
    return Rect(x0, y0, x1, y1)


def compute_layout(
    cells: Iterable[GridCell],
    terminal_width: int,
    terminal_height: int,
) -> dict[str, Rect]:
    """Map each cell name to its rectangle for the given terminal size."""
    rects: dict[str, Rect] = {}
    for cell in cells:
        if cell.name in rects:
            raise ValueError(f"duplicate grid cell name: {cell.name!r}")
        rects[cell.name] = cell_rect(cell, terminal_width, terminal_height)
    return rects


def terminal_supports_grid(terminal_width: int, terminal_height: int) -> bool:
    """Return whether every grid unit spans at least two terminal cells."""
    return terminal_width >= MIN_TERMINAL_COLUMNS and terminal_height >= MIN_TERMINAL_ROWS


__all__ = [
    "DEFAULT_GRID",
    "GRID_UNITS",
    "GridCell",
    "MIN_TERMINAL_COLUMNS",
    "MIN_TERMINAL_ROWS",
    "Rect",
    "cell_rect",
    "compute_layout",
    "terminal_supports_grid",
]
