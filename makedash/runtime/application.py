"""Application object that wires state, runner and renderer into the loop."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..input import Command, KeyMap
from ..layout import DEFAULT_GRID, MIN_TERMINAL_COLUMNS, MIN_TERMINAL_ROWS, GridCell, terminal_supports_grid
from ..render import render_frame
from ..state import AppState
from ..ui_theme import DEFAULT_THEME, UITheme
from .handlers import HandlerContext, dispatch_command
from .loop import RuntimeLoopTiming, run_main_loop
from .phases import apply_output_updates, redraw_pass
from .pump import UpdateChannel
from .runner import CommandRunner
from .terminal import TerminalController

logger = logging.getLogger(__name__)


class Dashboard:
    """Composed runtime app; acts as the loop's callback object."""

    def __init__(
        self,
        *,
        state: AppState,
        terminal: TerminalController,
        stdin_fd: int,
        stdout_fd: int,
        channel: UpdateChannel,
        runner: CommandRunner,
        timing: RuntimeLoopTiming = RuntimeLoopTiming(),
        keymap: KeyMap | None = None,
        theme: UITheme = DEFAULT_THEME,
        grid: Sequence[GridCell] = DEFAULT_GRID,
        run_main_loop_fn: Callable[..., None] = run_main_loop,
    ) -> None:
        self.state = state
        self.terminal = terminal
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.channel = channel
        self.runner = runner
        self.timing = timing
        self.keymap = keymap if keymap is not None else KeyMap()
        self.theme = theme
        self.grid = tuple(grid)
        self._run_main_loop = run_main_loop_fn
        self._handler_context = HandlerContext(state=state, runner=runner, theme=theme)
        self._last_size: tuple[int, int] | None = None

    def drain_updates(self) -> int:
        """Move queued pump output into the output view."""
        return apply_output_updates(self.state, self.channel.drain(), self.theme)

    def paint(self, state: AppState, columns: int, lines: int) -> None:
        render_frame(
            state.views,
            columns,
            lines,
            focus=state.views.focus,
            theme=self.theme,
            fd=self.stdout_fd,
        )

    def redraw(self, columns: int, lines: int) -> None:
        """Render a full pass, warning once per size below the supported grid."""
        if (columns, lines) != self._last_size:
            self._last_size = (columns, lines)
            if not terminal_supports_grid(columns, lines):
                logger.warning(
                    "terminal %dx%d is below %dx%d; views may be clipped",
                    columns,
                    lines,
                    MIN_TERMINAL_COLUMNS,
                    MIN_TERMINAL_ROWS,
                )
        redraw_pass(self.state, columns, lines, self.paint, grid=self.grid, theme=self.theme)

    def dispatch(self, command: Command) -> object:
        return dispatch_command(self._handler_context, command)

    def run(self) -> None:
        """Run the interactive event loop; running builds are abandoned on exit."""
        try:
            self._run_main_loop(
                self.state,
                self.terminal,
                self.stdin_fd,
                self.timing,
                self,
                keymap=self.keymap,
                wake_fd=self.channel.fileno(),
            )
        finally:
            self.runner.abandon_all()
