"""Terminal control for the dashboard session.

Owns raw-mode lifecycle, alternate-screen switching and cursor visibility.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from ..errors import TerminalInitError

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
EXIT_TUI_SEQUENCE = b"\x1b[0m\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage raw mode and the alternate screen for one terminal."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state; raise ``TerminalInitError`` if stdin is no tty."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalInitError(f"cannot initialize terminal: {exc}") from exc
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalInitError(f"cannot enter raw mode: {exc}") from exc
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        self._active = True

    def disable_tui_mode(self) -> None:
        """Restore the main screen and the saved tty attributes."""
        os.write(self.stdout_fd, EXIT_TUI_SEQUENCE)
        self._active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
