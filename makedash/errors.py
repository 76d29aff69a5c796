"""Exception types shared across the dashboard.

Fatal errors are converted to ``SystemExit`` by the CLI.
``QuitRequested`` is control flow used to unwind the event loop.
"""

from __future__ import annotations


class MakedashError(Exception):
    """Base class for dashboard errors."""


class DescriptorError(MakedashError):
    """The build descriptor could not be opened or read."""


class TerminalInitError(MakedashError):
    """The terminal could not be switched into interactive mode."""


class SpawnError(MakedashError):
    """The external build process could not be started."""


class UnknownViewError(MakedashError, KeyError):
    """A view name was looked up before the layout created it."""

    def __str__(self) -> str:
        return f"unknown view: {self.args[0]!r}" if self.args else "unknown view"


class QuitRequested(Exception):
    """Raised by the quit handler to terminate the event loop."""
