"""Main interactive event loop.

One thread, one loop: drain queued output, redraw when dirty, then block
until a key arrives or a pump wakes the loop. Feature logic lives in the
injected callbacks; this module only sequences them.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..errors import QuitRequested
from ..input import Command, KeyMap, wait_for_key
from ..state import AppState, LoopPhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    idle_timeout_ms: int = 250


class RuntimeLoopCallbacks(Protocol):
    """Operations ``run_main_loop`` drives each iteration."""

    def drain_updates(self) -> int:
        """Apply queued output updates; return how many changed the screen."""

    def redraw(self, columns: int, lines: int) -> None:
        """Run a full render pass for the given terminal size."""

    def dispatch(self, command: Command) -> object:
        """Run the handler bound to ``command``."""


class _RawModeTerminal(Protocol):
    def raw_mode(self): ...


def run_main_loop(
    state: AppState,
    terminal: _RawModeTerminal,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
    *,
    keymap: KeyMap,
    wake_fd: int | None = None,
    get_terminal_size: Callable[..., object] = shutil.get_terminal_size,
) -> None:
    """Run the dashboard until the quit handler raises ``QuitRequested``.

    Errors from any other handler are logged and the loop keeps running.
    """
    last_size: tuple[int, int] | None = None
    state.phase = LoopPhase.READY
    try:
        with terminal.raw_mode():
            while True:
                term = get_terminal_size((80, 24))
                size = (term.columns, term.lines)
                if size != last_size:
                    last_size = size
                    state.dirty = True
                if callbacks.drain_updates():
                    state.dirty = True
                if state.dirty:
                    callbacks.redraw(term.columns, term.lines)
                    state.dirty = False

                try:
                    key = wait_for_key(stdin_fd, wake_fd, timing.idle_timeout_ms)
                except KeyboardInterrupt:
                    break
                if not key:
                    continue
                command = keymap.command_for(key)
                if command is None:
                    continue

                state.phase = LoopPhase.HANDLING_EVENT
                try:
                    callbacks.dispatch(command)
                except QuitRequested:
                    break
                except Exception:
                    logger.exception("handler for %s failed", command.value)
                finally:
                    state.phase = LoopPhase.READY
                state.dirty = True
    finally:
        state.phase = LoopPhase.TERMINATED
