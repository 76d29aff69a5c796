"""Command handlers.

Each ``Command`` maps to one function taking a ``HandlerContext``. Handlers
run synchronously on the event-loop thread and may mutate views freely.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import QuitRequested, SpawnError
from ..input import Command
from ..state import OUTPUT_VIEW, SELECTION_VIEW, AppState
from ..ui_theme import DEFAULT_THEME, UITheme
from .phases import diagnostic_line
from .runner import CommandRunner, Execution

logger = logging.getLogger(__name__)


@dataclass
class HandlerContext:
    state: AppState
    runner: CommandRunner
    theme: UITheme = DEFAULT_THEME


def move_selection(context: HandlerContext, delta: int) -> bool:
    """Move the selection cursor by ``delta`` rows within the target list."""
    return context.state.views.get(SELECTION_VIEW).move_cursor(delta)


def move_up(context: HandlerContext) -> bool:
    return move_selection(context, -1)


def move_down(context: HandlerContext) -> bool:
    return move_selection(context, 1)


def execute_selected(context: HandlerContext) -> Execution | None:
    """Run the highlighted target, replacing the output view's content.

    A new generation becomes active before the process starts, so lines still
    arriving from earlier executions are discarded from here on. Spawn
    failures are reported as a single line in the output view.
    """
    state = context.state
    target = state.views.get(SELECTION_VIEW).current_line().strip()
    if not target:
        logger.info("execute ignored: no target selected")
        return None

    context.runner.supersede()
    generation = state.next_generation()
    output = state.views.get(OUTPUT_VIEW)
    output.clear()
    try:
        return context.runner.start(generation, target)
    except SpawnError as exc:
        output.append_line(diagnostic_line(str(exc), context.theme))
        return None


def quit_dashboard(context: HandlerContext) -> None:
    raise QuitRequested()


COMMAND_HANDLERS: dict[Command, Callable[[HandlerContext], object]] = {
    Command.MOVE_UP: move_up,
    Command.MOVE_DOWN: move_down,
    Command.EXECUTE: execute_selected,
    Command.QUIT: quit_dashboard,
}


def dispatch_command(context: HandlerContext, command: Command) -> object:
    """Invoke the handler bound to ``command``."""
    return COMMAND_HANDLERS[command](context)
