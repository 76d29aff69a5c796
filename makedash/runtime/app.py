"""Runtime bootstrap for the dashboard.

Builds initial state, the update channel and the command runner from the
resolved settings, then hands control to the event loop.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..config import DashboardSettings
from ..errors import TerminalInitError
from ..state import AppState
from ..ui_theme import resolve_theme
from .application import Dashboard
from .pump import UpdateChannel
from .runner import CommandRunner
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def run_dashboard(
    catalog: dict[str, str],
    settings: DashboardSettings,
    *,
    cwd: Path | None = None,
) -> None:
    """Initialize the dashboard for ``catalog`` and run it until quit.

    Raises ``TerminalInitError`` when stdin/stdout are not an interactive
    terminal.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        raise TerminalInitError("makedash needs an interactive terminal")
    terminal = TerminalController(stdin_fd, stdout_fd)

    channel = UpdateChannel()
    runner = CommandRunner(
        channel,
        build_command=settings.build_command,
        previous_execution=settings.previous_execution,
        report_exit_status=settings.report_exit_status,
        cwd=cwd,
    )
    theme = resolve_theme(settings.theme, no_color=bool(os.environ.get("NO_COLOR")))
    dashboard = Dashboard(
        state=AppState(catalog=dict(catalog)),
        terminal=terminal,
        stdin_fd=stdin_fd,
        stdout_fd=stdout_fd,
        channel=channel,
        runner=runner,
        theme=theme,
    )
    logger.info("dashboard starting with %d targets", len(catalog))
    try:
        dashboard.run()
    finally:
        channel.close()
        logger.info("dashboard stopped")
