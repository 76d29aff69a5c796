"""Command-line front door for makedash.

Loads settings, configures file logging and reads the build descriptor from
the working directory, then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import __version__
from .catalog import load_catalog
from .config import LOG_PATH, load_settings
from .errors import DescriptorError, TerminalInitError
from .logs import configure_logging
from .runtime import run_dashboard

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="makedash",
        description=(
            "Browse the targets of ./Makefile, read their documentation and run "
            "them with live output. Keys: Up/Down select, Enter runs, q or Ctrl-C quits."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None, default_dir: Path | None = None) -> None:
    """Parse arguments and launch the dashboard in the working directory.

    ``default_dir`` is primarily for tests. An unreadable descriptor or a
    non-interactive terminal ends the program with a message.
    """
    build_parser().parse_args(argv)

    settings = load_settings()
    configure_logging(LOG_PATH, settings.log_level)

    workdir = default_dir if default_dir is not None else Path.cwd()
    descriptor = workdir / settings.descriptor
    try:
        catalog = load_catalog(descriptor)
    except DescriptorError as exc:
        logger.error("%s", exc)
        raise SystemExit(f"makedash: {exc}") from exc

    try:
        run_dashboard(catalog, settings, cwd=workdir)
    except TerminalInitError as exc:
        logger.error("%s", exc)
        raise SystemExit(f"makedash: {exc}") from exc


if __name__ == "__main__":
    main()
