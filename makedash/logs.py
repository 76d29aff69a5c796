"""Logging setup.

The terminal belongs to the UI while the dashboard runs, so log records go to
a file under the platform log directory instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"


def configure_logging(path: Path, level: str = "WARNING") -> logging.Handler | None:
    """Attach a file handler for the ``makedash`` logger tree.

    Returns the handler, or ``None`` when the log file cannot be opened; in
    that case records are dropped rather than written over the UI.
    """
    package_logger = logging.getLogger("makedash")
    package_logger.setLevel(level)
    package_logger.propagate = False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    return handler
