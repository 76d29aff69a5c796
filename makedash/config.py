"""User configuration for the dashboard.

Settings live in a JSON file under the platform config directory. Loading is
lenient: a missing or malformed file, or a malformed individual value,
falls back to the built-in default. The dashboard never writes this file.
"""

from __future__ import annotations

import json
import logging
import os
import shlex
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

from .catalog import DEFAULT_DESCRIPTOR

APP_NAME = "makedash"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "makedash.log"
CONFIG_ENV_VAR = "MAKEDASH_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME

DEFAULT_BUILD_COMMAND: tuple[str, ...] = ("make",)
PREVIOUS_EXECUTION_POLICIES = ("abandon", "terminate")
DEFAULT_PREVIOUS_EXECUTION = "abandon"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class DashboardSettings:
    """Resolved settings for one dashboard session."""

    descriptor: str = DEFAULT_DESCRIPTOR
    build_command: tuple[str, ...] = DEFAULT_BUILD_COMMAND
    previous_execution: str = DEFAULT_PREVIOUS_EXECUTION
    report_exit_status: bool = False
    theme: str = "default"
    log_level: str = DEFAULT_LOG_LEVEL


def config_path() -> Path:
    """Return the active config path, honoring ``MAKEDASH_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_descriptor(value: object) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_DESCRIPTOR


def _coerce_build_command(value: object) -> tuple[str, ...]:
    """Accept a non-empty list of strings or a shell-style command string."""
    if isinstance(value, str):
        try:
            parts = shlex.split(value)
        except ValueError:
            return DEFAULT_BUILD_COMMAND
        return tuple(parts) if parts else DEFAULT_BUILD_COMMAND
    if isinstance(value, list) and value and all(isinstance(part, str) and part for part in value):
        return tuple(value)
    return DEFAULT_BUILD_COMMAND


def _coerce_previous_execution(value: object) -> str:
    if isinstance(value, str) and value.strip().lower() in PREVIOUS_EXECUTION_POLICIES:
        return value.strip().lower()
    return DEFAULT_PREVIOUS_EXECUTION


def _coerce_log_level(value: object) -> str:
    if isinstance(value, str) and isinstance(logging.getLevelName(value.strip().upper()), int):
        return value.strip().upper()
    return DEFAULT_LOG_LEVEL


def load_settings() -> DashboardSettings:
    """Resolve every setting from the config file."""
    data = load_config()
    report_exit_status = data.get("report_exit_status")
    theme = data.get("theme")
    return DashboardSettings(
        descriptor=_coerce_descriptor(data.get("descriptor")),
        build_command=_coerce_build_command(data.get("build_command")),
        previous_execution=_coerce_previous_execution(data.get("previous_execution")),
        report_exit_status=report_exit_status if isinstance(report_exit_status, bool) else False,
        theme=theme.strip() if isinstance(theme, str) and theme.strip() else "default",
        log_level=_coerce_log_level(data.get("log_level")),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DashboardSettings",
    "LOG_PATH",
    "PREVIOUS_EXECUTION_POLICIES",
    "config_path",
    "load_config",
    "load_settings",
]
