"""Makefile target discovery.

Scans a build descriptor for ``name: documentation`` lines and returns the
target catalog used to populate the selection view. The mapping is built once
at startup and never changes during a session.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from .errors import DescriptorError

DEFAULT_DESCRIPTOR = "Makefile"
PHONY_MARKER = "PHONY"
TARGET_LINE_RE = re.compile(r"^[a-zA-Z0-9_-]+:")

logger = logging.getLogger(__name__)


def parse_target_line(line: str) -> tuple[str, str] | None:
    """Return ``(target, doc)`` when ``line`` declares a documented target.

    Recipe lines (tab-indented), special targets (leading dot) and any line
    mentioning ``PHONY`` are ignored. The documentation is whatever follows
    the first colon, stripped.
    """
    if ":" not in line:
        return None
    if line.startswith("\t") or line.startswith("."):
        return None
    if PHONY_MARKER in line:
        return None
    if TARGET_LINE_RE.match(line) is None:
        return None
    target, _sep, doc = line.partition(":")
    return target, doc.strip()


def parse_catalog(lines: str | Iterable[str]) -> dict[str, str]:
    """Build the target catalog from descriptor text or an iterable of lines.

    A target declared twice keeps the documentation of its last declaration.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()
    catalog: dict[str, str] = {}
    for raw in lines:
        parsed = parse_target_line(raw.rstrip("\r\n"))
        if parsed is None:
            continue
        target, doc = parsed
        catalog[target] = doc
    return catalog


def read_descriptor(path: Path) -> str:
    """Read descriptor text as UTF-8 (BOM stripped), falling back to Latin-1."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DescriptorError(f"cannot open {path}: {exc.strerror or exc}") from exc
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def load_catalog(path: Path) -> dict[str, str]:
    """Load and parse the descriptor at ``path``.

    Raises ``DescriptorError`` when the file cannot be read.
    """
    catalog = parse_catalog(read_descriptor(path))
    logger.info("loaded %d targets from %s", len(catalog), path)
    return catalog


def sorted_target_names(catalog: Mapping[str, str]) -> list[str]:
    """Return target names in listing order (lexicographic)."""
    return sorted(catalog)


__all__ = [
    "DEFAULT_DESCRIPTOR",
    "PHONY_MARKER",
    "TARGET_LINE_RE",
    "load_catalog",
    "parse_catalog",
    "parse_target_line",
    "read_descriptor",
    "sorted_target_names",
]
