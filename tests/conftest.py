"""Shared pytest setup.

Puts the repository root first on ``sys.path`` so the tests import the
working-tree ``makedash`` package even when it is not installed.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = str(Path(__file__).resolve().parent.parent)

if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
