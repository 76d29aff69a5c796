"""Application state threaded through setup, update and command handlers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .views import ViewRegistry

SELECTION_VIEW = "targets"
OUTPUT_VIEW = "output"
DOC_VIEW = "help"


class LoopPhase(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    HANDLING_EVENT = "handling-event"
    TERMINATED = "terminated"


@dataclass
class AppState:
    catalog: dict[str, str]
    views: ViewRegistry = field(default_factory=ViewRegistry)
    setup_done: bool = False
    last_generation: int = 0
    active_generation: int = 0
    phase: LoopPhase = LoopPhase.UNINITIALIZED
    dirty: bool = True
    discarded_updates: int = 0

    def next_generation(self) -> int:
        """Allocate a new execution generation and make it the active one."""
        self.last_generation += 1
        self.active_generation = self.last_generation
        return self.active_generation
