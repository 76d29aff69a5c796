"""Closed set of dashboard commands and the key map that selects them.

Keys decode to tokens (see ``reader``); the key map turns a token into one of
the ``Command`` members. Handlers are looked up per command, never per key.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass


class Command(enum.Enum):
    MOVE_UP = "move-up"
    MOVE_DOWN = "move-down"
    EXECUTE = "execute"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyBinding:
    """One or more key tokens that trigger a single command."""

    combos: tuple[str, ...]
    command: Command


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("UP", "k"), Command.MOVE_UP),
    KeyBinding(("DOWN", "j"), Command.MOVE_DOWN),
    KeyBinding(("ENTER",), Command.EXECUTE),
    KeyBinding(("CTRL_C", "q"), Command.QUIT),
)


class KeyMap:
    """Lookup table from key tokens to commands."""

    def __init__(self, bindings: Iterable[KeyBinding] = DEFAULT_BINDINGS) -> None:
        self._commands: dict[str, Command] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyBinding) -> KeyMap:
        """Register ``binding``, overwriting earlier bindings for its keys."""
        for combo in binding.combos:
            self._commands[combo] = binding.command
        return self

    def command_for(self, key: str) -> Command | None:
        """Return the command bound to ``key``, or ``None`` when unbound."""
        return self._commands.get(key)

    def keys_for(self, command: Command) -> tuple[str, ...]:
        """Return every key token currently bound to ``command``."""
        return tuple(key for key, bound in self._commands.items() if bound is command)
