"""Input layer: raw key decoding and the command key map."""

from .commands import DEFAULT_BINDINGS, Command, KeyBinding, KeyMap
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, drain_fd, read_key, wait_for_key

__all__ = [
    "Command",
    "DEFAULT_BINDINGS",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyMap",
    "_PENDING_BYTES",
    "drain_fd",
    "read_key",
    "wait_for_key",
]
