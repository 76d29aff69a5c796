"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
``wait_for_key`` also watches a wake-up descriptor so background updates can
interrupt an idle wait.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_TOKENS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_TOKENS: dict[bytes, str] = {
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character started by ``lead``."""
    first = lead[0]
    if first >= 0xF0:
        needed = 3
    elif first >= 0xE0:
        needed = 2
    elif first >= 0xC0:
        needed = 1
    else:
        needed = 0
    data = lead
    for _ in range(needed):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; ``""`` means nothing arrived in time."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""
        ch = os.read(fd, 1)
        if not ch:
            return ""

    token = _CONTROL_TOKENS.get(ch)
    if token is not None:
        return token
    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return "ESC"
    token = _CSI_FINAL_TOKENS.get(final)
    if token is not None:
        return token
    if final in _CSI_TILDE_TOKENS:
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return _CSI_TILDE_TOKENS[final]
    # Unknown CSI sequence: swallow the rest of it up to the final byte.
    while final is not None and not (0x40 <= final[0] <= 0x7E):
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return "ESC"


def drain_fd(fd: int) -> int:
    """Consume every byte currently readable on ``fd`` and return the count."""
    total = 0
    while True:
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready:
            return total
        chunk = os.read(fd, 4096)
        if not chunk:
            return total
        total += len(chunk)


def wait_for_key(stdin_fd: int, wake_fd: int | None, timeout_ms: int) -> str:
    """Block until a key arrives, ``wake_fd`` becomes readable, or timeout.

    Returns the key token, or ``""`` when woken or timed out. Wake-up bytes
    are consumed so the next wait blocks again.
    """
    if _PENDING_BYTES:
        return read_key(stdin_fd, timeout_ms=0)
    watched = [stdin_fd] if wake_fd is None else [stdin_fd, wake_fd]
    ready, _, _ = select.select(watched, [], [], max(0.0, timeout_ms / 1000.0))
    if wake_fd is not None and wake_fd in ready:
        drain_fd(wake_fd)
    if stdin_fd in ready:
        return read_key(stdin_fd, timeout_ms=0)
    return ""
