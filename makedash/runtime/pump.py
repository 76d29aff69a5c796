"""Output pump threads and the update channel they feed.

Each execution gets one daemon thread that reads the process's stdout line by
line and forwards every line, tagged with the execution's generation, onto a
shared ``UpdateChannel``. The event loop is the only consumer; pumps never
touch views directly.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue
from typing import IO

logger = logging.getLogger(__name__)

READ_ERROR_PREFIX = "Error reading command output:"


@dataclass(frozen=True)
class OutputUpdate:
    """One line of output destined for the output view."""

    generation: int
    text: str
    diagnostic: bool = False


class UpdateChannel:
    """Thread-safe FIFO from pump threads to the event loop.

    Every ``put`` also writes a byte to a self-pipe so a loop blocked in
    ``select`` wakes up immediately. ``fileno`` exposes the pipe's read end.
    """

    def __init__(self) -> None:
        self._queue: Queue[OutputUpdate] = Queue()
        self._wake_read, self._wake_write = os.pipe()
        os.set_blocking(self._wake_read, False)
        os.set_blocking(self._wake_write, False)
        self._closed = False
        self._lock = threading.Lock()

    def fileno(self) -> int:
        return self._wake_read

    def put(self, update: OutputUpdate) -> None:
        """Queue ``update`` and wake the loop if the channel is still open."""
        self._queue.put(update)
        with self._lock:
            if self._closed:
                return
            try:
                os.write(self._wake_write, b"\x00")
            except BlockingIOError:
                # Pipe full: a wake-up is already pending.
                pass

    def drain(self) -> list[OutputUpdate]:
        """Return every queued update in arrival order."""
        out: list[OutputUpdate] = []
        while True:
            try:
                out.append(self._queue.get_nowait())
            except Empty:
                break
        return out

    def close(self) -> None:
        """Close the wake-up pipe; later puts only queue."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            os.close(self._wake_read)
            os.close(self._wake_write)


def decode_line(raw: bytes | str) -> str:
    """Decode one raw stdout line and drop its terminator."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return raw.rstrip("\r\n")


class OutputPump:
    """Reads one execution's stream and forwards it as tagged updates."""

    def __init__(
        self,
        generation: int,
        stream: IO[bytes],
        channel: UpdateChannel,
        *,
        on_finished: Callable[[bool], None] | None = None,
        name: str | None = None,
    ) -> None:
        self.generation = generation
        self._stream = stream
        self._channel = channel
        self._on_finished = on_finished
        self._abandoned = threading.Event()
        self._thread = threading.Thread(
            target=self.run,
            name=name or f"makedash-pump-{generation}",
            daemon=True,
        )

    @property
    def abandoned(self) -> bool:
        return self._abandoned.is_set()

    def abandon(self) -> None:
        """Stop forwarding; the stream is still drained until it ends."""
        self._abandoned.set()

    def start(self) -> None:
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _forward(self, text: str, *, diagnostic: bool = False) -> None:
        if self._abandoned.is_set():
            return
        self._channel.put(OutputUpdate(self.generation, text, diagnostic=diagnostic))

    def run(self) -> None:
        """Pump the stream until end-of-stream or a read error."""
        read_failed = False
        try:
            for raw in iter(self._stream.readline, b""):
                self._forward(decode_line(raw))
        except (OSError, ValueError) as exc:
            read_failed = True
            logger.warning("generation %d: output read failed: %s", self.generation, exc)
            self._forward(f"{READ_ERROR_PREFIX} {exc}", diagnostic=True)
        finally:
            try:
                self._stream.close()
            except OSError:
                pass
            if self._on_finished is not None:
                self._on_finished(read_failed)


__all__ = [
    "OutputPump",
    "OutputUpdate",
    "READ_ERROR_PREFIX",
    "UpdateChannel",
    "decode_line",
]
