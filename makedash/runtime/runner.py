"""External build invocation for a selected target.

``CommandRunner.start`` spawns ``<build command> <target>`` with stdout piped,
wraps it in an ``Execution`` handle and starts the output pump. Superseded
executions are either abandoned (left running, output ignored) or terminated,
depending on the configured policy.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..config import DEFAULT_BUILD_COMMAND, DEFAULT_PREVIOUS_EXECUTION, PREVIOUS_EXECUTION_POLICIES
from ..errors import SpawnError
from .pump import OutputPump, OutputUpdate, UpdateChannel

logger = logging.getLogger(__name__)

STATUS_RUNNING = "running"
STATUS_FINISHED = "finished"
STATUS_FAILED = "failed"
STATUS_ABANDONED = "abandoned"
STATUS_STOPPED = "stopped"


@dataclass
class Execution:
    """Handle for one run of the build tool."""

    generation: int
    target: str
    argv: tuple[str, ...]
    process: subprocess.Popen
    pump: OutputPump | None = None
    status: str = STATUS_RUNNING
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def is_running(self) -> bool:
        return self.status == STATUS_RUNNING

    def _set_status(self, status: str, *, only_if_running: bool = True) -> bool:
        with self._lock:
            if only_if_running and self.status != STATUS_RUNNING:
                return False
            self.status = status
            return True

    def abandon(self) -> None:
        """Ignore further output; the process runs on untouched."""
        if self.pump is not None:
            self.pump.abandon()
        if self._set_status(STATUS_ABANDONED):
            logger.info("generation %d (%s) abandoned", self.generation, self.target)

    def request_stop(self) -> None:
        """Ask the process to terminate and ignore whatever it still prints."""
        if self.pump is not None:
            self.pump.abandon()
        if not self._set_status(STATUS_STOPPED):
            return
        if self.process.poll() is None:
            try:
                self.process.terminate()
            except OSError as exc:
                logger.warning("generation %d: terminate failed: %s", self.generation, exc)
        logger.info("generation %d (%s) stopped", self.generation, self.target)

    def mark_finished(self, read_failed: bool) -> None:
        """Record the final status once the process has exited."""
        self._set_status(STATUS_FAILED if read_failed else STATUS_FINISHED)


def exit_status_line(argv: Sequence[str], returncode: int) -> str:
    """Format the line reported after a run ends with ``returncode``."""
    return f"[{shlex.join(argv)} exited with status {returncode}]"


class CommandRunner:
    """Spawns build invocations and tracks their execution handles."""

    def __init__(
        self,
        channel: UpdateChannel,
        *,
        build_command: Sequence[str] = DEFAULT_BUILD_COMMAND,
        previous_execution: str = DEFAULT_PREVIOUS_EXECUTION,
        report_exit_status: bool = False,
        cwd: Path | None = None,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
    ) -> None:
        if previous_execution not in PREVIOUS_EXECUTION_POLICIES:
            raise ValueError(f"unknown previous-execution policy: {previous_execution!r}")
        if not build_command:
            raise ValueError("build command must not be empty")
        self._channel = channel
        self.build_command = tuple(build_command)
        self.previous_execution = previous_execution
        self.report_exit_status = report_exit_status
        self._cwd = cwd
        self._popen = popen
        self._executions: dict[int, Execution] = {}

    def argv_for(self, target: str) -> tuple[str, ...]:
        """Return the argument vector: the build command plus the target."""
        return (*self.build_command, target)

    @property
    def executions(self) -> list[Execution]:
        """Snapshot of the tracked executions."""
        return list(self._executions.values())

    def running(self) -> list[Execution]:
        """Return executions whose process has not exited or been superseded."""
        return [execution for execution in self._executions.values() if execution.is_running]

    def supersede(self) -> list[Execution]:
        """Apply the previous-execution policy to every running execution."""
        superseded = self.running()
        for execution in superseded:
            if self.previous_execution == "terminate":
                execution.request_stop()
            else:
                execution.abandon()
        self._prune()
        return superseded

    def abandon_all(self) -> None:
        """Abandon running executions and silence every tracked pump."""
        for execution in list(self._executions.values()):
            if execution.is_running:
                execution.abandon()
            elif execution.pump is not None:
                execution.pump.abandon()

    def _prune(self) -> None:
        for generation in [g for g, ex in self._executions.items() if not ex.is_running]:
            del self._executions[generation]

    def start(self, generation: int, target: str) -> Execution:
        """Spawn the build tool for ``target`` and start pumping its output.

        Raises ``SpawnError`` when the process cannot be started.
        """
        argv = self.argv_for(target)
        try:
            process = self._popen(
                list(argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                cwd=str(self._cwd) if self._cwd is not None else None,
            )
        except (OSError, ValueError) as exc:
            logger.error("generation %d: cannot start %s: %s", generation, shlex.join(argv), exc)
            raise SpawnError(f"cannot start {shlex.join(argv)}: {exc}") from exc
        if process.stdout is None:
            raise SpawnError(f"no output stream for {shlex.join(argv)}")

        execution = Execution(generation=generation, target=target, argv=argv, process=process)

        def finished(read_failed: bool) -> None:
            returncode = process.wait()
            execution.mark_finished(read_failed)
            logger.info("generation %s: exited with status %s", generation, returncode)
            if self.report_exit_status and not read_failed:
                if execution.pump is not None and not execution.pump.abandoned:
                    self._channel.put(
                        OutputUpdate(
                            generation,
                            exit_status_line(argv, returncode),
                            diagnostic=returncode != 0,
                        )
                    )

        execution.pump = OutputPump(generation, process.stdout, self._channel, on_finished=finished)
        self._executions[generation] = execution
        logger.info("generation %d: started %s (pid %s)", generation, shlex.join(argv), process.pid)
        execution.pump.start()
        return execution


__all__ = [
    "CommandRunner",
    "Execution",
    "STATUS_ABANDONED",
    "STATUS_FAILED",
    "STATUS_FINISHED",
    "STATUS_RUNNING",
    "STATUS_STOPPED",
    "exit_status_line",
]
