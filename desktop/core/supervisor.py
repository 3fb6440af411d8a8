"""Lifecycle management for the single backend server process."""

from __future__ import annotations

import subprocess
import threading
from collections.abc import Callable, Sequence

from .config import get_settings
from .exceptions import BinaryNotFound, SpawnFailed, SupervisorStopped
from .logging_config import get_logger
from .types import ProcessHandle, ResolvedPaths, SupervisedProcess, SupervisorState

logger = get_logger(__name__)

Spawner = Callable[[Sequence[str]], ProcessHandle]


def _inherit_stdio_spawner(args: Sequence[str]) -> ProcessHandle:
    # stdout/stderr left as None so the backend writes straight to our streams.
    return subprocess.Popen(list(args), stdout=None, stderr=None)


class ProcessSupervisor:
    """Owns the backend child process.

    The supervisor moves through ``not_started -> running -> stopped`` and never
    restarts; a fresh instance is needed to run the backend again. ``start`` and
    ``stop`` are serialised by an internal lock so concurrent calls never see a
    half-updated process slot.
    """

    def __init__(
        self,
        *,
        spawner: Spawner | None = None,
        mode_flag: str | None = None,
        stop_timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self._spawner = spawner or _inherit_stdio_spawner
        self._mode_flag = mode_flag or settings.server_mode_flag
        self._stop_timeout = stop_timeout if stop_timeout is not None else settings.stop_timeout_seconds
        self._lock = threading.Lock()
        self._process: SupervisedProcess | None = None
        self._state = SupervisorState.NOT_STARTED

    @property
    def state(self) -> SupervisorState:
        with self._lock:
            return self._state

    @property
    def process(self) -> SupervisedProcess | None:
        with self._lock:
            return self._process

    @property
    def is_running(self) -> bool:
        return self.process is not None

    def start(self, paths: ResolvedPaths) -> SupervisedProcess:
        """Launch the backend binary in HTTP mode and remember its handle."""

        with self._lock:
            if self._state is SupervisorState.STOPPED:
                raise SupervisorStopped()

            binary_path = paths.binary_path
            if not binary_path.exists():
                logger.error("supervisor_binary_missing", path=str(binary_path))
                raise BinaryNotFound(binary_path)

            logger.info("supervisor_starting", path=str(binary_path), mode=paths.mode.value)

            # The backend discovers .env.hyper on its own; we only report on it.
            if paths.config_path.is_file():
                logger.info("config_file_found", path=str(paths.config_path))
            else:
                logger.warning("config_file_missing", path=str(paths.config_path))

            try:
                handle = self._spawner([str(binary_path), self._mode_flag])
            except (OSError, ValueError) as exc:
                logger.error("supervisor_spawn_failed", path=str(binary_path), error=str(exc))
                raise SpawnFailed(binary_path, str(exc)) from exc

            if self._process is not None:
                logger.warning("supervisor_process_replaced", previous_pid=self._process.pid)

            self._process = SupervisedProcess(handle=handle, pid=handle.pid)
            self._state = SupervisorState.RUNNING
            logger.info("supervisor_process_started", pid=handle.pid)
            return self._process

    def stop(self) -> None:
        """Terminate the backend if one is running; safe to call repeatedly."""

        with self._lock:
            process, self._process = self._process, None
            if process is None:
                return

            logger.info("supervisor_stopping", pid=process.pid)
            try:
                self._terminate(process)
            finally:
                self._state = SupervisorState.STOPPED
            logger.info("supervisor_process_stopped", pid=process.pid)

    def _terminate(self, process: SupervisedProcess) -> None:
        handle = process.handle
        try:
            handle.terminate()
        except OSError as exc:
            # Already reaped or gone; wait() below still collects the exit status.
            logger.warning("supervisor_terminate_failed", pid=process.pid, error=str(exc))

        try:
            handle.wait(timeout=self._stop_timeout)
            return
        except subprocess.TimeoutExpired:
            logger.warning(
                "supervisor_stop_timeout",
                pid=process.pid,
                timeout=self._stop_timeout,
            )
        except OSError as exc:
            # ChildProcessError when someone else already reaped the child.
            logger.warning("supervisor_wait_failed", pid=process.pid, error=str(exc))
            return

        try:
            handle.kill()
        except OSError as exc:
            logger.warning("supervisor_kill_failed", pid=process.pid, error=str(exc))
        try:
            handle.wait()
        except OSError as exc:
            logger.warning("supervisor_wait_failed", pid=process.pid, error=str(exc))
