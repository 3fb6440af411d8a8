"""Application setup/exit hooks that drive the process supervisor."""

from __future__ import annotations

import asyncio
import atexit
from functools import partial

from ...core.config import DesktopSettings, get_settings
from ...core.exceptions import HealthCheckError, StartupError
from ...core.health import HealthProbe
from ...core.logging_config import get_logger
from ...core.paths import ResourceDirProvider, default_resource_dir, detect_runtime_mode, resolve_paths
from ...core.supervisor import ProcessSupervisor
from ...core.types import RuntimeMode

logger = get_logger(__name__)


async def wait_until_healthy(
    probe: HealthProbe,
    *,
    timeout: float,
    interval: float = 0.25,
    backoff: float = 2.0,
    max_interval: float = 2.0,
) -> bool:
    """Poll ``probe`` with exponential backoff until healthy or ``timeout`` passes."""

    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    delay = interval
    attempt = 0

    while True:
        attempt += 1
        # The probe itself never times out, so each attempt gets the remaining budget.
        try:
            await asyncio.wait_for(probe.check_health(), max(deadline - loop.time(), 0))
        except (HealthCheckError, asyncio.TimeoutError) as exc:
            error = str(exc) or "probe timed out"
            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.warning("server_not_ready", attempts=attempt, error=error)
                return False
            logger.debug("server_probe_retry", attempt=attempt, delay=delay, error=error)
            await asyncio.sleep(min(delay, remaining))
            delay = min(delay * backoff, max_interval)
            continue

        logger.info("server_ready", attempts=attempt)
        return True


class DesktopLifecycle:
    """Hooks the host calls at startup and at exit."""

    def __init__(
        self,
        supervisor: ProcessSupervisor,
        probe: HealthProbe,
        *,
        settings: DesktopSettings | None = None,
        resource_dir_provider: ResourceDirProvider | None = None,
    ) -> None:
        self._supervisor = supervisor
        self._probe = probe
        self._settings = settings or get_settings()
        self._resource_dir_provider = resource_dir_provider or partial(default_resource_dir, self._settings)
        self._exit_hook_registered = False

    @property
    def supervisor(self) -> ProcessSupervisor:
        return self._supervisor

    async def on_setup(self) -> None:
        """Start the backend in packaged mode; in development it is run separately."""

        mode = detect_runtime_mode(self._settings)
        if mode is RuntimeMode.DEVELOPMENT:
            logger.info("development_mode", expected_server=self._settings.server_url)
            return

        try:
            paths = resolve_paths(mode, self._resource_dir_provider, settings=self._settings)
            self._supervisor.start(paths)
        except StartupError as exc:
            logger.error("server_start_failed", error=str(exc), hint="ensure the binary is built: make native")
            raise

        if not self._exit_hook_registered:
            atexit.register(self._supervisor.stop)
            self._exit_hook_registered = True

        await wait_until_healthy(
            self._probe,
            timeout=self._settings.startup_timeout_seconds,
            interval=self._settings.health_poll_interval,
        )

    def on_exit(self) -> None:
        self._supervisor.stop()
