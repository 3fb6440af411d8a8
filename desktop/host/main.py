"""FastAPI bridge exposing the command surface to the desktop shell."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from ..core.command_proxy import CommandProxy
from ..core.config import DesktopSettings, env_file_candidates, get_settings, resolved_env_file
from ..core.health import HealthProbe
from ..core.logging_config import configure_logging, get_logger
from ..core.paths import detect_runtime_mode
from ..core.supervisor import ProcessSupervisor
from .api.commands import router as commands_router
from .api.health import router as health_router
from .services.command_surface import CommandSurface
from .services.lifecycle import DesktopLifecycle

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the backend with the bridge and always stop it on the way out."""

    settings: DesktopSettings = app.state.settings
    lifecycle: DesktopLifecycle = app.state.lifecycle
    logger.info(
        "desktop_startup",
        mode=detect_runtime_mode(settings).value,
        log_level=settings.log_level,
        server_url=settings.server_url,
        bridge=f"{settings.desktop_host}:{settings.desktop_port}",
    )
    logger.info(
        "environment_loaded",
        log_file=settings.log_file or "stdout-only",
        env_file=resolved_env_file() or "not-found",
        env_candidates=list(env_file_candidates()),
    )
    try:
        await lifecycle.on_setup()
        yield
    finally:
        # stop() blocks until the backend is reaped; keep the loop free meanwhile.
        await asyncio.to_thread(lifecycle.on_exit)
        logger.info("desktop_shutdown")


def create_app(
    settings: DesktopSettings | None = None,
    *,
    supervisor: ProcessSupervisor | None = None,
    proxy: CommandProxy | None = None,
    probe: HealthProbe | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    proxy = proxy or CommandProxy(settings.server_url)
    probe = probe or HealthProbe(settings.server_url)
    supervisor = supervisor or ProcessSupervisor()

    app = FastAPI(
        title="Hyper Desktop",
        version="0.1.0",
        description="Supervises the Hyper backend and proxies desktop commands to it.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.lifecycle = DesktopLifecycle(supervisor, probe, settings=settings)
    app.state.command_surface = CommandSurface(proxy, probe, settings.server_url)

    @app.middleware("http")
    async def log_incoming_requests(request: Request, call_next):
        response = await call_next(request)
        logger.debug(
            "http_request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response

    app.include_router(health_router)
    app.include_router(commands_router)

    @app.get("/")
    async def index() -> dict[str, str]:
        return {"service": "hyper-desktop", "status": "ok"}

    return app


app = create_app()
