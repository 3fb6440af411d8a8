"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def health_check(request: Request) -> dict[str, str | bool]:
    supervisor = request.app.state.lifecycle.supervisor
    return {
        "status": "ok",
        "backend_supervised": supervisor.is_running,
        "supervisor_state": supervisor.state.value,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }
