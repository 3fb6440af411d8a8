"""Single-shot readiness probe against the backend."""

from __future__ import annotations

import httpx

from .config import get_settings
from .exceptions import RequestFailed, Unhealthy
from .http_client import async_http_client
from .logging_config import get_logger

logger = get_logger(__name__)

HEALTH_PATH = "/health"


class HealthProbe:
    """Check whether the backend answers ``GET /health`` with a 2xx status.

    Each call is exactly one attempt with no timeout; polling belongs to the
    caller.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or get_settings().server_url).rstrip("/")
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def check_health(self) -> str:
        try:
            async with async_http_client(
                base_url=self._base_url, transport=self._transport
            ) as client:
                response = await client.get(HEALTH_PATH)
        except httpx.HTTPError as exc:
            reason = str(exc) or type(exc).__name__
            logger.debug("health_check_unreachable", base_url=self._base_url, error=reason)
            raise RequestFailed(reason) from exc

        if not response.is_success:
            logger.debug("health_check_unhealthy", status_code=response.status_code)
            raise Unhealthy(response.status_code, response.reason_phrase)

        return "healthy"
