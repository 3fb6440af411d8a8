"""Forward named tool invocations to the backend's MCP dispatch endpoint."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from .config import get_settings
from .exceptions import InvalidResponse, ToolCallFailed, TransportFailed
from .http_client import async_http_client
from .logging_config import get_logger
from .types import ToolInvocation

logger = get_logger(__name__)

TOOL_CALL_PATH = "/api/mcp/tools/call"


class CommandProxy:
    """Minimal async client for the backend tool-call API.

    Response bodies are returned untouched; their schema belongs to the backend.
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

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None = None) -> Any:
        """POST ``{"name", "arguments"}`` and return the decoded JSON reply."""

        invocation = ToolInvocation(name=name, arguments=dict(arguments or {}))
        logger.debug("tool_call_dispatched", tool=name, argument_keys=sorted(invocation.arguments))

        try:
            async with async_http_client(
                base_url=self._base_url, transport=self._transport
            ) as client:
                response = await client.post(TOOL_CALL_PATH, json=invocation.to_payload())
        except httpx.HTTPError as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("tool_call_transport_failed", tool=name, error=reason)
            raise TransportFailed(reason) from exc

        if not response.is_success:
            logger.warning("tool_call_failed", tool=name, status_code=response.status_code)
            raise ToolCallFailed(name, response.status_code, response.reason_phrase)

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("tool_call_invalid_response", tool=name, error=str(exc))
            raise InvalidResponse(str(exc)) from exc
