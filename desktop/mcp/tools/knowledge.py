"""Knowledge-base tool wrappers."""

from __future__ import annotations

from typing import Any

from ...core.command_proxy import CommandProxy
from .utils import build_arguments

UPSERT_KNOWLEDGE = "coordinator_upsert_knowledge"
QUERY_KNOWLEDGE = "coordinator_query_knowledge"


async def upsert_knowledge(
    proxy: CommandProxy,
    collection: str,
    text: str,
    metadata: Any = None,
) -> Any:
    """
    Store a text entry in a named collection.

    Parameters:
    - `collection`: collection name, e.g. `task:<id>`, `adr`, `data-contracts`.
    - `metadata`: optional JSON value (taskId, agentName, ...), forwarded untouched.
    """

    arguments = build_arguments({"collection": collection, "text": text}, metadata=metadata)
    return await proxy.call_tool(UPSERT_KNOWLEDGE, arguments)


async def query_knowledge(
    proxy: CommandProxy,
    collection: str,
    query: str,
    limit: int | None = None,
) -> Any:
    """Semantic search over one collection; the backend picks the default limit."""

    arguments = build_arguments({"collection": collection, "query": query}, limit=limit)
    return await proxy.call_tool(QUERY_KNOWLEDGE, arguments)
