"""Registry of the named commands a GUI shell can invoke."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from ...core.command_proxy import CommandProxy
from ...core.exceptions import ExternalServiceError, UnknownCommand
from ...core.health import HealthProbe
from ...core.logging_config import get_logger
from ...mcp.tools import knowledge, tasks
from ..schemas.commands import (
    CallMcpToolParams,
    CommandResponse,
    CreateAgentTaskParams,
    CreateHumanTaskParams,
    ListAgentTasksParams,
    QueryKnowledgeParams,
    UpdateTaskStatusParams,
    UpdateTodoStatusParams,
    UpsertKnowledgeParams,
)

logger = get_logger(__name__)

Handler = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: Handler
    params: type[BaseModel] | None = None


class CommandSurface:
    """Maps command names to proxy calls and turns runtime failures into result values."""

    def __init__(self, proxy: CommandProxy, probe: HealthProbe, server_url: str) -> None:
        self._proxy = proxy
        self._probe = probe
        self._server_url = server_url.rstrip("/")
        self._commands: dict[str, Command] = {}
        self._register_defaults()

    @property
    def names(self) -> list[str]:
        return list(self._commands)

    def register(
        self,
        name: str,
        handler: Handler,
        params: type[BaseModel] | None = None,
    ) -> None:
        self._commands[name] = Command(name=name, handler=handler, params=params)

    def parse(self, name: str, arguments: Mapping[str, Any] | None = None) -> tuple[Command, Any]:
        """Look up ``name`` and validate its arguments.

        Raises UnknownCommand or pydantic.ValidationError.
        """

        command = self._commands.get(name)
        if command is None:
            raise UnknownCommand(name)
        if command.params is None:
            return command, None
        return command, command.params.model_validate(dict(arguments or {}))

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> CommandResponse:
        command, params = self.parse(name, arguments)
        try:
            result = await command.handler(params)
        except ExternalServiceError as exc:
            logger.warning("command_failed", command=name, error=str(exc))
            return CommandResponse(command=name, ok=False, error=str(exc))
        return CommandResponse(command=name, ok=True, result=result)

    def _register_defaults(self) -> None:
        self.register("get_server_url", self._get_server_url)
        self.register("check_server_health", self._check_server_health)
        self.register("call_mcp_tool", self._call_mcp_tool, CallMcpToolParams)
        self.register("create_human_task", self._create_human_task, CreateHumanTaskParams)
        self.register("create_agent_task", self._create_agent_task, CreateAgentTaskParams)
        self.register("list_human_tasks", self._list_human_tasks)
        self.register("list_agent_tasks", self._list_agent_tasks, ListAgentTasksParams)
        self.register("update_task_status", self._update_task_status, UpdateTaskStatusParams)
        self.register("update_todo_status", self._update_todo_status, UpdateTodoStatusParams)
        self.register("upsert_knowledge", self._upsert_knowledge, UpsertKnowledgeParams)
        self.register("query_knowledge", self._query_knowledge, QueryKnowledgeParams)

    async def _get_server_url(self, _: None) -> str:
        return f"{self._server_url}/ui"

    async def _check_server_health(self, _: None) -> str:
        return await self._probe.check_health()

    async def _call_mcp_tool(self, params: CallMcpToolParams) -> Any:
        return await self._proxy.call_tool(params.name, params.arguments)

    async def _create_human_task(self, params: CreateHumanTaskParams) -> Any:
        return await tasks.create_human_task(self._proxy, params.prompt)

    async def _create_agent_task(self, params: CreateAgentTaskParams) -> Any:
        return await tasks.create_agent_task(
            self._proxy,
            params.human_task_id,
            params.agent_name,
            params.role,
            context_summary=params.context_summary,
            files_modified=params.files_modified,
            todos=params.todos,
        )

    async def _list_human_tasks(self, _: None) -> Any:
        return await tasks.list_human_tasks(self._proxy)

    async def _list_agent_tasks(self, params: ListAgentTasksParams) -> Any:
        return await tasks.list_agent_tasks(
            self._proxy,
            agent_name=params.agent_name,
            human_task_id=params.human_task_id,
        )

    async def _update_task_status(self, params: UpdateTaskStatusParams) -> Any:
        return await tasks.update_task_status(
            self._proxy, params.task_id, params.status, notes=params.notes
        )

    async def _update_todo_status(self, params: UpdateTodoStatusParams) -> Any:
        return await tasks.update_todo_status(
            self._proxy,
            params.agent_task_id,
            params.todo_id,
            params.status,
            notes=params.notes,
        )

    async def _upsert_knowledge(self, params: UpsertKnowledgeParams) -> Any:
        return await knowledge.upsert_knowledge(
            self._proxy, params.collection, params.text, metadata=params.metadata
        )

    async def _query_knowledge(self, params: QueryKnowledgeParams) -> Any:
        return await knowledge.query_knowledge(
            self._proxy, params.collection, params.query, limit=params.limit
        )
