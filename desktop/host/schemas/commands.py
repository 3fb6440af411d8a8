"""Pydantic schemas for host-facing commands."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CommandParams(BaseModel):
    """Base for command arguments; accepts camelCase keys or field names."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class CallMcpToolParams(CommandParams):
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class CreateHumanTaskParams(CommandParams):
    prompt: str


class CreateAgentTaskParams(CommandParams):
    human_task_id: str = Field(..., alias="humanTaskId")
    agent_name: str = Field(..., alias="agentName")
    role: str
    context_summary: str | None = Field(None, alias="contextSummary")
    files_modified: list[str] | None = Field(None, alias="filesModified")
    todos: list[dict[str, Any]] | None = None


class ListAgentTasksParams(CommandParams):
    agent_name: str | None = Field(None, alias="agentName")
    human_task_id: str | None = Field(None, alias="humanTaskId")


class UpdateTaskStatusParams(CommandParams):
    task_id: str = Field(..., alias="taskId")
    status: str
    notes: str | None = None


class UpdateTodoStatusParams(CommandParams):
    agent_task_id: str = Field(..., alias="agentTaskId")
    todo_id: str = Field(..., alias="todoId")
    status: str
    notes: str | None = None


class UpsertKnowledgeParams(CommandParams):
    collection: str
    text: str
    metadata: Any = None


class QueryKnowledgeParams(CommandParams):
    collection: str
    query: str
    limit: int | None = None


class CommandRequest(BaseModel):
    arguments: dict[str, Any] = Field(default_factory=dict)


class CommandResponse(BaseModel):
    command: str
    ok: bool
    result: Any = None
    error: str | None = Field(None, description="Readable failure description when ok is false")
