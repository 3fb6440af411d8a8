"""Coordinator task-board tool wrappers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ...core.command_proxy import CommandProxy
from .utils import build_arguments

CREATE_HUMAN_TASK = "coordinator_create_human_task"
CREATE_AGENT_TASK = "coordinator_create_agent_task"
LIST_HUMAN_TASKS = "coordinator_list_human_tasks"
LIST_AGENT_TASKS = "coordinator_list_agent_tasks"
UPDATE_TASK_STATUS = "coordinator_update_task_status"
UPDATE_TODO_STATUS = "coordinator_update_todo_status"


async def create_human_task(proxy: CommandProxy, prompt: str) -> Any:
    """Create a top-level task from a user prompt."""

    return await proxy.call_tool(CREATE_HUMAN_TASK, {"prompt": prompt})


async def create_agent_task(
    proxy: CommandProxy,
    human_task_id: str,
    agent_name: str,
    role: str,
    context_summary: str | None = None,
    files_modified: Sequence[str] | None = None,
    todos: Sequence[dict[str, Any]] | None = None,
) -> Any:
    """
    Create a sub-task for ``agent_name`` under an existing human task.

    ``todos`` entries are passed through as-is; the backend owns their shape
    (typically ``description`` plus optional ``filePath``/``functionName``/``contextHint``).
    """

    arguments = build_arguments(
        {"humanTaskId": human_task_id, "agentName": agent_name, "role": role},
        contextSummary=context_summary,
        filesModified=list(files_modified) if files_modified is not None else None,
        todos=list(todos) if todos is not None else None,
    )
    return await proxy.call_tool(CREATE_AGENT_TASK, arguments)


async def list_human_tasks(proxy: CommandProxy) -> Any:
    return await proxy.call_tool(LIST_HUMAN_TASKS, {})


async def list_agent_tasks(
    proxy: CommandProxy,
    agent_name: str | None = None,
    human_task_id: str | None = None,
) -> Any:
    """List agent tasks, optionally narrowed to one agent and/or one parent task."""

    arguments = build_arguments(agentName=agent_name, humanTaskId=human_task_id)
    return await proxy.call_tool(LIST_AGENT_TASKS, arguments)


async def update_task_status(
    proxy: CommandProxy,
    task_id: str,
    status: str,
    notes: str | None = None,
) -> Any:
    arguments = build_arguments({"taskId": task_id, "status": status}, notes=notes)
    return await proxy.call_tool(UPDATE_TASK_STATUS, arguments)


async def update_todo_status(
    proxy: CommandProxy,
    agent_task_id: str,
    todo_id: str,
    status: str,
    notes: str | None = None,
) -> Any:
    """Update one TODO item inside an agent task."""

    arguments = build_arguments(
        {"agentTaskId": agent_task_id, "todoId": todo_id, "status": status},
        notes=notes,
    )
    return await proxy.call_tool(UPDATE_TODO_STATUS, arguments)
