import pytest

from desktop.core.exceptions import ToolCallFailed
from desktop.mcp.tools import knowledge, tasks
from desktop.mcp.tools.utils import build_arguments


class FakeProxy:
    def __init__(self, result=None, error=None):
        self.calls = []
        self.result = {"ok": True} if result is None else result
        self.error = error

    async def call_tool(self, name, arguments=None):
        self.calls.append((name, arguments))
        if self.error is not None:
            raise self.error
        return self.result


def test_build_arguments_omits_none_but_keeps_empty_values():
    arguments = build_arguments({"taskId": "t1"}, notes=None, summary="", files=[])

    assert arguments == {"taskId": "t1", "summary": "", "files": []}


@pytest.mark.asyncio
async def test_create_human_task():
    proxy = FakeProxy()

    await tasks.create_human_task(proxy, "Build authentication")

    assert proxy.calls == [("coordinator_create_human_task", {"prompt": "Build authentication"})]


@pytest.mark.asyncio
async def test_create_agent_task_without_optionals_sends_required_keys_only():
    proxy = FakeProxy()

    await tasks.create_agent_task(proxy, "h1", "agent", "role")

    name, arguments = proxy.calls[0]
    assert name == "coordinator_create_agent_task"
    assert set(arguments) == {"humanTaskId", "agentName", "role"}
    assert arguments == {"humanTaskId": "h1", "agentName": "agent", "role": "role"}


@pytest.mark.asyncio
async def test_create_agent_task_with_all_optionals():
    proxy = FakeProxy()
    todos = [{"description": "write handler", "filePath": "api/auth.go"}]

    await tasks.create_agent_task(
        proxy,
        "h1",
        "go-dev",
        "backend",
        context_summary="auth service",
        files_modified=("api/auth.go",),
        todos=todos,
    )

    _, arguments = proxy.calls[0]
    assert arguments["contextSummary"] == "auth service"
    assert arguments["filesModified"] == ["api/auth.go"]
    assert arguments["todos"] == todos


@pytest.mark.asyncio
async def test_create_agent_task_keeps_explicitly_empty_file_list():
    proxy = FakeProxy()

    await tasks.create_agent_task(proxy, "h1", "agent", "role", files_modified=[])

    assert proxy.calls[0][1]["filesModified"] == []


@pytest.mark.asyncio
async def test_list_human_tasks_sends_empty_arguments():
    proxy = FakeProxy()

    await tasks.list_human_tasks(proxy)

    assert proxy.calls == [("coordinator_list_human_tasks", {})]


@pytest.mark.asyncio
async def test_list_agent_tasks_filters_by_parent_only():
    proxy = FakeProxy()

    await tasks.list_agent_tasks(proxy, None, "t1")

    assert proxy.calls == [("coordinator_list_agent_tasks", {"humanTaskId": "t1"})]


@pytest.mark.asyncio
async def test_list_agent_tasks_without_filters():
    proxy = FakeProxy()

    await tasks.list_agent_tasks(proxy)

    assert proxy.calls == [("coordinator_list_agent_tasks", {})]


@pytest.mark.asyncio
async def test_update_task_status_notes_are_optional():
    proxy = FakeProxy()

    await tasks.update_task_status(proxy, "t1", "completed")
    await tasks.update_task_status(proxy, "t1", "blocked", notes="waiting on review")

    assert proxy.calls[0][1] == {"taskId": "t1", "status": "completed"}
    assert proxy.calls[1][1] == {"taskId": "t1", "status": "blocked", "notes": "waiting on review"}


@pytest.mark.asyncio
async def test_update_todo_status():
    proxy = FakeProxy()

    await tasks.update_todo_status(proxy, "a1", "todo-1", "in_progress")

    assert proxy.calls == [
        (
            "coordinator_update_todo_status",
            {"agentTaskId": "a1", "todoId": "todo-1", "status": "in_progress"},
        )
    ]


@pytest.mark.asyncio
async def test_upsert_knowledge_metadata_passthrough():
    proxy = FakeProxy()

    await knowledge.upsert_knowledge(proxy, "adr", "Use Qdrant")
    await knowledge.upsert_knowledge(proxy, "adr", "Use Qdrant", metadata={"agentName": "arch"})

    assert proxy.calls[0] == ("coordinator_upsert_knowledge", {"collection": "adr", "text": "Use Qdrant"})
    assert proxy.calls[1][1]["metadata"] == {"agentName": "arch"}


@pytest.mark.asyncio
async def test_query_knowledge_limit_is_optional():
    proxy = FakeProxy()

    await knowledge.query_knowledge(proxy, "adr", "vector store")
    await knowledge.query_knowledge(proxy, "adr", "vector store", limit=3)

    assert proxy.calls[0][1] == {"collection": "adr", "query": "vector store"}
    assert proxy.calls[1][1] == {"collection": "adr", "query": "vector store", "limit": 3}


@pytest.mark.asyncio
async def test_wrappers_propagate_proxy_errors_unchanged():
    error = ToolCallFailed("coordinator_list_human_tasks", 500)
    proxy = FakeProxy(error=error)

    with pytest.raises(ToolCallFailed) as excinfo:
        await tasks.list_human_tasks(proxy)

    assert excinfo.value is error
