import json
import threading

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from desktop.core.command_proxy import CommandProxy
from desktop.core.config import DesktopSettings
from desktop.core.health import HealthProbe
from desktop.core.supervisor import ProcessSupervisor
from desktop.core.types import SupervisorState
from desktop.host.main import create_app


class FakeBackend:
    def __init__(self, tool_status=200, health_status=200):
        self.tool_status = tool_status
        self.health_status = health_status
        self.tool_calls = []

    def __call__(self, request):
        if request.url.path == "/health":
            return httpx.Response(self.health_status, json={"status": "healthy"})
        body = json.loads(request.content)
        self.tool_calls.append(body)
        return httpx.Response(self.tool_status, json={"echo": body["name"]})


def _app(backend, spawner):
    settings = DesktopSettings(_env_file=None, runtime_mode="development")
    transport = httpx.MockTransport(backend)
    return create_app(
        settings,
        supervisor=ProcessSupervisor(spawner=spawner),
        proxy=CommandProxy(settings.server_url, transport=transport),
        probe=HealthProbe(settings.server_url, transport=transport),
    )


def _client(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_list_commands_exposes_command_surface(spawner):
    async with _client(_app(FakeBackend(), spawner)) as client:
        response = await client.get("/commands/")

    assert response.status_code == 200
    names = set(response.json()["commands"])
    assert {
        "get_server_url",
        "check_server_health",
        "call_mcp_tool",
        "create_human_task",
        "create_agent_task",
        "list_human_tasks",
        "list_agent_tasks",
        "update_task_status",
        "upsert_knowledge",
        "query_knowledge",
    } <= names


@pytest.mark.asyncio
async def test_get_server_url(spawner):
    async with _client(_app(FakeBackend(), spawner)) as client:
        response = await client.post("/commands/get_server_url", json={})

    assert response.json() == {
        "command": "get_server_url",
        "ok": True,
        "result": "http://localhost:7095/ui",
        "error": None,
    }


@pytest.mark.asyncio
async def test_list_agent_tasks_forwards_camel_case_arguments(spawner):
    backend = FakeBackend()
    async with _client(_app(backend, spawner)) as client:
        response = await client.post(
            "/commands/list_agent_tasks",
            json={"arguments": {"humanTaskId": "t1"}},
        )

    assert response.status_code == 200
    assert response.json()["result"] == {"echo": "coordinator_list_agent_tasks"}
    assert backend.tool_calls == [
        {"name": "coordinator_list_agent_tasks", "arguments": {"humanTaskId": "t1"}}
    ]


@pytest.mark.asyncio
async def test_call_mcp_tool_passes_arguments_verbatim(spawner):
    backend = FakeBackend()
    async with _client(_app(backend, spawner)) as client:
        await client.post(
            "/commands/call_mcp_tool",
            json={"arguments": {"name": "coordinator_clear_task_board", "arguments": {"confirm": True}}},
        )

    assert backend.tool_calls == [
        {"name": "coordinator_clear_task_board", "arguments": {"confirm": True}}
    ]


@pytest.mark.asyncio
async def test_backend_failure_is_returned_as_result_value(spawner):
    backend = FakeBackend(tool_status=500)
    async with _client(_app(backend, spawner)) as client:
        response = await client.post(
            "/commands/create_human_task", json={"arguments": {"prompt": "hi"}}
        )

    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is False
    assert "500" in payload["error"]


@pytest.mark.asyncio
async def test_check_server_health_reports_unhealthy(spawner):
    async with _client(_app(FakeBackend(health_status=503), spawner)) as client:
        response = await client.post("/commands/check_server_health", json={})

    payload = response.json()
    assert payload["ok"] is False
    assert "503" in payload["error"]


@pytest.mark.asyncio
async def test_unknown_command_is_404(spawner):
    async with _client(_app(FakeBackend(), spawner)) as client:
        response = await client.post("/commands/launch_rockets", json={})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_missing_required_argument_is_422(spawner):
    backend = FakeBackend()
    async with _client(_app(backend, spawner)) as client:
        response = await client.post(
            "/commands/create_agent_task", json={"arguments": {"humanTaskId": "h1"}}
        )

    assert response.status_code == 422
    assert backend.tool_calls == []


@pytest.mark.asyncio
async def test_health_endpoint_reports_supervisor_state(spawner):
    async with _client(_app(FakeBackend(), spawner)) as client:
        response = await client.get("/health/")

    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["backend_supervised"] is False
    assert payload["supervisor_state"] == "not_started"


class ThreadRecordingSupervisor(ProcessSupervisor):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.stop_threads = []

    def stop(self):
        self.stop_threads.append(threading.current_thread())
        super().stop()


@pytest.mark.asyncio
async def test_lifespan_stops_backend_off_the_event_loop(spawner, backend_dir, monkeypatch):
    monkeypatch.setattr("desktop.host.services.lifecycle.atexit.register", lambda fn: fn)
    settings = DesktopSettings(
        _env_file=None,
        runtime_mode="packaged",
        resource_dir=str(backend_dir),
        startup_timeout_seconds=1.0,
        health_poll_interval=0.01,
    )
    transport = httpx.MockTransport(FakeBackend())
    supervisor = ThreadRecordingSupervisor(spawner=spawner)
    app = create_app(
        settings,
        supervisor=supervisor,
        proxy=CommandProxy(settings.server_url, transport=transport),
        probe=HealthProbe(settings.server_url, transport=transport),
    )

    async with app.router.lifespan_context(app):
        assert supervisor.is_running

    assert supervisor.state is SupervisorState.STOPPED
    assert spawner.spawned[0].calls == ["terminate", "wait"]
    assert supervisor.stop_threads
    assert all(thread is not threading.main_thread() for thread in supervisor.stop_threads)
