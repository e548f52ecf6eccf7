"""Tests for server wiring: tools, resources, health and lifespan."""

from typing import Any

import pytest
from fastmcp import Client
from starlette.testclient import TestClient

from sshsession_mcp.config import Config
from sshsession_mcp.dependencies import Dependencies
from sshsession_mcp.server import app_lifespan, create_server
from sshsession_mcp.services.state import get_deps, set_deps


class TestHealthCheck:
    """Tests for health check endpoint."""

    @pytest.fixture
    def client(self) -> TestClient:
        server = create_server()
        return TestClient(server.http_app())

    def test_health_returns_ok(self, client: Any) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.text == "OK"
        assert "text/plain" in response.headers["content-type"]


@pytest.mark.asyncio
async def test_tools_and_resource_registered() -> None:
    server = create_server()

    async with Client(server) as client:
        tools = {tool.name for tool in await client.list_tools()}
        resources = {str(r.uri) for r in await client.list_resources()}

    assert tools == {"ssh_connect", "ssh_remove", "ssh_status", "ssh_invoke"}
    assert "sessions://list" in resources


@pytest.mark.asyncio
async def test_status_tool_over_mcp() -> None:
    server = create_server()

    async with Client(server) as client:
        result = await client.call_tool("ssh_status", {})

    assert "No SSH sessions." in result.content[0].text


@pytest.mark.asyncio
async def test_lifespan_disposes_sessions(make_connection) -> None:
    deps = Dependencies.from_config(Config.from_env())
    set_deps(deps)
    conn = make_connection("web1")
    await deps.pool.put("web1", conn)

    async with app_lifespan(create_server()) as state:
        assert state["pool_size"] == 1
        assert get_deps() is deps

    assert conn.is_disposed
    assert deps.pool.pool_size == 0
