"""Shared fixtures for SSH Session MCP tests."""

from collections.abc import Callable, Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest

from sshsession_mcp.models import ConnectionState
from sshsession_mcp.services.connection import Connection
from sshsession_mcp.services.state import reset_state


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Disable host key lookup and drop any global dependency container."""
    monkeypatch.setenv("SSHSESSION_KNOWN_HOSTS", "none")
    for key in (
        "SSHSESSION_COMMAND_TIMEOUT",
        "SSHSESSION_DISPATCH_STRATEGY",
        "SSHSESSION_DEFAULT_PORT",
        "SSHSESSION_STRICT_HOST_KEY_CHECKING",
        "SSHSESSION_LOG_LEVEL",
        "SSHSESSION_LOG_COLORS",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_state()
    yield
    reset_state()


def make_ssh_conn(
    stdout: str | bytes = "", stderr: str | bytes = "", returncode: int | None = 0
) -> MagicMock:
    """Build a mock asyncssh client connection.

    Each create_process call returns a mock process whose wait() awaits
    ``ssh_conn.run(command, check=...)``, so tests script replies through
    ``run``. Created processes are kept in ``ssh_conn.processes``.
    """
    ssh_conn = MagicMock()
    ssh_conn.run = AsyncMock(
        return_value=MagicMock(stdout=stdout, stderr=stderr, returncode=returncode)
    )
    ssh_conn.processes = []

    async def create_process(command: str, **kwargs):
        async def wait(check: bool = False):
            return await ssh_conn.run(command, check=check)

        process = MagicMock()
        process.wait = AsyncMock(side_effect=wait)
        process.close = MagicMock()
        process.wait_closed = AsyncMock()
        ssh_conn.processes.append(process)
        return process

    ssh_conn.create_process = AsyncMock(side_effect=create_process)
    ssh_conn.close = MagicMock()
    ssh_conn.wait_closed = AsyncMock()
    return ssh_conn


@pytest.fixture
def make_connection() -> Callable[..., Connection]:
    """Factory for Connection objects already in the CONNECTED state."""

    def factory(
        host: str,
        stdout: str = "",
        stderr: str = "",
        returncode: int | None = 0,
        username: str = "admin",
        port: int = 22,
    ) -> Connection:
        conn = Connection(host, port=port, username=username, known_hosts=None)
        conn._conn = make_ssh_conn(stdout, stderr, returncode)
        conn.state = ConnectionState.CONNECTED
        return conn

    return factory


@pytest.fixture
def ssh_conn_factory() -> Callable[..., MagicMock]:
    """Factory for mock asyncssh client connections."""
    return make_ssh_conn
