"""Tests for the interactive pass-through shell."""

import asyncio
from collections.abc import Iterable
from unittest.mock import AsyncMock, MagicMock

import asyncssh
import pytest

from sshsession_mcp.services import (
    ConnectionLostError,
    InteractiveShell,
    SessionNotFoundError,
    SessionPool,
)


class ScriptedInput:
    """LineReader replaying fixed lines, then EOF."""

    def __init__(self, lines: Iterable[str]) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def reply(stdout: str = "", stderr: str = "", returncode: int = 0) -> MagicMock:
    return MagicMock(stdout=stdout, stderr=stderr, returncode=returncode)


@pytest.fixture
def pool() -> SessionPool:
    return SessionPool()


@pytest.mark.asyncio
async def test_prompt_shows_user_host_and_cwd(pool: SessionPool, make_connection) -> None:
    conn = make_connection("web1", username="deploy")
    conn._conn.run = AsyncMock(return_value=reply("/home/deploy\n"))
    await pool.put("web1", conn)
    reader = ScriptedInput([])

    await InteractiveShell(pool, "web1", read_line=reader, write=MagicMock()).run()

    assert reader.prompts == ["[deploy@web1]: /home/deploy$ "]


@pytest.mark.asyncio
async def test_prompt_falls_back_when_pwd_fails(
    pool: SessionPool, make_connection
) -> None:
    conn = make_connection("web1", username="root")
    conn._conn.run = AsyncMock(return_value=reply(stderr="pwd: denied", returncode=1))
    await pool.put("web1", conn)
    reader = ScriptedInput([])
    write = MagicMock()

    await InteractiveShell(pool, "web1", read_line=reader, write=write).run()

    assert reader.prompts == ["[root@web1]: unknown$ "]
    assert "Could not determine working directory" in write.call_args_list[0].args[0]


@pytest.mark.asyncio
async def test_runs_commands_until_exit(pool: SessionPool, make_connection) -> None:
    conn = make_connection("web1")
    conn._conn.run = AsyncMock(
        side_effect=[
            reply("/root"),
            reply("file1\nfile2\n"),
            reply(stderr="ls: nope\n", returncode=2),
        ]
    )
    await pool.put("web1", conn)
    write = MagicMock()
    reader = ScriptedInput(["ls", "", "   ", "ls nope", "EXIT", "never"])

    executed = await InteractiveShell(pool, "web1", read_line=reader, write=write).run()

    assert executed == 2
    assert [c.args[0] for c in write.call_args_list] == ["file1\nfile2", "ls: nope"]
    assert reader.lines == ["never"]


@pytest.mark.asyncio
async def test_quit_sentinel(pool: SessionPool, make_connection) -> None:
    await pool.put("web1", make_connection("web1", stdout="/"))
    reader = ScriptedInput(["quit", "uptime"])

    executed = await InteractiveShell(
        pool, "web1", read_line=reader, write=MagicMock()
    ).run()

    assert executed == 0


@pytest.mark.asyncio
async def test_timeout_keeps_loop_alive(pool: SessionPool, make_connection) -> None:
    conn = make_connection("web1")
    calls = 0

    async def run(command, **kwargs):
        nonlocal calls
        calls += 1
        if command == "sleep 100":
            await asyncio.sleep(10)
        return reply("/" if command == "pwd" else "ok")

    conn._conn.run = AsyncMock(side_effect=run)
    await pool.put("web1", conn)
    write = MagicMock()

    executed = await InteractiveShell(
        pool,
        "web1",
        read_line=ScriptedInput(["sleep 100", "echo ok"]),
        write=write,
        timeout=0.01,
    ).run()

    assert executed == 1
    outputs = [c.args[0] for c in write.call_args_list]
    assert "timed out" in outputs[0]
    assert outputs[1] == "ok"


@pytest.mark.asyncio
async def test_missing_session_raises(pool: SessionPool) -> None:
    with pytest.raises(SessionNotFoundError):
        await InteractiveShell(pool, "ghost", read_line=ScriptedInput([])).run()


@pytest.mark.asyncio
async def test_disconnected_session_raises(pool: SessionPool, make_connection) -> None:
    conn = make_connection("web1")
    await conn.disconnect()
    await pool.put("web1", conn)

    with pytest.raises(ConnectionLostError):
        await InteractiveShell(pool, "web1", read_line=ScriptedInput([])).run()


@pytest.mark.asyncio
async def test_connection_lost_mid_session(pool: SessionPool, make_connection) -> None:
    conn = make_connection("web1")
    conn._conn.run = AsyncMock(
        side_effect=[reply("/"), ConnectionResetError("reset by peer")]
    )
    await pool.put("web1", conn)

    with pytest.raises(ConnectionLostError):
        await InteractiveShell(
            pool, "web1", read_line=ScriptedInput(["uptime"]), write=MagicMock()
        ).run()


@pytest.mark.asyncio
async def test_protocol_error_on_pwd_is_not_fatal(
    pool: SessionPool, make_connection
) -> None:
    conn = make_connection("web1", username="root")
    conn._conn.run = AsyncMock(
        side_effect=[asyncssh.Error(0, "subsystem failure"), reply("up 3 days\n")]
    )
    await pool.put("web1", conn)
    reader = ScriptedInput(["uptime"])
    write = MagicMock()

    executed = await InteractiveShell(pool, "web1", read_line=reader, write=write).run()

    assert executed == 1
    assert reader.prompts[0] == "[root@web1]: unknown$ "
    outputs = [c.args[0] for c in write.call_args_list]
    assert outputs[0].startswith("Could not determine working directory")
    assert outputs[1] == "up 3 days"


@pytest.mark.asyncio
async def test_protocol_error_on_command_keeps_loop_alive(
    pool: SessionPool, make_connection
) -> None:
    conn = make_connection("web1")
    conn._conn.run = AsyncMock(
        side_effect=[
            reply("/root\n"),
            asyncssh.Error(0, "channel request refused"),
            reply("ok\n"),
        ]
    )
    await pool.put("web1", conn)
    write = MagicMock()

    executed = await InteractiveShell(
        pool, "web1", read_line=ScriptedInput(["bad", "echo ok"]), write=write
    ).run()

    assert executed == 1
    assert conn.is_connected
    outputs = [c.args[0] for c in write.call_args_list]
    assert outputs[0].startswith("Error: ")
    assert "channel request refused" in outputs[0]
    assert outputs[1] == "ok"
