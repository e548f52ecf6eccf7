"""Tests for session status inspection."""

import pytest

from sshsession_mcp.services import SessionPool, inspect_sessions


@pytest.mark.asyncio
async def test_all_sessions_naturally_sorted(make_connection) -> None:
    pool = SessionPool()
    down = make_connection("web10")
    await down.disconnect()
    await pool.put("web10", down)
    await pool.put("web2", make_connection("web2", username="ops", port=2222))

    statuses = await inspect_sessions(pool)

    assert [s.host for s in statuses] == ["web2", "web10"]
    assert statuses[0].connected is True
    assert statuses[0].username == "ops"
    assert statuses[0].port == 2222
    assert statuses[1].connected is False


@pytest.mark.asyncio
async def test_named_hosts_report_missing_entries(make_connection) -> None:
    pool = SessionPool()
    await pool.put("web1", make_connection("web1"))

    statuses = await inspect_sessions(pool, ["ghost", "web1"])

    assert [s.host for s in statuses] == ["ghost", "web1"]
    assert statuses[0].connected is None
    assert statuses[0].exists is False
    assert statuses[1].exists is True


@pytest.mark.asyncio
async def test_empty_pool() -> None:
    assert await inspect_sessions(SessionPool()) == []
