"""Tests for the sshsession command-line interface."""

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from sshsession_mcp.cli import main
from sshsession_mcp.services.shell import InteractiveShell


@pytest.fixture(autouse=True)
def no_log_handlers() -> Iterator[None]:
    """Keep CLI runs from attaching handlers to the runner's streams."""
    with patch("sshsession_mcp.cli.configure_logging"):
        yield


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--version"])

    assert result.exit_code == 0
    assert "sshsession" in result.output


def test_run_prints_report(runner: CliRunner, ssh_conn_factory) -> None:
    with patch("asyncssh.connect", new_callable=AsyncMock) as mock_connect:
        mock_connect.side_effect = lambda *a, **kw: ssh_conn_factory(stdout="up\n")
        result = runner.invoke(
            main,
            ["run", "uptime", "-H", "web1", "-H", "web2", "-u", "root"],
            input="secret\n",
        )

    assert result.exit_code == 0, result.output
    assert "═══ web1 " in result.output
    assert "2/2 hosts succeeded, 0 skipped" in result.output
    assert mock_connect.call_args.kwargs["password"] == "secret"


def test_run_exits_nonzero_when_all_fail(runner: CliRunner, ssh_conn_factory) -> None:
    with patch("asyncssh.connect", new_callable=AsyncMock) as mock_connect:
        mock_connect.side_effect = lambda *a, **kw: ssh_conn_factory(returncode=1)
        result = runner.invoke(
            main, ["run", "false", "-H", "web1", "-u", "root", "-q"], input="pw\n"
        )

    assert result.exit_code == 1
    assert "0/1 hosts succeeded" in result.output


def test_run_exits_nonzero_when_nothing_connected(runner: CliRunner) -> None:
    with patch("asyncssh.connect", new_callable=AsyncMock) as mock_connect:
        mock_connect.side_effect = OSError("Connection refused")
        result = runner.invoke(
            main, ["run", "uptime", "-H", "web1", "-u", "root"], input="pw\n"
        )

    assert result.exit_code == 1
    assert "[skipped] web1" in result.output


def test_run_missing_key_file(runner: CliRunner, tmp_path) -> None:
    result = runner.invoke(
        main,
        ["run", "uptime", "-H", "web1", "-u", "root", "-i", str(tmp_path / "nope")],
    )

    assert result.exit_code == 1
    assert "Key file not found" in result.output


def test_shell_runs_commands(runner: CliRunner, ssh_conn_factory) -> None:
    ssh_conn = ssh_conn_factory()
    ssh_conn.run = AsyncMock(
        side_effect=[
            MagicMock(stdout="/root\n", stderr="", returncode=0),
            MagicMock(stdout="Linux\n", stderr="", returncode=0),
        ]
    )
    lines = iter(["uname", "exit"])

    async def read_line(prompt: str) -> str:
        return next(lines)

    with patch("asyncssh.connect", new_callable=AsyncMock) as mock_connect, \
         patch("sshsession_mcp.cli.InteractiveShell") as mock_shell_cls:
        mock_connect.return_value = ssh_conn
        mock_shell_cls.side_effect = lambda pool, host, **kw: InteractiveShell(
            pool, host, read_line=read_line, **kw
        )
        result = runner.invoke(main, ["shell", "web1", "-u", "root"], input="pw\n")

    assert result.exit_code == 0, result.output
    assert "Linux" in result.output
    ssh_conn.close.assert_called_once()


def test_shell_connect_failure(runner: CliRunner) -> None:
    with patch("asyncssh.connect", new_callable=AsyncMock) as mock_connect:
        mock_connect.side_effect = OSError("No route to host")
        result = runner.invoke(main, ["shell", "web1", "-u", "root"], input="pw\n")

    assert result.exit_code == 1
    assert "No route to host" in result.output


def test_serve_runs_server(runner: CliRunner) -> None:
    with patch("sshsession_mcp.__main__.run_server") as mock_run:
        result = runner.invoke(main, ["serve"])

    assert result.exit_code == 0
    mock_run.assert_called_once()


def test_log_level_comes_from_settings(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("SSHSESSION_LOG_LEVEL", "debug")
    monkeypatch.setenv("SSHSESSION_LOG_COLORS", "false")

    with patch("sshsession_mcp.cli.configure_logging") as mock_configure, \
         patch("sshsession_mcp.__main__.run_server"):
        result = runner.invoke(main, ["serve"])

    assert result.exit_code == 0
    mock_configure.assert_called_once_with("DEBUG", False, default_level="WARNING")


def test_shell_password_option_skips_prompt(runner: CliRunner, ssh_conn_factory) -> None:
    ssh_conn = ssh_conn_factory(stdout="/root\n")

    async def read_line(prompt: str) -> str:
        raise EOFError

    with patch("asyncssh.connect", new_callable=AsyncMock) as mock_connect, \
         patch("sshsession_mcp.cli.InteractiveShell") as mock_shell_cls:
        mock_connect.return_value = ssh_conn
        mock_shell_cls.side_effect = lambda pool, host, **kw: InteractiveShell(
            pool, host, read_line=read_line, **kw
        )
        result = runner.invoke(main, ["shell", "web1", "-u", "root", "--password", "pw"])

    assert result.exit_code == 0, result.output
    assert "Password for" not in result.output
    assert mock_connect.call_args.kwargs["password"] == "pw"


def test_run_password_option(runner: CliRunner, ssh_conn_factory) -> None:
    with patch("asyncssh.connect", new_callable=AsyncMock) as mock_connect:
        mock_connect.side_effect = lambda *a, **kw: ssh_conn_factory(stdout="up\n")
        result = runner.invoke(
            main, ["run", "uptime", "-H", "web1", "-u", "root", "--password", "s3cret"]
        )

    assert result.exit_code == 0, result.output
    assert mock_connect.call_args.kwargs["password"] == "s3cret"
