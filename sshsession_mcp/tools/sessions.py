"""Session management tools exposed over MCP."""

import logging

from sshsession_mcp.models import AuthSpec
from sshsession_mcp.protocols import ConfirmCallback
from sshsession_mcp.services import SessionError, inspect_sessions
from sshsession_mcp.services.state import get_deps
from sshsession_mcp.tools.formatting import format_outcomes, format_report, format_statuses

logger = logging.getLogger(__name__)


def _confirm_all(confirm_all: bool) -> ConfirmCallback | None:
    """Confirmation callback for MCP callers, who confirm up front."""
    if not confirm_all:
        return None
    return lambda message: True


async def ssh_connect(
    hosts: list[str],
    username: str,
    password: str | None = None,
    key_file: str | None = None,
    passphrase: str | None = None,
    port: int | None = None,
    reconnect: bool = False,
) -> str:
    """Open pooled SSH sessions to one or more hosts.

    A key file takes precedence over a password. Hosts that already have a
    live session are skipped unless reconnect is set. A failure on one host
    does not stop the others.

    Args:
        hosts: Host names or IP addresses (case-sensitive identifiers).
        username: Remote user.
        password: Password, used when no key_file is given.
        key_file: Path to a private key on the server running this tool.
        passphrase: Passphrase for key_file.
        port: SSH port (default from SSHSESSION_DEFAULT_PORT).
        reconnect: Replace existing sessions.

    Examples:
        ssh_connect(["10.0.0.1", "10.0.0.2"], "admin", key_file="~/.ssh/id_ed25519")
        ssh_connect(["web1"], "deploy", password="...", reconnect=True)
    """
    deps = get_deps()
    auth = AuthSpec(
        username=username, password=password, key_file=key_file, passphrase=passphrase
    )
    try:
        outcomes = await deps.manager.connect(
            hosts,
            auth,
            port=port or deps.config.default_port,
            reconnect=reconnect,
        )
    except (SessionError, ValueError) as e:
        return f"Error: {e}"
    return format_outcomes(outcomes)


async def ssh_remove(
    hosts: list[str] | None = None,
    all_hosts: bool = False,
    confirm_all: bool = False,
) -> str:
    """Disconnect and forget pooled SSH sessions.

    Args:
        hosts: Hosts to remove.
        all_hosts: Remove every pooled session.
        confirm_all: Required when both hosts and all_hosts are given; the
            explicit list is then ignored.
    """
    deps = get_deps()
    try:
        outcomes = await deps.manager.remove(
            hosts, all_hosts=all_hosts, confirm=_confirm_all(confirm_all)
        )
    except (SessionError, ValueError) as e:
        return f"Error: {e}"
    return format_outcomes(outcomes)


async def ssh_status(hosts: list[str] | None = None) -> str:
    """Show whether hosts have a pooled session and its last-known state.

    The connected flag is not a live probe; a rebooted host may still show
    as connected until a command fails.

    Args:
        hosts: Hosts to inspect; all pooled hosts when omitted.
    """
    deps = get_deps()
    try:
        statuses = await inspect_sessions(deps.pool, hosts)
    except ValueError as e:
        return f"Error: {e}"
    return format_statuses(statuses)


async def ssh_invoke(
    command: str,
    hosts: list[str] | None = None,
    all_hosts: bool = False,
    confirm_all: bool = False,
    quiet: bool = False,
    timeout: float | None = None,
    concurrent: bool | None = None,
) -> str:
    """Run a command on pooled SSH sessions.

    Hosts without a connected session are skipped. Non-zero exits and
    timeouts are reported per host rather than failing the call.

    Args:
        command: Shell command to execute.
        hosts: Target hosts, in order (duplicates run twice).
        all_hosts: Target every pooled host, naturally sorted.
        confirm_all: Required when both hosts and all_hosts are given.
        quiet: Suppress per-host progress logging.
        timeout: Per-command timeout in seconds (0 disables).
        concurrent: Run hosts in parallel (default from
            SSHSESSION_DISPATCH_STRATEGY).

    Examples:
        ssh_invoke("uptime", all_hosts=True)
        ssh_invoke("systemctl restart nginx", hosts=["web1", "web2"], timeout=60)
    """
    deps = get_deps()
    try:
        report = await deps.dispatcher.dispatch(
            command,
            hosts=hosts,
            all_hosts=all_hosts,
            quiet=quiet,
            confirm=_confirm_all(confirm_all),
            timeout=timeout,
            concurrent=concurrent,
        )
    except (SessionError, ValueError) as e:
        return f"Error: {e}"
    return format_report(report)
