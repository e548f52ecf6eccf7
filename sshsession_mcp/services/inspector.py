"""Read-only status reporting over the session pool."""

from collections.abc import Iterable

from sshsession_mcp.models import SessionStatus
from sshsession_mcp.services.pool import SessionPool
from sshsession_mcp.utils.validation import validate_hosts


async def inspect_sessions(
    pool: SessionPool, hosts: Iterable[str] | None = None
) -> list[SessionStatus]:
    """Report whether each host has a session and its last-known flag.

    Args:
        pool: Session pool to read
        hosts: Hosts to report on; all pooled hosts, naturally sorted, when
            omitted or empty

    Returns:
        One SessionStatus per requested host. ``connected`` is None for
        hosts without a pool entry.
    """
    targets = validate_hosts(hosts) if hosts else await pool.snapshot()

    statuses = []
    for host in targets:
        connection = pool.get(host)
        if connection is None:
            statuses.append(SessionStatus(host=host, connected=None))
            continue
        statuses.append(
            SessionStatus(
                host=host,
                connected=connection.is_connected,
                port=connection.port,
                username=connection.username,
            )
        )
    return statuses
