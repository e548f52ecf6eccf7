"""Session pool: one Connection per host identifier.

Locking Strategy:
- `_meta_lock`: Protects the _sessions dict and _host_locks dict structure
- Per-host locks: Serialize create/replace/remove for one host slot
- Lock acquisition order: Always per-host lock first, then meta-lock if needed

Host identifiers are keys compared by exact string equality. "Host1" and
"host1" are unrelated entries.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sshsession_mcp.services.connection import Connection
from sshsession_mcp.utils.natsort import natural_sorted

logger = logging.getLogger(__name__)


class SessionPool:
    """Mapping of host identifier to Connection."""

    def __init__(self) -> None:
        self._sessions: dict[str, Connection] = {}
        self._host_locks: dict[str, asyncio.Lock] = {}
        self._meta_lock = asyncio.Lock()

    async def _get_host_lock(self, host: str) -> asyncio.Lock:
        """Get or create lock for a specific host."""
        async with self._meta_lock:
            if host not in self._host_locks:
                self._host_locks[host] = asyncio.Lock()
            return self._host_locks[host]

    @asynccontextmanager
    async def host_slot(self, host: str) -> AsyncIterator[None]:
        """Hold exclusive access to one host's pool slot.

        Example:
            async with pool.host_slot("10.0.0.1"):
                old = await pool.pop("10.0.0.1")
                ...
        """
        host_lock = await self._get_host_lock(host)
        async with host_lock:
            yield

    def get(self, host: str) -> Connection | None:
        """Return the pooled connection for ``host`` if any."""
        return self._sessions.get(host)

    async def put(self, host: str, connection: Connection) -> Connection | None:
        """Insert or replace the entry for ``host``.

        Callers must hold ``host_slot(host)``.

        Returns:
            The replaced connection, if one was present
        """
        async with self._meta_lock:
            previous = self._sessions.get(host)
            self._sessions[host] = connection
        logger.info(
            "Pooled session for %s (pool_size=%d)", connection.target, len(self._sessions)
        )
        return previous

    async def pop(self, host: str) -> Connection | None:
        """Remove and return the entry for ``host``.

        Callers must hold ``host_slot(host)``.
        """
        async with self._meta_lock:
            connection = self._sessions.pop(host, None)
        if connection is not None:
            logger.info(
                "Removed session for %s (pool_size=%d)", host, len(self._sessions)
            )
        return connection

    async def snapshot(self) -> list[str]:
        """Current host identifiers in natural sort order."""
        async with self._meta_lock:
            hosts = list(self._sessions)
        return natural_sorted(hosts)

    def __contains__(self, host: object) -> bool:
        return host in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    @property
    def pool_size(self) -> int:
        """Return the current number of sessions in the pool."""
        return len(self._sessions)

    @property
    def active_hosts(self) -> list[str]:
        """Hosts whose session is currently flagged connected, naturally sorted."""
        return natural_sorted(
            host for host, conn in self._sessions.items() if conn.is_connected
        )

    async def close_all(self) -> None:
        """Dispose every pooled connection and empty the pool."""
        hosts = await self.snapshot()
        if hosts:
            logger.info("Closing all %d session(s)", len(hosts))
        for host in hosts:
            async with self.host_slot(host):
                connection = await self.pop(host)
            if connection is not None:
                await connection.dispose()
