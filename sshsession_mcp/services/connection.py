"""A single SSH session to one host.

The ``is_connected`` flag is the last known state, not a live probe. A
remote reboot can leave it True until the next command fails with a
transport error, at which point the connection moves to DISCONNECTED.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

import asyncssh

from sshsession_mcp.models import ConnectionState
from sshsession_mcp.services.errors import (
    CommandTimeoutError,
    ConnectionLostError,
    StructuralError,
)
from sshsession_mcp.utils.text import decode_stream

logger = logging.getLogger(__name__)

# Errors that mean the transport itself is gone
TRANSPORT_ERRORS = (asyncssh.DisconnectError, asyncssh.ChannelOpenError, OSError)


class Connection:
    """Wraps one asyncssh client connection.

    Commands are serialized: at most one command is in flight per host.
    """

    def __init__(
        self,
        host: str,
        port: int = 22,
        username: str = "root",
        known_hosts: str | None = None,
        strict_host_key_checking: bool = True,
        connect_timeout: float | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.state = ConnectionState.UNCONNECTED
        self.connected_at: datetime | None = None
        self.last_used: datetime | None = None

        self._known_hosts = known_hosts
        self._strict_host_key = strict_host_key_checking
        self._connect_timeout = connect_timeout
        self._conn: asyncssh.SSHClientConnection | None = None
        self._command_lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"Connection({self.target}, state={self.state.value})"

    @property
    def target(self) -> str:
        """user@host:port string used in log messages."""
        return f"{self.username}@{self.host}:{self.port}"

    @property
    def is_connected(self) -> bool:
        """Last known connection flag."""
        return self.state is ConnectionState.CONNECTED

    @property
    def is_disposed(self) -> bool:
        return self.state is ConnectionState.DISPOSED

    async def connect(
        self,
        password: str | None = None,
        client_keys: Sequence[Any] | None = None,
    ) -> None:
        """Open and authenticate the SSH session.

        Args:
            password: Password credential, used when no keys are given
            client_keys: Loaded private keys

        Raises:
            StructuralError: If this connection was already used
            asyncssh.Error, OSError: If the transport connect fails
        """
        if self.state is not ConnectionState.UNCONNECTED:
            raise StructuralError(
                f"Connection to {self.host} cannot be reused (state={self.state.value})"
            )

        logger.info("Opening SSH connection to %s", self.target)
        try:
            conn = await self._open(self._known_hosts, password, client_keys)
        except asyncssh.HostKeyNotVerifiable as e:
            if self._strict_host_key:
                logger.error(
                    "Host key verification failed for %s: %s. Add the host key to %s "
                    "or set SSHSESSION_STRICT_HOST_KEY_CHECKING=false",
                    self.host,
                    e,
                    self._known_hosts,
                )
                raise
            logger.warning(
                "Host key not verified for %s (strict mode disabled): %s",
                self.host,
                e,
            )
            conn = await self._open(None, password, client_keys)

        self._conn = conn
        self.state = ConnectionState.CONNECTED
        self.connected_at = datetime.now()
        logger.info("SSH connection established to %s", self.target)

    async def _open(
        self,
        known_hosts: str | None,
        password: str | None,
        client_keys: Sequence[Any] | None,
    ) -> asyncssh.SSHClientConnection:
        return await asyncssh.connect(
            self.host,
            port=self.port,
            username=self.username,
            password=password,
            client_keys=client_keys,
            known_hosts=known_hosts,
            connect_timeout=self._connect_timeout,
        )

    async def run(
        self, command: str, timeout: float | None = None
    ) -> tuple[str, str, int]:
        """Run a command on its own channel.

        The channel is closed when the command completes or times out.
        Output is read as raw bytes and decoded with replacement, so
        non-UTF-8 output never breaks the session.

        Args:
            command: Shell command line
            timeout: Seconds to wait before abandoning the command

        Returns:
            Tuple of (stdout, stderr, exit status)

        Raises:
            ConnectionLostError: If the session is not connected
            CommandTimeoutError: If the command exceeded ``timeout``
        """
        async with self._command_lock:
            if not self.is_connected or self._conn is None:
                raise ConnectionLostError(self.host)

            logger.debug("Running on %s: %s", self.host, command)
            try:
                result = await self._run_process(command, timeout)
            except asyncio.TimeoutError as e:
                logger.warning("Command on %s timed out after %ss", self.host, timeout)
                raise CommandTimeoutError(self.host, timeout or 0) from e
            except TRANSPORT_ERRORS as e:
                self._mark_lost(e)
                raise

            self.last_used = datetime.now()

        returncode = result.returncode
        exit_status = returncode if isinstance(returncode, int) else -1
        return decode_stream(result.stdout), decode_stream(result.stderr), exit_status

    async def _run_process(
        self, command: str, timeout: float | None
    ) -> asyncssh.SSHCompletedProcess:
        process = await self._conn.create_process(command, encoding=None)
        try:
            return await asyncio.wait_for(process.wait(check=False), timeout=timeout)
        finally:
            # Runs on timeout too: the channel never outlives the call
            process.close()
            await process.wait_closed()

    def _mark_lost(self, error: Exception) -> None:
        """Reconcile the flag with a transport failure seen mid-command."""
        if self.state is ConnectionState.CONNECTED:
            logger.warning("Connection to %s lost: %s", self.target, error)
            self.state = ConnectionState.DISCONNECTED

    async def disconnect(self) -> None:
        """Close the session. Safe to call in any state."""
        if self.state is not ConnectionState.CONNECTED:
            return
        logger.info("Closing SSH connection to %s", self.target)
        self.state = ConnectionState.DISCONNECTED
        await self._close_transport()

    async def dispose(self) -> None:
        """Release transport resources. Terminal and idempotent."""
        if self.state is ConnectionState.DISPOSED:
            return
        await self.disconnect()
        # A lost connection may still hold a half-open transport
        await self._close_transport()
        self.state = ConnectionState.DISPOSED
        logger.debug("Disposed connection to %s", self.target)

    async def _close_transport(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        conn.close()
        await conn.wait_closed()
