"""Session manager: opens, replaces and removes pool entries.

Authentication order: key file, key file with passphrase, password, then
the caller's interactive prompt. One host's failure never stops the batch.
"""

import logging
import os
from collections.abc import Callable, Iterable

import asyncssh

from sshsession_mcp.models import AuthSpec, OutcomeStatus, SessionOutcome
from sshsession_mcp.protocols import ConfirmCallback, CredentialPrompt
from sshsession_mcp.services.connection import Connection
from sshsession_mcp.services.errors import (
    CredentialRequiredError,
    HostConnectError,
    KeyFileNotFoundError,
    StructuralError,
)
from sshsession_mcp.services.fanout import gather_bounded, resolve_targets
from sshsession_mcp.services.pool import SessionPool
from sshsession_mcp.utils.validation import validate_hosts

logger = logging.getLogger(__name__)


class SessionManager:
    """Creates, reconnects and removes pool entries."""

    def __init__(
        self,
        pool: SessionPool,
        known_hosts: str | None = None,
        strict_host_key_checking: bool = True,
        connect_timeout: float | None = None,
        concurrent: bool = False,
        max_concurrency: int = 16,
        connection_factory: Callable[..., Connection] = Connection,
    ) -> None:
        self.pool = pool
        self.known_hosts = known_hosts
        self.strict_host_key_checking = strict_host_key_checking
        self.connect_timeout = connect_timeout
        self.concurrent = concurrent
        self.max_concurrency = max_concurrency
        self._connection_factory = connection_factory

    def _resolve_auth(
        self, auth: AuthSpec, prompt: CredentialPrompt | None
    ) -> AuthSpec:
        """Settle which credential to use before touching any host.

        Raises:
            KeyFileNotFoundError: If a key file path does not exist
            CredentialRequiredError: If no credential is available
        """
        if auth.key_file:
            key_path = os.path.expanduser(auth.key_file)
            if not os.path.isfile(key_path):
                raise KeyFileNotFoundError(auth.key_file)
            return AuthSpec(
                username=auth.username,
                key_file=key_path,
                passphrase=auth.passphrase,
            )

        if auth.password is not None:
            return auth

        if prompt is None:
            raise CredentialRequiredError(
                f"A key file or password is required for {auth.username}"
            )
        logger.debug("No credential supplied, prompting for %s", auth.username)
        return AuthSpec(username=auth.username, password=prompt(auth.username))

    async def connect(
        self,
        hosts: Iterable[str],
        auth: AuthSpec,
        port: int = 22,
        reconnect: bool = False,
        prompt: CredentialPrompt | None = None,
        concurrent: bool | None = None,
    ) -> list[SessionOutcome]:
        """Open sessions to each host.

        Args:
            hosts: Host identifiers; duplicates are collapsed
            auth: Credentials
            port: SSH port
            reconnect: Replace live sessions instead of skipping them
            prompt: Called for a password when auth has no credential
            concurrent: Override the configured fan-out strategy

        Returns:
            One SessionOutcome per distinct host, in caller order

        Raises:
            StructuralError: For missing key files or credentials
        """
        targets = list(dict.fromkeys(validate_hosts(hosts)))
        if not targets:
            raise StructuralError("No hosts given to connect")

        resolved = self._resolve_auth(auth, prompt)
        logger.info(
            "Connecting to %d host(s) as %s (auth=%s, reconnect=%s)",
            len(targets),
            resolved.username,
            resolved.method,
            reconnect,
        )

        use_concurrency = self.concurrent if concurrent is None else concurrent
        if use_concurrency:
            return await gather_bounded(
                [self._connect_one(h, resolved, port, reconnect) for h in targets],
                self.max_concurrency,
            )
        return [await self._connect_one(h, resolved, port, reconnect) for h in targets]

    async def _connect_one(
        self, host: str, auth: AuthSpec, port: int, reconnect: bool
    ) -> SessionOutcome:
        async with self.pool.host_slot(host):
            existing = self.pool.get(host)

            if existing is not None and existing.is_connected and not reconnect:
                logger.info("Already connected to %s, skipping", existing.target)
                return SessionOutcome(
                    host, OutcomeStatus.ALREADY_CONNECTED, f"Already connected to {host}"
                )

            if existing is not None:
                reason = "reconnect requested" if reconnect else "stale session"
                logger.info("Replacing session for %s (%s)", host, reason)
                await self.pool.pop(host)
                await existing.dispose()

            try:
                connection = await self._open(host, auth, port)
            except Exception as e:
                error = HostConnectError(host, e)
                logger.warning("%s", error)
                return SessionOutcome(host, OutcomeStatus.FAILED, str(error))

            await self.pool.put(host, connection)
            return SessionOutcome(
                host, OutcomeStatus.CONNECTED, f"Connected to {connection.target}"
            )

    async def _open(self, host: str, auth: AuthSpec, port: int) -> Connection:
        client_keys = None
        if auth.key_file:
            # Malformed keys or a wrong passphrase fail this host only
            key = asyncssh.read_private_key(auth.key_file, auth.passphrase)
            client_keys = [key]

        connection = self._connection_factory(
            host,
            port=port,
            username=auth.username,
            known_hosts=self.known_hosts,
            strict_host_key_checking=self.strict_host_key_checking,
            connect_timeout=self.connect_timeout,
        )
        await connection.connect(
            password=None if client_keys else auth.password,
            client_keys=client_keys,
        )
        return connection

    async def remove(
        self,
        hosts: Iterable[str] | None = None,
        all_hosts: bool = False,
        confirm: ConfirmCallback | None = None,
    ) -> list[SessionOutcome]:
        """Disconnect, dispose and forget sessions.

        Missing hosts are reported as NOT_FOUND, never raised.

        Raises:
            ConfirmationRequiredError: If hosts and all_hosts are both given
                and not confirmed
        """
        snapshot = await self.pool.snapshot()
        targets = resolve_targets(hosts, all_hosts, snapshot, confirm, "remove")

        outcomes = []
        for host in targets:
            async with self.pool.host_slot(host):
                connection = await self.pool.pop(host)
                if connection is None:
                    logger.warning("No session for %s, nothing to remove", host)
                    outcomes.append(
                        SessionOutcome(host, OutcomeStatus.NOT_FOUND, f"No session for {host}")
                    )
                    continue
                await connection.dispose()
            outcomes.append(
                SessionOutcome(host, OutcomeStatus.REMOVED, f"Removed session for {host}")
            )
        return outcomes
