"""Application configuration.

Delegates to specialized components:
- HostKeyVerifier: Manages known_hosts
- Settings: Environment variables
"""

import logging
import os
from dataclasses import dataclass

from sshsession_mcp.config.host_keys import KNOWN_HOSTS_ENV, HostKeyVerifier
from sshsession_mcp.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Application configuration.

    Aggregates settings from known_hosts and environment.
    """

    settings: Settings
    host_keys: HostKeyVerifier

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        Returns:
            Configured instance with all components initialized
        """
        settings = Settings.from_env()
        host_keys = HostKeyVerifier(
            known_hosts_path=os.getenv(KNOWN_HOSTS_ENV),
            strict_checking=cls._get_bool_env("SSHSESSION_STRICT_HOST_KEY_CHECKING", True),
        )
        logger.debug(
            "Config loaded (strategy=%s, command_timeout=%ds, known_hosts=%s)",
            settings.dispatch_strategy,
            settings.command_timeout,
            host_keys.get_known_hosts_path(),
        )
        return cls(settings=settings, host_keys=host_keys)

    @staticmethod
    def _get_bool_env(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() != "false"

    # Delegate to settings for convenience
    @property
    def command_timeout(self) -> float | None:
        """Per-command timeout in seconds, None when disabled."""
        return self.settings.command_timeout_or_none

    @property
    def connect_timeout(self) -> int:
        """Connection attempt timeout in seconds."""
        return self.settings.connect_timeout

    @property
    def default_port(self) -> int:
        """SSH port used when the caller gives none."""
        return self.settings.default_port

    @property
    def concurrent_dispatch(self) -> bool:
        """Whether multi-host operations run one task per host."""
        return self.settings.concurrent_dispatch

    @property
    def max_concurrency(self) -> int:
        """Upper bound on simultaneous per-host tasks."""
        return self.settings.max_concurrency

    @property
    def transport(self) -> str:
        """Transport type (http or stdio)."""
        return self.settings.transport

    @property
    def http_host(self) -> str:
        """HTTP server bind address."""
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        """HTTP server port."""
        return self.settings.http_port

    @property
    def known_hosts_path(self) -> str | None:
        """Path to known_hosts file or None if disabled."""
        return self.host_keys.get_known_hosts_path()

    @property
    def strict_host_key_checking(self) -> bool:
        """Whether to reject unknown host keys."""
        return self.host_keys.strict_checking
