"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DISPATCH_STRATEGIES = ("sequential", "concurrent")


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Commands and connections
    command_timeout: int = field(default=30)  # 0 disables the timeout
    connect_timeout: int = field(default=10)
    default_port: int = field(default=22)

    # Dispatch
    dispatch_strategy: str = field(default="sequential")
    max_concurrency: int = field(default=16)

    # Transport
    transport: str = field(default="http")
    http_host: str = field(default="0.0.0.0")
    http_port: int = field(default=8000)

    # Logging
    log_level: str | None = field(default=None)  # None lets the entry point pick
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from SSHSESSION_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            command_timeout=cls._get_int("SSHSESSION_COMMAND_TIMEOUT", 30),
            connect_timeout=cls._get_int("SSHSESSION_CONNECT_TIMEOUT", 10),
            default_port=cls._get_int("SSHSESSION_DEFAULT_PORT", 22),
            dispatch_strategy=cls._get_strategy(),
            max_concurrency=max(1, cls._get_int("SSHSESSION_MAX_CONCURRENCY", 16)),
            transport=cls._get_transport(),
            http_host=os.getenv("SSHSESSION_HTTP_HOST", "0.0.0.0"),
            http_port=cls._get_int("SSHSESSION_HTTP_PORT", 8000),
            log_level=cls._get_log_level(),
            log_colors=cls._get_bool("SSHSESSION_LOG_COLORS", True),
            log_payloads=cls._get_bool("SSHSESSION_LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int("SSHSESSION_SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool("SSHSESSION_INCLUDE_TRACEBACK", False),
        )

    @property
    def concurrent_dispatch(self) -> bool:
        """Whether fan-out runs one task per host by default."""
        return self.dispatch_strategy == "concurrent"

    @property
    def command_timeout_or_none(self) -> float | None:
        """Command timeout in seconds, or None when disabled."""
        return float(self.command_timeout) if self.command_timeout > 0 else None

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("http" or "stdio")
        """
        transport = os.getenv("SSHSESSION_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "http"

    @staticmethod
    def _get_strategy() -> str:
        """Get dispatch strategy from environment with validation."""
        value = os.getenv("SSHSESSION_DISPATCH_STRATEGY", "").strip().lower()
        if not value:
            return "sequential"
        if value not in DISPATCH_STRATEGIES:
            logger.warning(
                "Invalid dispatch strategy %r, using 'sequential'", value
            )
            return "sequential"
        return value

    @staticmethod
    def _get_log_level() -> str | None:
        """Get log level name from environment, or None when unset."""
        value = os.getenv("SSHSESSION_LOG_LEVEL", "").strip().upper()
        return value or None
