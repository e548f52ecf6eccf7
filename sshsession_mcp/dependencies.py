"""Dependency injection container for SSH Session MCP.

The session pool is owned here and handed to the manager and dispatcher.
"""

from dataclasses import dataclass

from sshsession_mcp.config import Config
from sshsession_mcp.protocols import ProgressCallback
from sshsession_mcp.services.dispatcher import CommandDispatcher
from sshsession_mcp.services.manager import SessionManager
from sshsession_mcp.services.pool import SessionPool


@dataclass
class Dependencies:
    """Container for the config, the pool and the services built on it.

    Example:
        deps = Dependencies.create()
        await deps.manager.connect(["10.0.0.1"], AuthSpec("root", password="..."))
        results = await deps.dispatcher.invoke("uptime", all_hosts=True)
    """

    config: Config
    pool: SessionPool
    manager: SessionManager
    dispatcher: CommandDispatcher

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies with configuration from the environment."""
        return cls.from_config(Config.from_env())

    @classmethod
    def from_config(
        cls, config: Config, progress: ProgressCallback | None = None
    ) -> "Dependencies":
        """Create dependencies with custom configuration.

        Args:
            config: Config instance
            progress: Receives dispatcher progress lines (default: logger)
        """
        pool = SessionPool()
        manager = SessionManager(
            pool,
            known_hosts=config.known_hosts_path,
            strict_host_key_checking=config.strict_host_key_checking,
            connect_timeout=config.connect_timeout,
            concurrent=config.concurrent_dispatch,
            max_concurrency=config.max_concurrency,
        )
        dispatcher = CommandDispatcher(
            pool,
            default_timeout=config.command_timeout,
            concurrent=config.concurrent_dispatch,
            max_concurrency=config.max_concurrency,
            progress=progress,
        )
        return cls(config=config, pool=pool, manager=manager, dispatcher=dispatcher)

    async def cleanup(self) -> None:
        """Dispose every pooled session."""
        await self.pool.close_all()
