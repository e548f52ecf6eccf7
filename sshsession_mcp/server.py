"""SSH Session MCP FastMCP server.

This is a thin wrapper that wires the MCP server to tools and resources.
All session logic lives in the services/ modules.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from sshsession_mcp.config import Settings
from sshsession_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from sshsession_mcp.resources import list_sessions_resource
from sshsession_mcp.services.state import get_deps
from sshsession_mcp.tools import ssh_connect, ssh_invoke, ssh_remove, ssh_status
from sshsession_mcp.utils.console import configure_logging

# Configured at import time so logging is ready however the server is started
_settings = Settings.from_env()
configure_logging(_settings.log_level, _settings.log_colors)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Create the session pool at startup and dispose it at shutdown."""
    logger.info("SSH Session MCP server starting up")
    deps = get_deps()
    logger.info(
        "Dispatch strategy=%s, command_timeout=%s, known_hosts=%s",
        deps.config.settings.dispatch_strategy,
        deps.config.command_timeout,
        deps.config.known_hosts_path,
    )
    logger.info("SSH Session MCP server ready to accept connections")

    try:
        yield {"pool_size": deps.pool.pool_size}
    finally:
        logger.info("SSH Session MCP server shutting down")
        if deps.pool.pool_size > 0:
            logger.info(
                "Closing %d SSH session(s): %s",
                deps.pool.pool_size,
                ", ".join(await deps.pool.snapshot()),
            )
            await deps.cleanup()
        logger.info("SSH Session MCP server shutdown complete")


def configure_middleware(server: FastMCP, settings: Settings) -> None:
    """Add middleware in order: ErrorHandling (innermost) then Logging."""
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )


def create_server(settings: Settings | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Returns:
        Configured FastMCP server instance
    """
    settings = settings or Settings.from_env()
    server = FastMCP("sshsession_mcp", lifespan=app_lifespan)

    configure_middleware(server, settings)

    server.tool()(ssh_connect)
    server.tool()(ssh_remove)
    server.tool()(ssh_status)
    server.tool()(ssh_invoke)

    server.resource("sessions://list")(list_sessions_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server(_settings)
