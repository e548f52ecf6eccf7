"""Entry point for sshsession_mcp server."""

import logging

from sshsession_mcp.server import mcp  # This import also configures logging
from sshsession_mcp.services.state import get_deps

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with configured transport."""
    config = get_deps().config

    if config.transport == "stdio":
        logger.info("Starting SSH Session MCP server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting SSH Session MCP server (transport=http, host=%s, port=%d)",
            config.http_host,
            config.http_port,
        )
        mcp.run(
            transport="http",
            host=config.http_host,
            port=config.http_port,
        )


if __name__ == "__main__":
    run_server()
