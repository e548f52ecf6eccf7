"""SSH session pool and multi-host command dispatch over MCP."""

__version__ = "0.1.0"
