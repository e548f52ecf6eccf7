"""FastMCP middleware components."""

from sshsession_mcp.middleware.base import SessionMiddleware
from sshsession_mcp.middleware.errors import ErrorHandlingMiddleware
from sshsession_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
    "SessionMiddleware",
]
