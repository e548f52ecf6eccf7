"""Services for SSH Session MCP."""

from sshsession_mcp.services.connection import Connection
from sshsession_mcp.services.dispatcher import CommandDispatcher, format_progress
from sshsession_mcp.services.errors import (
    CommandTimeoutError,
    ConfirmationRequiredError,
    ConnectionLostError,
    CredentialRequiredError,
    HostConnectError,
    HostError,
    KeyFileNotFoundError,
    SessionError,
    SessionNotFoundError,
    StructuralError,
)
from sshsession_mcp.services.inspector import inspect_sessions
from sshsession_mcp.services.manager import SessionManager
from sshsession_mcp.services.pool import SessionPool
from sshsession_mcp.services.shell import InteractiveShell

__all__ = [
    "CommandDispatcher",
    "CommandTimeoutError",
    "ConfirmationRequiredError",
    "Connection",
    "ConnectionLostError",
    "CredentialRequiredError",
    "HostConnectError",
    "HostError",
    "InteractiveShell",
    "KeyFileNotFoundError",
    "SessionError",
    "SessionManager",
    "SessionNotFoundError",
    "SessionPool",
    "StructuralError",
    "format_progress",
    "inspect_sessions",
]
