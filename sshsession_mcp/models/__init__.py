"""Data models for SSH Session MCP."""

from sshsession_mcp.models.command import CommandResult, DispatchReport, ResultKind
from sshsession_mcp.models.session import OutcomeStatus, SessionOutcome, SessionStatus
from sshsession_mcp.models.ssh import AuthSpec, ConnectionState

__all__ = [
    "AuthSpec",
    "CommandResult",
    "ConnectionState",
    "DispatchReport",
    "OutcomeStatus",
    "ResultKind",
    "SessionOutcome",
    "SessionStatus",
]
