"""MCP resources for SSH Session MCP."""

from sshsession_mcp.resources.sessions import list_sessions_resource

__all__ = ["list_sessions_resource"]
