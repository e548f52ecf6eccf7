"""MCP tools for SSH Session MCP."""

from sshsession_mcp.tools.sessions import ssh_connect, ssh_invoke, ssh_remove, ssh_status

__all__ = ["ssh_connect", "ssh_invoke", "ssh_remove", "ssh_status"]
