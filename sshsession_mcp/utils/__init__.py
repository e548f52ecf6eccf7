"""Utilities for SSH Session MCP."""

from sshsession_mcp.utils.console import ColorfulFormatter, configure_logging
from sshsession_mcp.utils.natsort import natural_key, natural_sorted
from sshsession_mcp.utils.text import decode_stream, strip_line_terminators
from sshsession_mcp.utils.validation import validate_host, validate_hosts

__all__ = [
    "ColorfulFormatter",
    "configure_logging",
    "decode_stream",
    "natural_key",
    "natural_sorted",
    "strip_line_terminators",
    "validate_host",
    "validate_hosts",
]
