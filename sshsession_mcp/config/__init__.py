"""Configuration module for SSH Session MCP.

- Config: Main configuration class (aggregates all components)
- HostKeyVerifier: Manages SSH host key verification
- Settings: Environment variable configuration
"""

from sshsession_mcp.config.host_keys import HostKeyVerifier
from sshsession_mcp.config.main import Config
from sshsession_mcp.config.settings import DISPATCH_STRATEGIES, Settings

__all__ = ["Config", "DISPATCH_STRATEGIES", "HostKeyVerifier", "Settings"]
