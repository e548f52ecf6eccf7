"""Sessions resource listing the pool."""

from sshsession_mcp.services import inspect_sessions
from sshsession_mcp.services.state import get_deps
from sshsession_mcp.tools.formatting import format_statuses


async def list_sessions_resource() -> str:
    """List pooled SSH sessions, naturally sorted, with last-known state."""
    deps = get_deps()
    statuses = await inspect_sessions(deps.pool)
    return format_statuses(statuses)
