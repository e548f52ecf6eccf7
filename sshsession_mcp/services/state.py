"""Process-wide dependency container for the MCP tool functions.

Services receive the pool explicitly; only the tool layer looks it up here.
"""

from sshsession_mcp.dependencies import Dependencies

_deps: Dependencies | None = None


def get_deps() -> Dependencies:
    """Get or create the dependency container."""
    global _deps
    if _deps is None:
        _deps = Dependencies.create()
    return _deps


def set_deps(deps: Dependencies) -> None:
    """Install a dependency container.

    Used by the server lifespan and by tests.

    Args:
        deps: Container to use globally.
    """
    global _deps
    _deps = deps


def reset_state() -> None:
    """Forget the current container. Should only be used in test fixtures."""
    global _deps
    _deps = None
