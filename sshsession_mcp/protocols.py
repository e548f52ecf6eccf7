"""Callback interfaces supplied by the outer surfaces (CLI, MCP tools).

The core never prompts, prints or reads input itself. Callers pass
implementations of these protocols instead.

Usage Example:

    def confirm(message: str) -> bool:
        return click.confirm(message)

    await manager.remove(["web1"], all_hosts=True, confirm=confirm)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfirmCallback(Protocol):
    """Asked before an explicit host list is discarded in favor of 'all'."""

    def __call__(self, message: str) -> bool:
        """Return True to proceed."""
        ...


@runtime_checkable
class CredentialPrompt(Protocol):
    """Supplies a secret when neither key file nor password was given.

    Implementations should mask input.
    """

    def __call__(self, username: str) -> str:
        """Return the password for ``username``."""
        ...


@runtime_checkable
class ProgressCallback(Protocol):
    """Receives one human-readable progress line per host."""

    def __call__(self, line: str) -> None: ...


@runtime_checkable
class LineReader(Protocol):
    """Reads one line of interactive input.

    Raises EOFError when input is exhausted.
    """

    async def __call__(self, prompt: str) -> str: ...


@runtime_checkable
class OutputWriter(Protocol):
    """Writes one block of text to the user."""

    def __call__(self, text: str) -> None: ...


__all__ = [
    "ConfirmCallback",
    "CredentialPrompt",
    "LineReader",
    "OutputWriter",
    "ProgressCallback",
]
