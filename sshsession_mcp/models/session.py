"""Session pool bookkeeping models."""

from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(Enum):
    """Per-host outcome of a connect or remove request."""

    CONNECTED = "connected"
    ALREADY_CONNECTED = "already_connected"
    FAILED = "failed"
    REMOVED = "removed"
    NOT_FOUND = "not_found"


@dataclass
class SessionOutcome:
    """What happened to one host during a connect/remove batch."""

    host: str
    status: OutcomeStatus
    message: str = ""

    @property
    def ok(self) -> bool:
        """True unless the host failed."""
        return self.status is not OutcomeStatus.FAILED


@dataclass
class SessionStatus:
    """Inspector view of one host.

    ``connected`` is None when the pool has no entry for the host.
    """

    host: str
    connected: bool | None
    port: int | None = None
    username: str | None = None

    @property
    def exists(self) -> bool:
        """Whether the pool holds an entry for this host."""
        return self.connected is not None
