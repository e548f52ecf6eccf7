"""Command execution data models."""

from dataclasses import dataclass, field
from enum import Enum


class ResultKind(Enum):
    """Outcome variant of a single host command invocation."""

    SUCCESS = "success"
    EXIT_STATUS = "exit_status"
    TIMEOUT = "timeout"
    EXCEPTION = "exception"


@dataclass
class CommandResult:
    """Result of a remote command execution on one host."""

    host: str
    output: str
    error: bool
    exit_status: int | None
    kind: ResultKind = ResultKind.SUCCESS
    error_text: str = ""

    @classmethod
    def from_exit(
        cls, host: str, output: str, error_text: str, exit_status: int
    ) -> "CommandResult":
        """Build a result from a completed command."""
        success = exit_status == 0
        return cls(
            host=host,
            output=output,
            error=not success,
            exit_status=exit_status,
            kind=ResultKind.SUCCESS if success else ResultKind.EXIT_STATUS,
            error_text=error_text,
        )

    @classmethod
    def from_timeout(cls, host: str, timeout: float) -> "CommandResult":
        """Build a result for a command abandoned after ``timeout`` seconds."""
        return cls(
            host=host,
            output="",
            error=True,
            exit_status=None,
            kind=ResultKind.TIMEOUT,
            error_text=f"Command timed out after {timeout:g}s",
        )

    @classmethod
    def from_exception(cls, host: str, exc: Exception) -> "CommandResult":
        """Build a result for a command that raised."""
        return cls(
            host=host,
            output="",
            error=True,
            exit_status=None,
            kind=ResultKind.EXCEPTION,
            error_text=f"{type(exc).__name__}: {exc}",
        )


@dataclass
class DispatchReport:
    """Everything one dispatch call resolved, skipped and produced."""

    command: str
    resolved: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    results: list[CommandResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        """Number of hosts whose command exited 0."""
        return sum(1 for r in self.results if not r.error)

    @property
    def failed(self) -> bool:
        """Batch-level failure: nothing resolved, nothing ran, or every host failed.

        Partial failure is not a batch failure.
        """
        if not self.resolved or not self.results:
            return True
        return all(r.error for r in self.results)
