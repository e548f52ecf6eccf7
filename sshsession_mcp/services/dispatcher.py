"""Command dispatcher: runs one command across pooled sessions.

Hosts without a connected session are skipped with a warning and produce no
result. Non-zero exits, timeouts and command exceptions are recorded in the
host's CommandResult; only structural misuse raises.
"""

import logging
from collections.abc import Iterable

from sshsession_mcp.models import CommandResult, DispatchReport, ResultKind
from sshsession_mcp.protocols import ConfirmCallback, ProgressCallback
from sshsession_mcp.services.errors import CommandTimeoutError
from sshsession_mcp.services.fanout import gather_bounded, resolve_targets
from sshsession_mcp.services.pool import SessionPool
from sshsession_mcp.utils.text import strip_line_terminators

logger = logging.getLogger(__name__)


def format_progress(result: CommandResult) -> str:
    """One-line human-readable status for a host result."""
    if not result.error:
        return f"[OK] {result.host} (exit 0)"
    if result.kind is ResultKind.TIMEOUT:
        return f"[FAILED] {result.host} (timeout)"
    if result.kind is ResultKind.EXCEPTION:
        return f"[FAILED] {result.host} ({result.error_text})"
    return f"[FAILED] {result.host} (exit {result.exit_status})"


class CommandDispatcher:
    """Fans a command out over a set of pooled hosts.

    Sequential by default. With ``concurrent`` each host runs on its own
    task, bounded by ``max_concurrency``; results keep resolution order.
    """

    def __init__(
        self,
        pool: SessionPool,
        default_timeout: float | None = None,
        concurrent: bool = False,
        max_concurrency: int = 16,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.pool = pool
        self.default_timeout = default_timeout
        self.concurrent = concurrent
        self.max_concurrency = max_concurrency
        self._progress = progress or self._log_progress

    @staticmethod
    def _log_progress(line: str) -> None:
        logger.info("%s", line)

    async def invoke(
        self,
        command: str,
        hosts: Iterable[str] | None = None,
        all_hosts: bool = False,
        quiet: bool = False,
        confirm: ConfirmCallback | None = None,
        timeout: float | None = None,
        concurrent: bool | None = None,
    ) -> list[CommandResult]:
        """Run ``command`` on each resolved host.

        Returns:
            One CommandResult per host that had a connected session, in
            resolution order
        """
        report = await self.dispatch(
            command,
            hosts=hosts,
            all_hosts=all_hosts,
            quiet=quiet,
            confirm=confirm,
            timeout=timeout,
            concurrent=concurrent,
        )
        return report.results

    async def dispatch(
        self,
        command: str,
        hosts: Iterable[str] | None = None,
        all_hosts: bool = False,
        quiet: bool = False,
        confirm: ConfirmCallback | None = None,
        timeout: float | None = None,
        concurrent: bool | None = None,
    ) -> DispatchReport:
        """Run ``command`` and report resolved, skipped and finished hosts.

        Args:
            command: Shell command line
            hosts: Explicit targets; order and duplicates are kept
            all_hosts: Target every pooled host (naturally sorted snapshot)
            quiet: Suppress per-host progress lines
            confirm: Asked when both hosts and all_hosts are given
            timeout: Per-command seconds; None uses the default, 0 disables
            concurrent: Override the configured fan-out strategy

        Raises:
            ConfirmationRequiredError: If hosts and all_hosts are both given
                and not confirmed
            StructuralError: If no targets were given
            ValueError: If the command is empty
        """
        if not command or not command.strip():
            raise ValueError("Command cannot be empty")

        snapshot = await self.pool.snapshot()
        targets = resolve_targets(hosts, all_hosts, snapshot, confirm, "invoke")
        effective_timeout = self.default_timeout if timeout is None else (timeout or None)
        use_concurrency = self.concurrent if concurrent is None else concurrent

        logger.info(
            "Dispatching to %d host(s) (%s, timeout=%s): %s",
            len(targets),
            "concurrent" if use_concurrency else "sequential",
            effective_timeout,
            command,
        )

        calls = [
            self._invoke_one(host, command, effective_timeout, quiet) for host in targets
        ]
        if use_concurrency:
            outcomes = await gather_bounded(calls, self.max_concurrency)
        else:
            outcomes = [await call for call in calls]

        report = DispatchReport(command=command, resolved=targets)
        for host, result in zip(targets, outcomes):
            if result is None:
                report.skipped.append(host)
            else:
                report.results.append(result)

        logger.info(
            "Dispatch complete: %d/%d succeeded, %d skipped",
            report.succeeded,
            len(report.results),
            len(report.skipped),
        )
        return report

    async def _invoke_one(
        self, host: str, command: str, timeout: float | None, quiet: bool
    ) -> CommandResult | None:
        connection = self.pool.get(host)
        if connection is None:
            logger.warning("No session for %s, skipping", host)
            return None
        if not connection.is_connected:
            logger.warning("Session for %s is not connected, skipping", host)
            return None

        try:
            stdout, stderr, exit_status = await connection.run(command, timeout)
        except CommandTimeoutError:
            result = CommandResult.from_timeout(host, timeout or 0)
        except Exception as e:
            logger.warning("Command on %s raised %s: %s", host, type(e).__name__, e)
            result = CommandResult.from_exception(host, e)
        else:
            result = CommandResult.from_exit(
                host,
                strip_line_terminators(stdout),
                strip_line_terminators(stderr),
                exit_status,
            )

        if not quiet:
            self._progress(format_progress(result))
        return result
