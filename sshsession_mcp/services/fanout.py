"""Target resolution and per-host fan-out shared by manager and dispatcher."""

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from typing import TypeVar

from sshsession_mcp.protocols import ConfirmCallback
from sshsession_mcp.services.errors import ConfirmationRequiredError, StructuralError
from sshsession_mcp.utils.validation import validate_hosts

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_targets(
    hosts: Iterable[str] | None,
    all_hosts: bool,
    snapshot: list[str],
    confirm: ConfirmCallback | None,
    action: str,
) -> list[str]:
    """Resolve an explicit host list and/or 'all' into the hosts to act on.

    When both are given, 'all' wins once ``confirm`` agrees. Explicit lists
    keep caller order and duplicates.

    Args:
        hosts: Explicit host identifiers
        all_hosts: Whether every pooled host was requested
        snapshot: Naturally sorted pool keys taken at call time
        confirm: Callback asked before discarding the explicit list
        action: Verb used in messages ("remove", "invoke")

    Returns:
        Host identifiers in resolution order

    Raises:
        ConfirmationRequiredError: If both were given and not confirmed
        StructuralError: If neither was given
    """
    explicit = validate_hosts(hosts) if hosts else []

    if all_hosts:
        if explicit:
            message = (
                f"Both explicit hosts and all sessions were requested to {action}. "
                f"Ignore {', '.join(explicit)} and use all {len(snapshot)} pooled host(s)?"
            )
            if confirm is None or not confirm(message):
                raise ConfirmationRequiredError(
                    f"Refusing to {action}: explicit hosts and 'all' given without confirmation"
                )
            logger.info("Confirmed %s on all pooled hosts, explicit list ignored", action)
        return list(snapshot)

    if not explicit:
        raise StructuralError(f"No hosts given to {action}")
    return explicit


async def gather_bounded(coros: list[Awaitable[T]], limit: int) -> list[T]:
    """Run coroutines concurrently with at most ``limit`` in flight.

    Results come back in the order of ``coros``.
    """
    semaphore = asyncio.Semaphore(max(1, limit))

    async def bounded(coro: Awaitable[T]) -> T:
        async with semaphore:
            return await coro

    return list(await asyncio.gather(*(bounded(c) for c in coros)))
