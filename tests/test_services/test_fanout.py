"""Tests for target resolution and bounded fan-out."""

import asyncio

import pytest

from sshsession_mcp.services import ConfirmationRequiredError, StructuralError
from sshsession_mcp.services.fanout import gather_bounded, resolve_targets


def test_explicit_list_keeps_order_and_duplicates() -> None:
    targets = resolve_targets(["b", "a", "b"], False, ["a", "b"], None, "invoke")

    assert targets == ["b", "a", "b"]


def test_all_uses_snapshot() -> None:
    assert resolve_targets(None, True, ["a", "b"], None, "invoke") == ["a", "b"]


def test_both_without_confirmation_refused() -> None:
    with pytest.raises(ConfirmationRequiredError):
        resolve_targets(["a"], True, ["a", "b"], None, "remove")


def test_both_declined_refused() -> None:
    with pytest.raises(ConfirmationRequiredError):
        resolve_targets(["a"], True, ["a", "b"], lambda message: False, "remove")


def test_both_confirmed_uses_all() -> None:
    asked = []

    def confirm(message: str) -> bool:
        asked.append(message)
        return True

    targets = resolve_targets(["a"], True, ["a", "b"], confirm, "remove")

    assert targets == ["a", "b"]
    assert len(asked) == 1


def test_neither_given_is_structural() -> None:
    with pytest.raises(StructuralError):
        resolve_targets([], False, ["a"], None, "invoke")


def test_invalid_host_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_targets(["bad host"], False, [], None, "invoke")


@pytest.mark.asyncio
async def test_gather_bounded_limits_and_orders() -> None:
    in_flight = 0
    peak = 0

    async def work(value: int) -> int:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01 * (5 - value))
        in_flight -= 1
        return value

    results = await gather_bounded([work(i) for i in range(5)], limit=2)

    assert results == [0, 1, 2, 3, 4]
    assert peak <= 2
