"""Numeric-aware ordering for host identifiers."""

import re
from collections.abc import Iterable

_DIGITS = re.compile(r"(\d+)")


def natural_key(value: str) -> tuple[tuple[int, int | str], ...]:
    """Build a sort key comparing digit runs as integers.

    Text and numeric chunks are tagged so they never compare against each
    other directly. No case folding is applied.

    Args:
        value: Host identifier or other string

    Returns:
        Tuple usable as a sort key
    """
    key: list[tuple[int, int | str]] = []
    for chunk in _DIGITS.split(value):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk)))
        else:
            key.append((1, chunk))
    return tuple(key)


def natural_sorted(values: Iterable[str]) -> list[str]:
    """Sort strings so that 10.0.0.2 comes before 10.0.0.10."""
    return sorted(values, key=natural_key)
