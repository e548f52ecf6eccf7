"""Host identifier validation."""

from collections.abc import Iterable
from typing import Final

MAX_HOST_LENGTH: Final[int] = 253

# Characters that could enable injection through a host identifier
SUSPICIOUS_CHARS: Final[tuple[str, ...]] = (
    "/", "\\", ";", "&", "|", "$", "`", " ", "\t", "\n", "\r", "\x00",
)


def validate_host(host: str) -> str:
    """Validate a host identifier.

    Identifiers are compared by exact string equality, so no case folding or
    other normalization is applied here.

    Args:
        host: DNS name or IP literal

    Returns:
        The host identifier, unchanged

    Raises:
        ValueError: If the identifier is empty, too long or contains
            suspicious characters
    """
    if not host:
        raise ValueError("Host cannot be empty")

    if len(host) > MAX_HOST_LENGTH:
        raise ValueError(f"Host name too long: {len(host)} chars")

    for char in SUSPICIOUS_CHARS:
        if char in host:
            raise ValueError(f"Host contains invalid characters: {host!r}")

    return host


def validate_hosts(hosts: Iterable[str]) -> list[str]:
    """Validate every identifier, keeping caller order and duplicates."""
    return [validate_host(h) for h in hosts]
