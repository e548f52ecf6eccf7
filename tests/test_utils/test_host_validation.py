"""Tests for host identifier validation."""

import pytest

from sshsession_mcp.utils import validate_host, validate_hosts


@pytest.mark.parametrize("host", ["10.0.0.1", "web-1.example.com", "::1", "Host1"])
def test_valid_hosts_returned_unchanged(host: str) -> None:
    assert validate_host(host) == host


@pytest.mark.parametrize("host", ["", "a;rm -rf /", "web 1", "host\tname", "$(id)"])
def test_invalid_hosts_rejected(host: str) -> None:
    with pytest.raises(ValueError):
        validate_host(host)


def test_overlong_host_rejected() -> None:
    with pytest.raises(ValueError, match="too long"):
        validate_host("a" * 254)


def test_validate_hosts_keeps_order_and_duplicates() -> None:
    assert validate_hosts(["b", "a", "b"]) == ["b", "a", "b"]
