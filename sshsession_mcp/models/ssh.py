"""SSH-related data models."""

from dataclasses import dataclass
from enum import Enum


class ConnectionState(Enum):
    """Lifecycle of a pooled connection.

    UNCONNECTED -> CONNECTED -> DISCONNECTED -> DISPOSED. DISPOSED is terminal.
    """

    UNCONNECTED = "unconnected"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    DISPOSED = "disposed"


@dataclass
class AuthSpec:
    """Credentials for opening SSH sessions.

    A key file takes precedence over a password when both are set.
    """

    username: str
    password: str | None = None
    key_file: str | None = None
    passphrase: str | None = None

    @property
    def method(self) -> str:
        """Name of the authentication method that will be used.

        Returns:
            'key', 'key+passphrase', 'password' or 'prompt'
        """
        if self.key_file:
            return "key+passphrase" if self.passphrase else "key"
        if self.password is not None:
            return "password"
        return "prompt"

    def __repr__(self) -> str:
        return (
            f"AuthSpec(username={self.username!r}, method={self.method!r}, "
            f"key_file={self.key_file!r})"
        )
