"""Exception taxonomy for session management.

StructuralError subclasses abort the whole call. HostError subclasses are
caught at the per-host boundary and turned into outcomes or results.
"""


class SessionError(Exception):
    """Base class for session management errors."""


class StructuralError(SessionError):
    """Misuse or missing prerequisite that aborts the enclosing operation."""


class SessionNotFoundError(StructuralError):
    """No pool entry exists for the requested host."""

    def __init__(self, host: str):
        self.host = host
        super().__init__(f"No SSH session for {host}")


class ConnectionLostError(StructuralError):
    """The session for a host is no longer connected."""

    def __init__(self, host: str):
        self.host = host
        super().__init__(f"Connection to {host} lost")


class ConfirmationRequiredError(StructuralError):
    """Both an explicit host list and 'all' were given without confirmation."""


class CredentialRequiredError(StructuralError):
    """Neither a key file nor a password was supplied and no prompt exists."""


class KeyFileNotFoundError(StructuralError):
    """The key file path does not point at a file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Key file not found: {path}")


class HostError(SessionError):
    """Failure confined to a single host."""

    def __init__(self, host: str, message: str):
        self.host = host
        super().__init__(message)


class HostConnectError(HostError):
    """Failed to open or authenticate an SSH session."""

    def __init__(self, host: str, original_error: Exception):
        """Initialize connection error.

        Args:
            host: Host identifier
            original_error: Original exception that caused the failure
        """
        self.original_error = original_error
        super().__init__(host, f"Cannot connect to {host}: {original_error}")


class CommandTimeoutError(HostError):
    """A command did not finish within its timeout."""

    def __init__(self, host: str, timeout: float):
        self.timeout = timeout
        super().__init__(host, f"Command on {host} timed out after {timeout:g}s")
