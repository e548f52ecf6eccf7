"""SSH host key verification.

Resolves which known_hosts file asyncssh should verify server keys against.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

KNOWN_HOSTS_ENV = "SSHSESSION_KNOWN_HOSTS"


class HostKeyVerifier:
    """SSH host key verification policy."""

    def __init__(
        self,
        known_hosts_path: str | None = None,
        strict_checking: bool = True,
    ):
        """Initialize host key verifier.

        Args:
            known_hosts_path: Path to known_hosts file or 'none' to disable
            strict_checking: Reject unknown host keys

        Raises:
            FileNotFoundError: If strict mode and file missing
        """
        self.strict_checking = strict_checking
        self._known_hosts = self._resolve_known_hosts(known_hosts_path)

    def _resolve_known_hosts(self, env_value: str | None) -> str | None:
        """Resolve known_hosts path with security defaults.

        Returns:
            Path to known_hosts file or None to disable verification

        Raises:
            FileNotFoundError: If strict mode and file missing
        """
        if env_value and env_value.lower() == "none":
            logger.critical(
                "SSH HOST KEY VERIFICATION DISABLED. "
                "Sessions are vulnerable to MITM attacks."
            )
            return None

        if env_value:
            path = Path(os.path.expanduser(env_value))
        else:
            path = Path.home() / ".ssh" / "known_hosts"

        if path.exists():
            return str(path)

        if self.strict_checking:
            raise FileNotFoundError(
                f"SSH host key verification required but known_hosts "
                f"not found at {path}.\n\n"
                f"To fix this:\n"
                f"1. Add host keys: ssh-keyscan <hostname> >> {path}\n"
                f"2. Or point {KNOWN_HOSTS_ENV} at an existing file\n"
                f"3. Or disable verification (NOT RECOMMENDED): "
                f"{KNOWN_HOSTS_ENV}=none"
            )

        logger.warning(
            "known_hosts not found at %s, verification disabled. "
            "This is insecure!",
            path,
        )
        return None

    def get_known_hosts_path(self) -> str | None:
        """Get path to known_hosts file.

        Returns:
            Path string or None if verification disabled
        """
        return self._known_hosts

    def is_enabled(self) -> bool:
        """Check if host key verification is enabled."""
        return self._known_hosts is not None
