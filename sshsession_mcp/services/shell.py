"""Interactive pass-through shell bound to one pooled session.

The prompt path is captured once at start and never refreshed; each line
runs on a fresh channel, so `cd` does not carry over between commands.
"""

import asyncio
import logging
import sys

import asyncssh

from sshsession_mcp.protocols import LineReader, OutputWriter
from sshsession_mcp.services.connection import TRANSPORT_ERRORS, Connection
from sshsession_mcp.services.errors import (
    CommandTimeoutError,
    ConnectionLostError,
    SessionNotFoundError,
)
from sshsession_mcp.services.pool import SessionPool
from sshsession_mcp.utils.text import strip_line_terminators

logger = logging.getLogger(__name__)

EXIT_SENTINELS = frozenset({"exit", "quit"})
UNKNOWN_PATH = "unknown"


async def read_stdin_line(prompt: str) -> str:
    """Default LineReader: blocking input() run off the event loop."""
    return await asyncio.to_thread(input, prompt)


def write_stdout(text: str) -> None:
    """Default OutputWriter."""
    print(text, file=sys.stdout, flush=True)


class InteractiveShell:
    """Read a line, run it on the target session, print, repeat."""

    def __init__(
        self,
        pool: SessionPool,
        host: str,
        read_line: LineReader = read_stdin_line,
        write: OutputWriter = write_stdout,
        timeout: float | None = None,
        show_cwd: bool = True,
    ) -> None:
        self.pool = pool
        self.host = host
        self.read_line = read_line
        self.write = write
        self.timeout = timeout
        self.show_cwd = show_cwd
        self.prompt = ""

    def _target(self) -> Connection:
        connection = self.pool.get(self.host)
        if connection is None:
            raise SessionNotFoundError(self.host)
        if not connection.is_connected:
            raise ConnectionLostError(self.host)
        return connection

    async def _seed_prompt(self, connection: Connection) -> str:
        path = UNKNOWN_PATH
        if self.show_cwd:
            try:
                stdout, stderr, exit_status = await connection.run("pwd", self.timeout)
            except (CommandTimeoutError, asyncssh.Error, *TRANSPORT_ERRORS) as e:
                self.write(f"Could not determine working directory: {e}")
            else:
                if exit_status == 0 and stdout.strip():
                    path = strip_line_terminators(stdout).strip()
                else:
                    self.write(
                        "Could not determine working directory: "
                        f"{strip_line_terminators(stderr) or f'exit {exit_status}'}"
                    )
        return f"[{connection.username}@{self.host}]: {path}$ "

    async def run(self) -> int:
        """Run the loop until an exit sentinel or end of input.

        Returns:
            Number of commands executed

        Raises:
            SessionNotFoundError: If the host has no session
            ConnectionLostError: If the session is or becomes disconnected
        """
        connection = self._target()
        self.prompt = await self._seed_prompt(connection)
        logger.info("Interactive shell started on %s", connection.target)

        executed = 0
        while True:
            if not connection.is_connected:
                raise ConnectionLostError(self.host)

            try:
                line = await self.read_line(self.prompt)
            except EOFError:
                break

            command = line.strip()
            if not command:
                continue
            if command.lower() in EXIT_SENTINELS:
                break

            try:
                stdout, stderr, exit_status = await connection.run(command, self.timeout)
            except CommandTimeoutError as e:
                self.write(str(e))
                continue
            except (asyncssh.Error, *TRANSPORT_ERRORS) as e:
                if not connection.is_connected:
                    raise ConnectionLostError(self.host) from e
                self.write(f"Error: {e}")
                continue

            executed += 1
            if exit_status == 0:
                self.write(strip_line_terminators(stdout))
            else:
                self.write(strip_line_terminators(stderr) or f"exit {exit_status}")

        logger.info("Interactive shell on %s ended after %d command(s)", self.host, executed)
        return executed
