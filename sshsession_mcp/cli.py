"""Command-line interface.

Three commands:
- serve: run the MCP server
- shell: open one session and drop into the pass-through shell
- run: connect a batch of hosts, run one command, print the report
"""

import asyncio

import click

from sshsession_mcp import __version__
from sshsession_mcp.config import Config, Settings
from sshsession_mcp.dependencies import Dependencies
from sshsession_mcp.models import AuthSpec, DispatchReport
from sshsession_mcp.services import InteractiveShell, StructuralError
from sshsession_mcp.tools.formatting import format_outcomes, format_report
from sshsession_mcp.utils.console import configure_logging


def prompt_password(username: str) -> str:
    """CredentialPrompt backed by a hidden terminal prompt."""
    return click.prompt(f"Password for {username}", hide_input=True)


def echo_progress(line: str) -> None:
    """ProgressCallback writing to stderr so stdout stays the report."""
    click.echo(line, err=True)


@click.group()
@click.version_option(version=__version__, prog_name="sshsession")
def main() -> None:
    """Manage pooled SSH sessions to many hosts."""
    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_colors, default_level="WARNING")


@main.command()
def serve() -> None:
    """Run the MCP server (transport from SSHSESSION_TRANSPORT)."""
    from sshsession_mcp.__main__ import run_server

    run_server()


@main.command()
@click.argument("host")
@click.option("-u", "--username", required=True, help="Remote user.")
@click.option("-p", "--port", type=int, default=None, help="SSH port.")
@click.option(
    "-i", "--identity", "key_file", type=click.Path(), default=None, help="Private key file."
)
@click.option("--passphrase", default=None, help="Key passphrase.")
@click.option(
    "--password", default=None, help="Login password, skips the prompt."
)
@click.option("--timeout", type=float, default=None, help="Per-command timeout, 0 disables.")
def shell(
    host: str,
    username: str,
    port: int | None,
    key_file: str | None,
    passphrase: str | None,
    password: str | None,
    timeout: float | None,
) -> None:
    """Open a session to HOST and run commands interactively.

    Type 'exit' or 'quit' (or send EOF) to leave.
    """
    config = Config.from_env()
    auth = AuthSpec(
        username=username, password=password, key_file=key_file, passphrase=passphrase
    )
    try:
        asyncio.run(_shell(config, host, auth, port, timeout))
    except (StructuralError, ValueError) as e:
        raise click.ClickException(str(e)) from e


async def _shell(
    config: Config,
    host: str,
    auth: AuthSpec,
    port: int | None,
    timeout: float | None,
) -> None:
    deps = Dependencies.from_config(config)
    try:
        outcomes = await deps.manager.connect(
            [host], auth, port=port or config.default_port, prompt=prompt_password
        )
        outcome = outcomes[0]
        if not outcome.ok:
            raise click.ClickException(outcome.message)

        effective_timeout = config.command_timeout if timeout is None else (timeout or None)
        interactive = InteractiveShell(deps.pool, host, timeout=effective_timeout)
        await interactive.run()
    finally:
        await deps.cleanup()


@main.command()
@click.argument("command")
@click.option(
    "-H", "--host", "hosts", multiple=True, required=True, help="Target host (repeatable)."
)
@click.option("-u", "--username", required=True, help="Remote user.")
@click.option("-p", "--port", type=int, default=None, help="SSH port.")
@click.option(
    "-i", "--identity", "key_file", type=click.Path(), default=None, help="Private key file."
)
@click.option("--passphrase", default=None, help="Key passphrase.")
@click.option(
    "--password", default=None, help="Login password, skips the prompt."
)
@click.option(
    "--concurrent/--sequential",
    default=None,
    help="Fan-out strategy (default from SSHSESSION_DISPATCH_STRATEGY).",
)
@click.option("--timeout", type=float, default=None, help="Per-command timeout, 0 disables.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress per-host progress lines.")
def run(
    command: str,
    hosts: tuple[str, ...],
    username: str,
    port: int | None,
    key_file: str | None,
    passphrase: str | None,
    password: str | None,
    concurrent: bool | None,
    timeout: float | None,
    quiet: bool,
) -> None:
    """Connect to every --host and run COMMAND on each.

    Exits 1 when nothing ran or every host failed.
    """
    config = Config.from_env()
    auth = AuthSpec(
        username=username, password=password, key_file=key_file, passphrase=passphrase
    )
    try:
        report = asyncio.run(
            _run(config, command, list(hosts), auth, port, concurrent, timeout, quiet)
        )
    except (StructuralError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(format_report(report))
    if report.failed:
        raise SystemExit(1)


async def _run(
    config: Config,
    command: str,
    hosts: list[str],
    auth: AuthSpec,
    port: int | None,
    concurrent: bool | None,
    timeout: float | None,
    quiet: bool,
) -> DispatchReport:
    deps = Dependencies.from_config(config, progress=echo_progress)
    try:
        outcomes = await deps.manager.connect(
            hosts,
            auth,
            port=port or config.default_port,
            prompt=prompt_password,
            concurrent=concurrent,
        )
        if not quiet:
            click.echo(format_outcomes(outcomes), err=True)
        return await deps.dispatcher.dispatch(
            command,
            hosts=hosts,
            quiet=quiet,
            timeout=timeout,
            concurrent=concurrent,
        )
    finally:
        await deps.cleanup()


if __name__ == "__main__":
    main()
