"""CLI commands for ding."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from loguru import logger

from ding import __logo__, __version__
from ding.config.loader import load_config
from ding.config.schema import Config, DiscordConfig
from ding.errors import ConfigurationError, DingError
from ding.lifecycle.engine import LifecycleEngine, RunReport
from ding.runner.command import CommandRunner, Completed
from ding.senders.base import NotificationSender
from ding.senders.console import ConsoleSender
from ding.senders.discord import DiscordSender
from ding.utils.logging import configure_logging

app = typer.Typer(
    name="ding",
    help=f"{__logo__} ding - run a command and get notified when it ends",
    no_args_is_help=True,
)

# Everything after the options belongs to the monitored command
PASSTHROUGH = {"allow_interspersed_args": False}


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{__logo__} ding v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log payloads and child output."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a JSON config file."),
    version: bool = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Run a command and report its lifecycle to a notification provider."""
    configure_logging(verbose)
    try:
        ctx.obj = load_config(config)
    except ConfigurationError as e:
        _fail(e)


def exit_code_for(report: RunReport) -> int:
    """Map a finished run to the process exit status."""
    outcome = report.outcome
    if isinstance(outcome, Completed):
        return 0
    if outcome.exit_code is not None:
        return outcome.exit_code
    if outcome.error is not None:
        return outcome.error.exit_code
    return 1


async def _run(sender: NotificationSender, ignore_exit_code: bool) -> RunReport:
    async with sender:
        engine = LifecycleEngine(sender, CommandRunner(fail_on_nonzero=not ignore_exit_code))
        return await engine.start()


def _fail(error: DingError) -> NoReturn:
    logger.error(str(error))
    typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
    raise typer.Exit(error.exit_code)


def _execute(sender: NotificationSender, ignore_exit_code: bool) -> None:
    try:
        report = asyncio.run(_run(sender, ignore_exit_code))
    except DingError as e:
        _fail(e)

    code = exit_code_for(report)
    if code:
        typer.secho(f"Command {report.state.value} (exit code {code})", fg=typer.colors.YELLOW, err=True)
    raise typer.Exit(code)


@app.command(context_settings=PASSTHROUGH)
def discord(
    ctx: typer.Context,
    command: Optional[List[str]] = typer.Argument(None, help="Command to run, followed by its arguments."),
    webhook_url: Optional[str] = typer.Option(
        None, "--webhook-url", envvar="DING_WEBHOOK_URL", help="Discord webhook URL."
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds."),
    ignore_exit_code: bool = typer.Option(
        False, "--ignore-exit-code", help="Report non-zero exits as finished, not crashed."
    ),
) -> None:
    """Notify a Discord webhook when COMMAND starts and ends."""
    config: Config = ctx.obj or Config()
    base = config.discord

    url = webhook_url or (base.webhook_url if base else None)
    if not url:
        _fail(ConfigurationError("a Discord webhook URL is required (--webhook-url or DING_WEBHOOK_URL)"))

    values = base.model_dump() if base else {}
    values.update(webhook_url=url)
    if timeout is not None:
        values.update(timeout=timeout)
    endpoint = DiscordConfig.model_validate(values)

    sender = DiscordSender(endpoint, command or [])
    _execute(sender, ignore_exit_code or config.ignore_exit_code)


@app.command(context_settings=PASSTHROUGH)
def console(
    ctx: typer.Context,
    command: Optional[List[str]] = typer.Argument(None, help="Command to run, followed by its arguments."),
    ignore_exit_code: bool = typer.Option(
        False, "--ignore-exit-code", help="Report non-zero exits as finished, not crashed."
    ),
) -> None:
    """Print lifecycle events to stdout instead of sending them."""
    config: Config = ctx.obj or Config()
    _execute(ConsoleSender(None, command or []), ignore_exit_code or config.ignore_exit_code)


if __name__ == "__main__":
    app()
