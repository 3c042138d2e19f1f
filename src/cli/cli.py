# src/cli/cli.py
import sys

import click
from loguru import logger

from config.config import settings
from plancontext.repl.commands import handle_command
from plancontext.runtime import PlanContextRuntime


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


@click.group()
@click.option("--log-level", default=None, help="Override PLAN_CONTEXT_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """Plan context CLI."""
    _configure_logging((log_level or settings.log_level).upper())


@cli.command("repl")
def repl_cmd() -> None:
    """Start a plan context store and drive it from stdin."""
    with PlanContextRuntime.from_settings(settings) as runtime:
        click.echo("Plan context ready. Type 'help' for commands, 'exit' to quit.")
        while True:
            try:
                line = input("> ").strip()
            except EOFError:
                break
            if line.lower() in {"exit", "quit"}:
                break

            reply = handle_command(runtime.store, line)
            if reply is None:
                click.echo(f"Unknown command: {line.split()[0]}. Type 'help'.")
            elif reply:
                click.echo(reply)


@cli.command("show-config")
def show_config_cmd() -> None:
    """Print the effective settings."""
    for name, value in settings.model_dump().items():
        click.echo(f"{name} = {value}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
