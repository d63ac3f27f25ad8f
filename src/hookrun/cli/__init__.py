"""
hookrun CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from hookrun import __version__
from hookrun.cli import scripts

app = typer.Typer(
    name="hookrun",
    help="Run administrative hook scripts with timeouts and process-group cleanup",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def configure_logging(debug: bool) -> None:
    """
    Configure logging for hookrun commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"hookrun {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    hookrun - run prolog/epilog style hook scripts.

    Scripts matching a glob pattern run one at a time in sorted order, each
    in its own process group. A timeout kills the script together with
    everything it started. The first failing script stops the run.

    Common Workflows:
        hookrun resolve '/etc/hookrun/prolog.d/*'     # What would run?
        hookrun run prolog '/etc/hookrun/prolog.d/*'  # Run by pattern
        hookrun hook epilog --job-id 42               # Run from config
    """
    configure_logging(debug)
    ctx.obj = {"debug": debug}


app.command(name="run")(scripts.run)
app.command(name="hook")(scripts.hook)
app.command(name="resolve")(scripts.resolve)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
