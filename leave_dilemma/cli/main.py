"""Main CLI entry point for leave-dilemma."""

import click

from leave_dilemma import __version__
from leave_dilemma.cli import EXIT_ERROR, EXIT_SUCCESS
from leave_dilemma.cli.commands import (
    decode_command,
    encode_command,
    run_command,
    strategies_command,
)
from leave_dilemma.core.logging import configure_logging
from leave_dilemma.core.settings import get_settings

__all__ = ["EXIT_ERROR", "EXIT_SUCCESS", "cli", "main"]


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Log level (default: LEAVE_DILEMMA_LOG_LEVEL or WARNING)",
)
@click.version_option(version=__version__, prog_name="leave-dilemma")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Leave-dilemma - evolution of cooperation with the option to leave.

    Agents play a repeated Prisoner's Dilemma with random partners,
    may leave a partner after any round, and imitate successful
    strategies when they are separated.

    Examples:

      # Run 1000 steps with the default parameters
      leave-dilemma run --steps 1000

      # Start everyone as tit-for-tat, without the leave option
      leave-dilemma run --no-leave --initial-strategy tit_for_tat

      # Show the named strategies
      leave-dilemma strategies
    """
    settings = get_settings()
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    configure_logging(
        level=log_level or settings.log_level,
        json_output=settings.log_json,
    )


cli.add_command(run_command)
cli.add_command(strategies_command)
cli.add_command(encode_command)
cli.add_command(decode_command)


def main() -> None:
    """Main entry point for the CLI."""
    cli(auto_envvar_prefix="LEAVE_DILEMMA")


if __name__ == "__main__":
    main()
