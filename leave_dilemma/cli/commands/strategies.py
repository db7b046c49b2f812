"""CLI commands for inspecting the strategy space."""

from __future__ import annotations

import sys

import click

from leave_dilemma.cli import EXIT_ERROR
from leave_dilemma.core.exceptions import LeaveDilemmaError
from leave_dilemma.genome.space import StrategySpace

_leave_option = click.option(
    "--leave/--no-leave",
    "leave_option",
    default=True,
    show_default=True,
    help="Use the three-symbol alphabet with L",
)


@click.command(name="strategies")
@_leave_option
@click.option("--all", "show_all", is_flag=True, help="List every strategy id")
def strategies_command(leave_option: bool, show_all: bool) -> None:
    """List named strategies, or the whole strategy space."""
    space = StrategySpace(leave_option)
    click.echo(f"Strategy space: {space.size} strategies")
    if show_all:
        for strategy_id, name in enumerate(space.names()):
            click.echo(f"  {strategy_id:>3}  {name}")
        return
    for alias, strategy_id in space.aliases().items():
        click.echo(f"  {alias:<18} {space.id_to_name(strategy_id)}  (id {strategy_id})")


@click.command(name="encode")
@click.argument("name")
@_leave_option
def encode_command(name: str, leave_option: bool) -> None:
    """Print the strategy id of a genome name or alias."""
    try:
        click.echo(StrategySpace(leave_option).resolve(name))
    except LeaveDilemmaError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


@click.command(name="decode")
@click.argument("strategy_id", type=int)
@_leave_option
def decode_command(strategy_id: int, leave_option: bool) -> None:
    """Print the genome name of a strategy id."""
    try:
        click.echo(StrategySpace(leave_option).id_to_name(strategy_id))
    except LeaveDilemmaError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)
