"""CLI command for batch simulation runs."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from leave_dilemma.analysis.results import SimulationResult
from leave_dilemma.analysis.statistics import CONTEXTS, StepStatistics
from leave_dilemma.cli import EXIT_ERROR, EXIT_SUCCESS
from leave_dilemma.core.config import RANDOM_STRATEGY, SimulationConfig
from leave_dilemma.core.exceptions import LeaveDilemmaError
from leave_dilemma.core.settings import LeaveDilemmaSettings
from leave_dilemma.genome.space import StrategySpace
from leave_dilemma.simulation import Simulation


@click.command(name="run")
@click.option("--steps", type=int, default=None, help="Number of steps (default: 1000)")
@click.option("--population-size", type=int, default=100, show_default=True)
@click.option("--cc-payoff", type=float, default=3.0, show_default=True)
@click.option("--cd-payoff", type=float, default=0.0, show_default=True)
@click.option("--dc-payoff", type=float, default=5.0, show_default=True)
@click.option("--dd-payoff", type=float, default=1.0, show_default=True)
@click.option("--action-error", type=float, default=0.0, show_default=True)
@click.option(
    "--expected-interactions",
    type=float,
    default=10.0,
    show_default=True,
    help="Expected partnership length under random separation",
)
@click.option("--prob-revision", type=float, default=0.1, show_default=True)
@click.option("--prob-experimentation", type=float, default=0.01, show_default=True)
@click.option(
    "--leave/--no-leave",
    "leave_option",
    default=True,
    show_default=True,
    help="Allow agents to leave their partner",
)
@click.option(
    "--initial-strategy",
    default=RANDOM_STRATEGY,
    show_default=True,
    help="'random', a genome such as C-C-D-C-D, or a strategy alias",
)
@click.option("--seed", type=int, default=None, help="Random seed")
@click.option(
    "--every",
    type=int,
    default=1,
    show_default=True,
    help="Record every Nth step",
)
@click.option(
    "--output",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format",
)
@click.option(
    "--output-file",
    type=click.Path(path_type=Path),
    help="Output file path (for json output)",
)
@click.option("--verbose", "-v", is_flag=True, help="Print every recorded step")
@click.pass_context
def run_command(
    ctx: click.Context,
    steps: int | None,
    population_size: int,
    cc_payoff: float,
    cd_payoff: float,
    dc_payoff: float,
    dd_payoff: float,
    action_error: float,
    expected_interactions: float,
    prob_revision: float,
    prob_experimentation: float,
    leave_option: bool,
    initial_strategy: str,
    seed: int | None,
    every: int,
    output: str,
    output_file: Path | None,
    verbose: bool,
) -> None:
    """Run the simulation for a number of steps.

    Examples:

      leave-dilemma run --steps 500 --seed 42
      leave-dilemma run --no-leave --initial-strategy D-D-D-D-D
      leave-dilemma run --output json --output-file run.json
    """
    settings: LeaveDilemmaSettings = ctx.obj["settings"]
    try:
        config = SimulationConfig(
            population_size=population_size,
            cc_payoff=cc_payoff,
            cd_payoff=cd_payoff,
            dc_payoff=dc_payoff,
            dd_payoff=dd_payoff,
            action_error=action_error,
            expected_interactions=expected_interactions,
            prob_revision=prob_revision,
            prob_experimentation=prob_experimentation,
            leave_option=leave_option,
            initial_strategy=initial_strategy,
            seed=seed if seed is not None else settings.default_seed,
        )
        simulation = Simulation(config)
        result = simulation.run(
            steps if steps is not None else settings.default_steps,
            record_interval=every,
        )
    except (LeaveDilemmaError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if output == "json":
        output_text = json.dumps(result.to_dict(), indent=2)
        if output_file:
            output_file.write_text(output_text)
            click.echo(f"Results written to {output_file}")
        else:
            click.echo(output_text)
    else:
        _print_result(result, simulation.space, verbose)
    sys.exit(EXIT_SUCCESS)


def _print_result(
    result: SimulationResult,
    space: StrategySpace,
    verbose: bool,
) -> None:
    """Print a run summary to the console."""
    if verbose:
        for snap in result.snapshots:
            click.echo(_format_step(snap))
        click.echo()

    final = result.final
    if final is None:
        click.echo("No steps run.")
        return

    click.echo(f"Steps: {final.tick}")
    click.echo(f"Population: {final.population_size}")
    click.echo(
        "Outcomes: "
        f"CC={final.outcome_cc:.3f} CD={final.outcome_cd:.3f} DD={final.outcome_dd:.3f}"
    )
    click.echo(f"Mean payoff: {final.mean_payoff:.4f}")
    if final.mean_payoff_new is not None:
        click.echo(f"Mean payoff (new partnerships): {final.mean_payoff_new:.4f}")
    click.echo(f"Unpartnered: {final.unpartnered_fraction:.3f}")
    click.echo(f"First move C: {final.first_cooperate:.3f}")
    click.echo()

    click.echo("Responses by previous outcome (C / D / L):")
    for ctx_name in CONTEXTS:
        dist = final.contexts[ctx_name]
        click.echo(
            f"  {ctx_name}: {dist.cooperate:.3f} / {dist.defect:.3f} / {dist.leave:.3f}"
        )
    click.echo()

    click.echo("Most frequent strategies:")
    for name, count in result.final_distribution(space, top=10).items():
        click.echo(f"  {name}: {count}")


def _format_step(snap: StepStatistics) -> str:
    parts = [
        f"t={snap.tick}",
        f"CC={snap.outcome_cc:.3f}",
        f"CD={snap.outcome_cd:.3f}",
        f"DD={snap.outcome_dd:.3f}",
        f"payoff={snap.mean_payoff:.3f}",
    ]
    return "  ".join(parts)
