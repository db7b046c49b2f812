"""Simulation run configuration."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any

from leave_dilemma.core.action import Action
from leave_dilemma.genome.space import StrategySpace

# Token selecting an independently random genome per agent.
RANDOM_STRATEGY = "random"


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration of one simulation run.

    Payoffs are indexed by (own action, partner action): ``cd_payoff``
    is what a cooperator earns against a defector, ``dc_payoff`` what
    the defector earns. Fitness-proportional selection needs them to
    be non-negative.

    Attributes:
        population_size: Target number of agents, held after every step.
        cc_payoff: Payoff for mutual cooperation.
        cd_payoff: Payoff for cooperating against a defector.
        dc_payoff: Payoff for defecting against a cooperator.
        dd_payoff: Payoff for mutual defection.
        action_error: Probability that a played action is flipped.
        expected_interactions: Expected partnership length in rounds
            under exogenous separation alone.
        prob_revision: Probability that a separated agent revises.
        prob_experimentation: Probability that a reviser mutates its
            strategy instead of imitating.
        leave_option: Whether agents may choose to leave a partner.
        initial_strategy: ``"random"``, a genome name such as
            ``C-C-D-C-D``, or a registered strategy alias.
        seed: Seed for the shared random source.
    """

    population_size: int = 100
    cc_payoff: float = 3.0
    cd_payoff: float = 0.0
    dc_payoff: float = 5.0
    dd_payoff: float = 1.0
    action_error: float = 0.0
    expected_interactions: float = 10.0
    prob_revision: float = 0.1
    prob_experimentation: float = 0.01
    leave_option: bool = True
    initial_strategy: str = RANDOM_STRATEGY
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.population_size < 2:
            raise ValueError(
                f"population_size must be >= 2, got {self.population_size}"
            )
        for field_name in ("cc_payoff", "cd_payoff", "dc_payoff", "dd_payoff"):
            value = getattr(self, field_name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{field_name} must be finite and >= 0, got {value}")
        for field_name in ("action_error", "prob_revision", "prob_experimentation"):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{field_name} must be in [0, 1], got {value}")
        if not self.expected_interactions >= 1.0:
            raise ValueError(
                "expected_interactions must be >= 1, "
                f"got {self.expected_interactions}"
            )
        # Fails setup with InvalidGenomeName for unknown names.
        if self.initial_strategy != RANDOM_STRATEGY:
            StrategySpace(self.leave_option).resolve(self.initial_strategy)

    @property
    def alphabet_radix(self) -> int:
        """Number of symbols available to the conditional genes."""
        return 3 if self.leave_option else 2

    @property
    def exogenous_break_prob(self) -> float:
        """Per-agent probability of breaking a partnership each round.

        Two partners testing independently dissolve the pair with
        probability ``1/expected_interactions``, so a partnership
        survives each round with probability ``1 - 1/expected_interactions``.
        """
        return 1.0 - math.sqrt(1.0 - 1.0 / self.expected_interactions)

    def payoff(self, own: Action, other: Action) -> float:
        """Look up one player's payoff for a played action pair."""
        return self._payoff_table()[(own, other)]

    def _payoff_table(self) -> dict[tuple[Action, Action], float]:
        return {
            (Action.COOPERATE, Action.COOPERATE): self.cc_payoff,
            (Action.COOPERATE, Action.DEFECT): self.cd_payoff,
            (Action.DEFECT, Action.COOPERATE): self.dc_payoff,
            (Action.DEFECT, Action.DEFECT): self.dd_payoff,
        }

    def with_changes(self, **changes: Any) -> SimulationConfig:
        """Return a validated copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dictionary."""
        return dataclasses.asdict(self)
