"""Per-step population statistics.

Computed from the round just played, before revision changes any
strategy. These are the time series a front end would plot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from leave_dilemma.core.action import Action
from leave_dilemma.genome.space import StrategySpace
from leave_dilemma.population.aggregates import StrategyAggregates
from leave_dilemma.population.population import Population

# Previous-round outcome (own, partner) to the gene consulted there.
CONTEXTS: dict[str, str] = {
    "CC": "if_cc",
    "CD": "if_cd",
    "DC": "if_dc",
    "DD": "if_dd",
}


@dataclass
class ContextDistribution:
    """Share of the population giving each response in one context.

    ``leave`` only counts agents whose first move is defect; this
    matches the reporting convention the model's plots have always
    used.
    """

    cooperate: float = 0.0
    defect: float = 0.0
    leave: float = 0.0

    @property
    def stay(self) -> float:
        """Share that would continue the partnership."""
        return self.cooperate + self.defect

    def to_dict(self) -> dict[str, float]:
        return {
            "cooperate": self.cooperate,
            "defect": self.defect,
            "leave": self.leave,
        }

    @classmethod
    def from_dict(cls, data: dict[str, float]) -> ContextDistribution:
        return cls(**data)


@dataclass
class StepStatistics:
    """Summary of one simulation step.

    Attributes:
        tick: Step counter, starting at 1 for the first step.
        population_size: Agents in the population during the round.
        pairs_played: Partnerships that played this round.
        outcome_cc: Share of played pairs where both cooperated.
        outcome_cd: Share of played pairs with one C and one D.
        outcome_dd: Share of played pairs where both defected.
        contexts: Response distribution per previous outcome.
        first_cooperate_count: Agents whose first move is cooperate.
        strategy_counts: Holders per strategy id, over the full space.
        mean_payoff: Mean latest payoff over the whole population.
        mean_payoff_new: Mean payoff of agents in a partnership that
            began this round, or None if none began.
        unpartnered_fraction: Share of agents without a partner after
            both separation phases.
    """

    tick: int
    population_size: int
    pairs_played: int = 0
    outcome_cc: float = 0.0
    outcome_cd: float = 0.0
    outcome_dd: float = 0.0
    contexts: dict[str, ContextDistribution] = field(default_factory=dict)
    first_cooperate_count: int = 0
    strategy_counts: list[int] = field(default_factory=list)
    mean_payoff: float = 0.0
    mean_payoff_new: float | None = None
    unpartnered_fraction: float = 0.0

    @property
    def outcome_shares(self) -> tuple[float, float, float]:
        return (self.outcome_cc, self.outcome_cd, self.outcome_dd)

    @property
    def first_cooperate(self) -> float:
        """Share of agents whose first move is cooperate."""
        if self.population_size == 0:
            return 0.0
        return self.first_cooperate_count / self.population_size

    def top_strategies(self, k: int = 10) -> list[tuple[int, int]]:
        """Most held strategies as (strategy id, count), largest first.

        Ties are broken by lower strategy id.
        """
        held = [(sid, n) for sid, n in enumerate(self.strategy_counts) if n > 0]
        held.sort(key=lambda item: (-item[1], item[0]))
        return held[:k]

    def named_counts(self, space: StrategySpace) -> dict[str, int]:
        """Holders per genome name, for strategies with any holder."""
        return {
            space.id_to_name(sid): n
            for sid, n in enumerate(self.strategy_counts)
            if n > 0
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dictionary."""
        return {
            "tick": self.tick,
            "population_size": self.population_size,
            "pairs_played": self.pairs_played,
            "outcome_cc": self.outcome_cc,
            "outcome_cd": self.outcome_cd,
            "outcome_dd": self.outcome_dd,
            "contexts": {k: v.to_dict() for k, v in self.contexts.items()},
            "first_cooperate_count": self.first_cooperate_count,
            "strategy_counts": list(self.strategy_counts),
            "mean_payoff": self.mean_payoff,
            "mean_payoff_new": self.mean_payoff_new,
            "unpartnered_fraction": self.unpartnered_fraction,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StepStatistics:
        """Deserialize from dictionary."""
        return cls(
            tick=data["tick"],
            population_size=data["population_size"],
            pairs_played=data.get("pairs_played", 0),
            outcome_cc=data.get("outcome_cc", 0.0),
            outcome_cd=data.get("outcome_cd", 0.0),
            outcome_dd=data.get("outcome_dd", 0.0),
            contexts={
                k: ContextDistribution.from_dict(v)
                for k, v in data.get("contexts", {}).items()
            },
            first_cooperate_count=data.get("first_cooperate_count", 0),
            strategy_counts=list(data.get("strategy_counts", [])),
            mean_payoff=data.get("mean_payoff", 0.0),
            mean_payoff_new=data.get("mean_payoff_new"),
            unpartnered_fraction=data.get("unpartnered_fraction", 0.0),
        )


def outcome_shares(population: Population) -> tuple[float, float, float, int]:
    """Shares of played pairs ending CC, CD (either way round) and DD.

    Counting players rather than pairs gives the same shares, since
    both members of a pair see the same outcome class.

    Returns:
        Tuple of (cc, cd, dd, pairs played). Shares are all zero when
        no pair played.
    """
    cc = cd = dd = 0
    for agent in population:
        partner = population.partner_of(agent)
        if partner is None or agent.active_action is None:
            continue
        cooperators = (agent.active_action, partner.active_action).count(
            Action.COOPERATE
        )
        if cooperators == 2:
            cc += 1
        elif cooperators == 1:
            cd += 1
        else:
            dd += 1
    players = cc + cd + dd
    if players == 0:
        return 0.0, 0.0, 0.0, 0
    return cc / players, cd / players, dd / players, players // 2


def context_distributions(population: Population) -> dict[str, ContextDistribution]:
    """Response shares per context, normalized by population size."""
    size = len(population)
    tallies = {ctx: [0, 0, 0] for ctx in CONTEXTS}
    for agent in population:
        for ctx, gene_name in CONTEXTS.items():
            gene = getattr(agent.genome, gene_name)
            if gene is Action.COOPERATE:
                tallies[ctx][0] += 1
            elif gene is Action.DEFECT:
                tallies[ctx][1] += 1
            elif agent.action_first is Action.DEFECT:
                tallies[ctx][2] += 1
    if size == 0:
        return {ctx: ContextDistribution() for ctx in CONTEXTS}
    return {
        ctx: ContextDistribution(c / size, d / size, leave / size)
        for ctx, (c, d, leave) in tallies.items()
    }


def collect_statistics(
    population: Population,
    space: StrategySpace,
    tick: int,
) -> StepStatistics:
    """Summarize the round just played."""
    cc, cd, dd, pairs = outcome_shares(population)
    aggregates = StrategyAggregates.from_agents(population, space.size)

    payoffs = np.array([agent.payoff or 0.0 for agent in population])
    new_payoffs = [
        agent.payoff or 0.0
        for agent in population
        if agent.is_new_partnership and agent.has_partner
    ]

    return StepStatistics(
        tick=tick,
        population_size=len(population),
        pairs_played=pairs,
        outcome_cc=cc,
        outcome_cd=cd,
        outcome_dd=dd,
        contexts=context_distributions(population),
        first_cooperate_count=sum(
            1 for agent in population if agent.action_first is Action.COOPERATE
        ),
        strategy_counts=aggregates.count.tolist(),
        mean_payoff=float(payoffs.mean()) if payoffs.size else 0.0,
        mean_payoff_new=float(np.mean(new_payoffs)) if new_payoffs else None,
    )
