"""Per-strategy payoff and count tables."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from leave_dilemma.population.agent import Agent


@dataclass
class StrategyAggregates:
    """Summed payoff and holder count per strategy id.

    Built from scratch each step; never updated incrementally.

    Attributes:
        payoff: Sum of latest-round payoffs of each strategy's holders.
        count: Number of agents holding each strategy.
    """

    payoff: np.ndarray
    count: np.ndarray

    @classmethod
    def from_agents(
        cls,
        agents: Iterable[Agent],
        num_strategies: int,
    ) -> StrategyAggregates:
        """Tabulate every agent; missing payoffs count as zero."""
        payoff = np.zeros(num_strategies)
        count = np.zeros(num_strategies, dtype=int)
        for agent in agents:
            payoff[agent.strategy_id] += agent.payoff or 0.0
            count[agent.strategy_id] += 1
        return cls(payoff=payoff, count=count)

    @property
    def population_size(self) -> int:
        return int(self.count.sum())
