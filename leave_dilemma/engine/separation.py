"""Exogenous and endogenous partnership dissolution."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from leave_dilemma.core.action import Action
from leave_dilemma.core.config import SimulationConfig
from leave_dilemma.population.agent import Agent
from leave_dilemma.population.population import Population


@dataclass
class SeparationOutcome:
    """What separation did in one step.

    Attributes:
        separated: Agents left unpartnered by exogenous separation;
            the pool revision draws from.
        exogenous_breaks: Partnerships ended by chance.
        endogenous_breaks: Partnerships ended by a leave decision.
    """

    separated: list[Agent] = field(default_factory=list)
    exogenous_breaks: int = 0
    endogenous_breaks: int = 0


class SeparationEngine:
    """Dissolves partnerships after a round.

    Each partnered agent independently ends its partnership with
    probability ``config.exogenous_break_prob``, which makes partnership
    length geometric with mean ``config.expected_interactions``. Then,
    if the leave option is enabled, every agent still paired that
    intends to leave ends its partnership.

    Args:
        config: Run configuration.
        rng: Shared random source.
    """

    def __init__(self, config: SimulationConfig, rng: random.Random) -> None:
        self.config = config
        self._rng = rng

    def separate(self, population: Population) -> SeparationOutcome:
        """Run both separation phases."""
        outcome = self.exogenous(population)
        if self.config.leave_option:
            outcome.endogenous_breaks = self.endogenous(population)
        return outcome

    def exogenous(self, population: Population) -> SeparationOutcome:
        """Break partnerships at random."""
        outcome = SeparationOutcome()
        prob = self.config.exogenous_break_prob
        for agent in population:
            if not agent.has_partner:
                continue
            if self._rng.random() < prob:
                partner = population.break_partnership(agent)
                outcome.separated.append(agent)
                outcome.separated.append(partner)  # type: ignore[arg-type]
                outcome.exogenous_breaks += 1
        return outcome

    def endogenous(self, population: Population) -> int:
        """Break partnerships where an agent chose to leave.

        Returns:
            Number of partnerships dissolved.
        """
        breaks = 0
        for agent in population:
            if agent.has_partner and agent.next_action is Action.LEAVE:
                population.break_partnership(agent)
                breaks += 1
        return breaks
