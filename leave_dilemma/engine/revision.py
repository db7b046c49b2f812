"""Evolutionary strategy revision.

Separated agents revise with probability ``prob_revision``. A reviser
imitates a strategy drawn with probability proportional to the total
payoff its holders earned this round, or, with probability
``prob_experimentation``, mutates one gene of its own strategy.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass

from leave_dilemma.core.action import Action
from leave_dilemma.core.config import SimulationConfig
from leave_dilemma.core.logging import get_logger
from leave_dilemma.engine.sampling import weighted_sample
from leave_dilemma.genome.codec import FIRST_GENE, NUM_GENES
from leave_dilemma.genome.space import StrategySpace
from leave_dilemma.population.aggregates import StrategyAggregates
from leave_dilemma.population.agent import Agent
from leave_dilemma.population.population import Population

logger = get_logger(__name__)

# With the leave option, share of mutations that hit the first move.
FIRST_GENE_MUTATION_PROB = 0.2


@dataclass
class RevisionOutcome:
    """Counts of what revision did in one step."""

    revised: int = 0
    imitated: int = 0
    mutated: int = 0


class RevisionEngine:
    """Fitness-proportional imitation with mutation.

    Args:
        space: Strategy space revisers draw from.
        config: Run configuration (revision and experimentation
            probabilities).
        rng: Shared random source.
    """

    def __init__(
        self,
        space: StrategySpace,
        config: SimulationConfig,
        rng: random.Random,
    ) -> None:
        self.space = space
        self.config = config
        self._rng = rng

    def select_revisers(self, pool: Iterable[Agent]) -> list[Agent]:
        """Each pool member revises independently with ``prob_revision``."""
        prob = self.config.prob_revision
        return [agent for agent in pool if self._rng.random() < prob]

    def revise(self, population: Population, pool: Iterable[Agent]) -> RevisionOutcome:
        """Revise the strategies of a random subset of ``pool``.

        Fitness is aggregated over the whole population, partnered or
        not. Revision never adds or removes agents.
        """
        revisers = self.select_revisers(pool)
        outcome = RevisionOutcome(revised=len(revisers))
        if not revisers:
            return outcome

        aggregates = StrategyAggregates.from_agents(population, self.space.size)
        draws = weighted_sample(aggregates.payoff, len(revisers), self._rng)

        for agent, drawn in zip(revisers, draws, strict=True):
            if self._rng.random() < self.config.prob_experimentation:
                new_id = self.mutate(agent.strategy_id)
                outcome.mutated += 1
            else:
                new_id = drawn
                outcome.imitated += 1
            agent.adopt(new_id, self.space.genome(new_id))

        logger.debug(
            "revision_applied",
            revised=outcome.revised,
            imitated=outcome.imitated,
            mutated=outcome.mutated,
        )
        return outcome

    def mutate(self, strategy_id: int) -> int:
        """Change exactly one gene of a strategy.

        With the leave option the first move mutates with probability
        0.2, otherwise one of the four responses, chosen uniformly,
        moves to one of its two other symbols. Without the leave
        option one of the five genes, chosen uniformly, is flipped.
        """
        genome = self.space.genome(strategy_id)
        if self.space.leave_option:
            if self._rng.random() < FIRST_GENE_MUTATION_PROB:
                position = FIRST_GENE
            else:
                position = 1 + self._rng.randrange(NUM_GENES - 1)
        else:
            position = self._rng.randrange(NUM_GENES)

        current = genome.genes[position].digit
        radix = 2 if position == FIRST_GENE else self.space.radix
        if radix == 2:
            new_digit = (current + 1) % 2
        else:
            new_digit = (current + 1 + self._rng.randrange(radix - 1)) % radix
        mutant = genome.with_gene(position, Action.from_digit(new_digit))
        return self.space.strategy_id(mutant)
