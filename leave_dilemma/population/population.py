"""Population of agents with a symmetric partner relation."""

from __future__ import annotations

import random
from collections.abc import Iterator

from leave_dilemma.core.config import RANDOM_STRATEGY
from leave_dilemma.core.exceptions import PopulationInvariantError
from leave_dilemma.core.logging import get_logger
from leave_dilemma.genome.space import StrategySpace
from leave_dilemma.population.agent import Agent

logger = get_logger(__name__)


class Population:
    """Arena of agents addressed by integer handles.

    Partnerships are stored as agent ids on both sides and are only
    changed through ``pair`` and ``break_partnership``, which update
    both agents together.

    Args:
        space: Strategy space new agents draw from.
        rng: Shared random source.
        initial_strategy: ``"random"`` for an independently random
            genome per agent, otherwise an alias or genome name given
            to every new agent.
    """

    def __init__(
        self,
        space: StrategySpace,
        rng: random.Random,
        initial_strategy: str = RANDOM_STRATEGY,
    ) -> None:
        self.space = space
        self._rng = rng
        self._agents: dict[int, Agent] = {}
        self._next_id = 0
        self._fixed_strategy: int | None = None
        self.set_initial_strategy(initial_strategy)

    def set_initial_strategy(self, initial_strategy: str) -> None:
        """Change the seeding rule used for agents created from now on."""
        if initial_strategy == RANDOM_STRATEGY:
            self._fixed_strategy = None
        else:
            self._fixed_strategy = self.space.resolve(initial_strategy)

    def initialize(self, size: int) -> None:
        """Replace all agents with ``size`` fresh, unpartnered agents."""
        self._agents.clear()
        self._next_id = 0
        for _ in range(size):
            self._spawn()

    def _spawn(self) -> Agent:
        if self._fixed_strategy is None:
            genome = self.space.random_genome(self._rng)
            strategy_id = self.space.strategy_id(genome)
        else:
            strategy_id = self._fixed_strategy
            genome = self.space.genome(strategy_id)
        agent = Agent(agent_id=self._next_id, strategy_id=strategy_id, genome=genome)
        self._agents[agent.agent_id] = agent
        self._next_id += 1
        return agent

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator[Agent]:
        return iter(self._agents.values())

    def __getitem__(self, agent_id: int) -> Agent:
        return self._agents[agent_id]

    @property
    def agents(self) -> list[Agent]:
        return list(self._agents.values())

    def partner_of(self, agent: Agent) -> Agent | None:
        if agent.partner is None:
            return None
        return self._agents[agent.partner]

    def pair(self, a: Agent, b: Agent) -> None:
        """Make two unpartnered agents mutual partners.

        Raises:
            PopulationInvariantError: If either agent already has a
                partner or both are the same agent.
        """
        if a.agent_id == b.agent_id:
            raise PopulationInvariantError(f"Agent {a.agent_id} cannot pair itself")
        if a.has_partner or b.has_partner:
            raise PopulationInvariantError(
                f"Agents {a.agent_id} and {b.agent_id} must both be unpartnered"
            )
        a.partner = b.agent_id
        b.partner = a.agent_id
        a.is_new_partnership = True
        b.is_new_partnership = True

    def break_partnership(self, agent: Agent) -> Agent | None:
        """Dissolve an agent's partnership on both sides.

        Both former partners restart from their own first move.

        Returns:
            The former partner, or None if the agent had none.
        """
        partner = self.partner_of(agent)
        if partner is None:
            return None
        for member in (agent, partner):
            member.partner = None
            member.next_action = member.action_first
        return partner

    def resize_to(self, target: int) -> tuple[int, int]:
        """Add or remove agents until exactly ``target`` remain.

        New agents follow the seeding rule. Removed agents are a
        uniformly random subset; their partnerships are broken first.

        Returns:
            Tuple of (agents added, agents removed).
        """
        added = removed = 0
        while len(self._agents) < target:
            self._spawn()
            added += 1
        excess = len(self._agents) - target
        if excess > 0:
            doomed = self._rng.sample(list(self._agents), excess)
            for agent_id in doomed:
                self.break_partnership(self._agents[agent_id])
                del self._agents[agent_id]
            removed = excess
        if added or removed:
            logger.debug(
                "population_resized", added=added, removed=removed, size=target
            )
        if len(self._agents) != target:
            raise PopulationInvariantError(
                f"Population has {len(self._agents)} agents, expected {target}"
            )
        return added, removed

    def unpartnered(self) -> list[Agent]:
        return [a for a in self._agents.values() if a.partner is None]

    def check_invariants(self) -> None:
        """Verify the partner relation is symmetric and irreflexive.

        Raises:
            PopulationInvariantError: On the first violation found.
        """
        for agent in self._agents.values():
            if agent.partner is None:
                continue
            if agent.partner == agent.agent_id:
                raise PopulationInvariantError(
                    f"Agent {agent.agent_id} is its own partner"
                )
            partner = self._agents.get(agent.partner)
            if partner is None or partner.partner != agent.agent_id:
                raise PopulationInvariantError(
                    f"Partnership of agent {agent.agent_id} is not symmetric"
                )
