"""Pairing and one round of play."""

from __future__ import annotations

import random

from leave_dilemma.core.action import Action
from leave_dilemma.core.config import SimulationConfig
from leave_dilemma.population.agent import Agent
from leave_dilemma.population.population import Population


class MatchingEngine:
    """Pairs unpartnered agents and plays the Prisoner's Dilemma.

    Features:
        - Uniform random matching of unpartnered agents
        - Noise: played action flipped with probability
          ``config.action_error``, independently per agent
        - Payoff lookup by (own, partner) played action
        - Next intention from the genome's response to the outcome

    Args:
        config: Run configuration (payoffs, action error).
        rng: Shared random source.
    """

    def __init__(self, config: SimulationConfig, rng: random.Random) -> None:
        self.config = config
        self._rng = rng

    def form_pairs(self, population: Population) -> int:
        """Match unpartnered agents uniformly at random.

        Existing partnerships continue and are marked as not new. With
        an odd number of unpartnered agents one stays alone.

        Returns:
            Number of new partnerships formed.
        """
        eligible: list[Agent] = []
        for agent in population:
            agent.is_new_partnership = False
            if not agent.has_partner:
                eligible.append(agent)
        self._rng.shuffle(eligible)
        formed = 0
        for a, b in zip(eligible[0::2], eligible[1::2], strict=False):
            population.pair(a, b)
            formed += 1
        return formed

    def play_round(self, population: Population) -> int:
        """Play one round in every partnership.

        Agents without a partner do not play; their active action is
        cleared and their payoff for the round is zero.

        Returns:
            Number of pairs that played.
        """
        error = self.config.action_error
        for agent in population:
            if not agent.has_partner:
                agent.active_action = None
                agent.payoff = 0.0
                continue
            if agent.next_action is Action.LEAVE:
                raise ValueError(
                    f"Agent {agent.agent_id} intends to leave but is still paired"
                )
            if error > 0 and self._rng.random() < error:
                agent.active_action = agent.next_action.flipped()
            else:
                agent.active_action = agent.next_action

        played = 0
        for agent in population:
            partner = population.partner_of(agent)
            if partner is None:
                continue
            agent.payoff = self.config.payoff(
                agent.active_action,  # type: ignore[arg-type]
                partner.active_action,  # type: ignore[arg-type]
            )
            played += 1
        return played // 2

    def update_intentions(self, population: Population) -> None:
        """Set each player's next action from its genome.

        The result may be ``LEAVE``, which separation resolves before
        the next round.
        """
        for agent in population:
            partner = population.partner_of(agent)
            if partner is None or agent.active_action is None:
                continue
            agent.next_action = agent.genome.response(
                agent.active_action,
                partner.active_action,  # type: ignore[arg-type]
            )
