"""Agent state."""

from __future__ import annotations

from dataclasses import dataclass, field

from leave_dilemma.core.action import Action
from leave_dilemma.genome.codec import Genome


@dataclass
class Agent:
    """One individual of the population.

    ``partner`` is the id of the partner agent, not a reference; the
    owning ``Population`` keeps the relation symmetric.

    Attributes:
        agent_id: Stable handle inside the population.
        strategy_id: Encoded genome, changed only by revision.
        genome: Decoded genome for ``strategy_id``.
        partner: Partner's agent id, or None.
        next_action: Action intended for the next round; may be
            ``LEAVE`` between intention update and separation.
        active_action: Action actually played this round.
        payoff: Payoff of the latest round, None before the first.
        is_new_partnership: Whether the current pairing began this round.
    """

    agent_id: int
    strategy_id: int
    genome: Genome
    partner: int | None = None
    next_action: Action = field(init=False)
    active_action: Action | None = None
    payoff: float | None = None
    is_new_partnership: bool = False

    def __post_init__(self) -> None:
        self.next_action = self.genome.action_first

    @property
    def action_first(self) -> Action:
        return self.genome.action_first

    @property
    def has_partner(self) -> bool:
        return self.partner is not None

    def adopt(self, strategy_id: int, genome: Genome) -> None:
        """Switch to a new strategy and restart from its first move."""
        self.strategy_id = strategy_id
        self.genome = genome
        self.next_action = genome.action_first
