"""Tests for the agent arena and partner relation."""

from __future__ import annotations

import random

import pytest

from leave_dilemma.core.action import Action
from leave_dilemma.core.exceptions import InvalidGenomeName, PopulationInvariantError
from leave_dilemma.genome.space import StrategySpace
from leave_dilemma.population.aggregates import StrategyAggregates
from leave_dilemma.population.population import Population


def _paired(population: Population) -> Population:
    agents = population.agents
    for a, b in zip(agents[0::2], agents[1::2], strict=False):
        population.pair(a, b)
    return population


class TestInitialize:
    def test_fixed_strategy(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng, initial_strategy="D-C-L-C-C")
        population.initialize(6)
        assert len(population) == 6
        for agent in population:
            assert agent.strategy_id == 99
            assert agent.genome.name == "D-C-L-C-C"
            assert agent.partner is None
            assert agent.next_action is Action.DEFECT
            assert agent.payoff is None
            assert not agent.is_new_partnership

    def test_alias_strategy(
        self, classic_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(classic_space, rng, initial_strategy="always_defect")
        population.initialize(3)
        assert {a.strategy_id for a in population} == {31}

    def test_random_strategy_stays_in_alphabet(
        self, classic_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(classic_space, rng)
        population.initialize(100)
        assert len({a.strategy_id for a in population}) > 1
        for agent in population:
            assert agent.strategy_id in classic_space
            assert not agent.genome.uses_leave
            assert agent.next_action is agent.action_first

    def test_invalid_initial_strategy(
        self, classic_space: StrategySpace, rng: random.Random
    ) -> None:
        with pytest.raises(InvalidGenomeName):
            Population(classic_space, rng, initial_strategy="C-L-L-L-L")

    def test_reinitialize_replaces_agents(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(4)
        population.initialize(2)
        assert len(population) == 2
        assert [a.agent_id for a in population] == [0, 1]


class TestPartnerships:
    def test_pair_is_symmetric(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(2)
        a, b = population.agents
        population.pair(a, b)
        assert a.partner == b.agent_id
        assert b.partner == a.agent_id
        assert population.partner_of(a) is b
        assert population.partner_of(b) is a
        assert a.is_new_partnership and b.is_new_partnership
        population.check_invariants()

    def test_cannot_pair_self(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(1)
        agent = population[0]
        with pytest.raises(PopulationInvariantError, match="itself"):
            population.pair(agent, agent)

    def test_cannot_pair_partnered(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(4)
        _paired(population)
        with pytest.raises(PopulationInvariantError, match="unpartnered"):
            population.pair(population[0], population[2])

    def test_break_resets_both_partners(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng, initial_strategy="D-C-L-C-C")
        population.initialize(2)
        a, b = population.agents
        population.pair(a, b)
        a.next_action = Action.LEAVE
        b.next_action = Action.COOPERATE

        former = population.break_partnership(a)

        assert former is b
        for agent in (a, b):
            assert agent.partner is None
            assert agent.next_action == agent.action_first
        population.check_invariants()

    def test_break_unpartnered_is_noop(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(1)
        assert population.break_partnership(population[0]) is None

    def test_unpartnered(self, leave_space: StrategySpace, rng: random.Random) -> None:
        population = Population(leave_space, rng)
        population.initialize(5)
        _paired(population)
        assert [a.agent_id for a in population.unpartnered()] == [4]

    def test_invariant_detects_asymmetry(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(3)
        population[0].partner = 1
        with pytest.raises(PopulationInvariantError, match="not symmetric"):
            population.check_invariants()

    def test_invariant_detects_self_partner(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(1)
        population[0].partner = 0
        with pytest.raises(PopulationInvariantError, match="own partner"):
            population.check_invariants()


class TestResize:
    def test_grow_uses_seeding_rule(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng, initial_strategy="always_leave")
        population.initialize(3)
        added, removed = population.resize_to(7)
        assert (added, removed) == (4, 0)
        assert len(population) == 7
        assert {a.genome.name for a in population} == {"D-L-L-L-L"}

    def test_new_agents_get_fresh_ids(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(4)
        population.resize_to(2)
        population.resize_to(4)
        ids = [a.agent_id for a in population]
        assert len(set(ids)) == 4
        assert max(ids) >= 4

    def test_shrink_removes_exact_excess(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(10)
        _paired(population)
        added, removed = population.resize_to(3)
        assert (added, removed) == (0, 7)
        assert len(population) == 3
        population.check_invariants()

    def test_shrink_breaks_partnerships_of_removed(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(20)
        _paired(population)
        population.resize_to(11)
        remaining = {a.agent_id for a in population}
        for agent in population:
            if agent.partner is not None:
                assert agent.partner in remaining
        # An odd survivor count leaves at least one agent alone.
        assert population.unpartnered()

    def test_same_size_is_noop(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng)
        population.initialize(4)
        assert population.resize_to(4) == (0, 0)

    def test_seeding_rule_can_change(
        self, leave_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(leave_space, rng, initial_strategy="always_defect")
        population.initialize(2)
        population.set_initial_strategy("always_cooperate")
        population.resize_to(4)
        names = [a.genome.name for a in population]
        assert names == ["D-D-D-D-D", "D-D-D-D-D", "C-C-C-C-C", "C-C-C-C-C"]


class TestStrategyAggregates:
    def test_sums_payoff_and_counts(
        self, classic_space: StrategySpace, rng: random.Random
    ) -> None:
        population = Population(classic_space, rng, initial_strategy="always_defect")
        population.initialize(4)
        for agent, payoff in zip(population, [1.0, 2.0, None, 4.0], strict=True):
            agent.payoff = payoff
        cooperator = population[3]
        cooperator.adopt(0, classic_space.genome(0))

        aggregates = StrategyAggregates.from_agents(population, classic_space.size)

        assert aggregates.payoff[31] == 3.0
        assert aggregates.payoff[0] == 4.0
        assert aggregates.count[31] == 3
        assert aggregates.count[0] == 1
        assert aggregates.population_size == 4
        assert len(aggregates.payoff) == 32
        assert aggregates.payoff[5] == 0.0
