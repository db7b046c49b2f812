"""Tests for SimulationConfig validation and derived values."""

from __future__ import annotations

import math

import pytest

from leave_dilemma.core.action import Action
from leave_dilemma.core.config import RANDOM_STRATEGY, SimulationConfig
from leave_dilemma.core.exceptions import InvalidGenomeName


class TestSimulationConfig:
    def test_defaults(self) -> None:
        c = SimulationConfig()
        assert c.population_size == 100
        assert c.cc_payoff == 3.0
        assert c.cd_payoff == 0.0
        assert c.dc_payoff == 5.0
        assert c.dd_payoff == 1.0
        assert c.leave_option is True
        assert c.initial_strategy == RANDOM_STRATEGY
        assert c.seed is None

    def test_frozen(self) -> None:
        c = SimulationConfig()
        with pytest.raises(AttributeError):
            c.population_size = 10  # type: ignore[misc]

    def test_population_too_small(self) -> None:
        with pytest.raises(ValueError, match="population_size"):
            SimulationConfig(population_size=1)

    @pytest.mark.parametrize(
        "field_name", ["cc_payoff", "cd_payoff", "dc_payoff", "dd_payoff"]
    )
    def test_negative_payoff(self, field_name: str) -> None:
        with pytest.raises(ValueError, match=field_name):
            SimulationConfig(**{field_name: -1.0})

    def test_non_finite_payoff(self) -> None:
        with pytest.raises(ValueError, match="cc_payoff"):
            SimulationConfig(cc_payoff=math.inf)

    @pytest.mark.parametrize(
        "field_name", ["action_error", "prob_revision", "prob_experimentation"]
    )
    @pytest.mark.parametrize("value", [-0.1, 1.5])
    def test_probability_range(self, field_name: str, value: float) -> None:
        with pytest.raises(ValueError, match=field_name):
            SimulationConfig(**{field_name: value})

    def test_probability_bounds_allowed(self) -> None:
        c = SimulationConfig(action_error=1.0, prob_revision=0.0)
        assert c.action_error == 1.0
        assert c.prob_revision == 0.0

    def test_expected_interactions_below_one(self) -> None:
        with pytest.raises(ValueError, match="expected_interactions"):
            SimulationConfig(expected_interactions=0.5)

    def test_alphabet_radix(self) -> None:
        assert SimulationConfig(leave_option=True).alphabet_radix == 3
        assert SimulationConfig(leave_option=False).alphabet_radix == 2


class TestInitialStrategy:
    def test_literal_name(self) -> None:
        c = SimulationConfig(initial_strategy="D-C-L-C-C")
        assert c.initial_strategy == "D-C-L-C-C"

    def test_alias(self) -> None:
        c = SimulationConfig(initial_strategy="tit_for_tat", leave_option=False)
        assert c.initial_strategy == "tit_for_tat"

    def test_invalid_name_fails_setup(self) -> None:
        with pytest.raises(InvalidGenomeName, match="expected 5 genes"):
            SimulationConfig(initial_strategy="C-C-C")

    def test_leave_name_without_option(self) -> None:
        with pytest.raises(InvalidGenomeName, match="leave option"):
            SimulationConfig(initial_strategy="D-C-L-C-C", leave_option=False)


class TestDerivedValues:
    def test_exogenous_break_prob(self) -> None:
        c = SimulationConfig(expected_interactions=10.0)
        assert c.exogenous_break_prob == pytest.approx(1 - math.sqrt(0.9))

    @pytest.mark.parametrize("m", [1.0, 2.0, 10.0, 50.0])
    def test_pair_dissolution_matches_mean_duration(self, m: float) -> None:
        p = SimulationConfig(expected_interactions=m).exogenous_break_prob
        assert 1 - (1 - p) ** 2 == pytest.approx(1 / m)

    def test_one_interaction_always_breaks(self) -> None:
        assert SimulationConfig(expected_interactions=1.0).exogenous_break_prob == 1.0

    def test_payoff_lookup(self) -> None:
        c = SimulationConfig(cc_payoff=3, cd_payoff=0, dc_payoff=5, dd_payoff=1)
        C, D = Action.COOPERATE, Action.DEFECT
        assert c.payoff(C, C) == 3
        assert c.payoff(C, D) == 0
        assert c.payoff(D, C) == 5
        assert c.payoff(D, D) == 1

    def test_with_changes_validates(self) -> None:
        c = SimulationConfig()
        assert c.with_changes(population_size=20).population_size == 20
        with pytest.raises(ValueError, match="population_size"):
            c.with_changes(population_size=0)

    def test_to_dict(self) -> None:
        data = SimulationConfig(seed=7).to_dict()
        assert data["seed"] == 7
        assert data["leave_option"] is True
        assert SimulationConfig(**data) == SimulationConfig(seed=7)
