"""Tests for SimulationResult."""

from __future__ import annotations

import json

import pytest

from leave_dilemma.analysis.results import SCALAR_SERIES, SimulationResult
from leave_dilemma.analysis.statistics import ContextDistribution, StepStatistics
from leave_dilemma.core.config import SimulationConfig
from leave_dilemma.genome.space import StrategySpace


def _snapshot(tick: int, cc: float, leave: float) -> StepStatistics:
    counts = [0] * 32
    counts[0] = 2
    counts[31] = 1
    return StepStatistics(
        tick=tick,
        population_size=3,
        pairs_played=1,
        outcome_cc=cc,
        outcome_dd=1.0 - cc,
        contexts={"CD": ContextDistribution(0.5, 0.25, leave)},
        first_cooperate_count=2,
        strategy_counts=counts,
        mean_payoff=2.0,
    )


@pytest.fixture
def result() -> SimulationResult:
    return SimulationResult(
        config=SimulationConfig(leave_option=False).to_dict(),
        snapshots=[_snapshot(1, 0.0, 0.25), _snapshot(2, 0.5, 0.0)],
    )


class TestSimulationResult:
    def test_final(self, result: SimulationResult) -> None:
        assert result.final is not None
        assert result.final.tick == 2

    def test_final_empty(self) -> None:
        empty = SimulationResult(config={})
        assert empty.final is None
        assert empty.final_distribution(StrategySpace(False)) == {}

    def test_timeseries(self, result: SimulationResult) -> None:
        assert result.timeseries("outcome_cc") == [0.0, 0.5]
        assert result.timeseries("first_cooperate") == [
            pytest.approx(2 / 3),
            pytest.approx(2 / 3),
        ]
        assert result.timeseries("mean_payoff_new") == [None, None]

    def test_every_scalar_series_available(self, result: SimulationResult) -> None:
        for name in SCALAR_SERIES:
            assert len(result.timeseries(name)) == 2

    def test_unknown_series(self, result: SimulationResult) -> None:
        with pytest.raises(KeyError, match="Unknown series"):
            result.timeseries("contexts")

    def test_context_timeseries(self, result: SimulationResult) -> None:
        assert result.context_timeseries("CD", "leave") == [0.25, 0.0]
        assert result.context_timeseries("CD", "stay") == [0.75, 0.75]

    def test_final_distribution(
        self, result: SimulationResult, classic_space: StrategySpace
    ) -> None:
        assert result.final_distribution(classic_space) == {
            "C-C-C-C-C": 2,
            "D-D-D-D-D": 1,
        }
        assert result.final_distribution(classic_space, top=1) == {"C-C-C-C-C": 2}

    def test_json_round_trip(self, result: SimulationResult) -> None:
        data = json.loads(json.dumps(result.to_dict()))
        restored = SimulationResult.from_dict(data)
        assert restored == result
        assert restored.config["leave_option"] is False
