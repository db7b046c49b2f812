"""Shared fixtures for leave-dilemma tests."""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from leave_dilemma.core.config import SimulationConfig
from leave_dilemma.genome.space import StrategySpace
from leave_dilemma.population.agent import Agent
from leave_dilemma.population.population import Population


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def leave_space() -> StrategySpace:
    return StrategySpace(leave_option=True)


@pytest.fixture
def classic_space() -> StrategySpace:
    return StrategySpace(leave_option=False)


@pytest.fixture
def config() -> SimulationConfig:
    return SimulationConfig(population_size=10, seed=42)


PopulationFactory = Callable[[StrategySpace, list[str]], Population]


def set_strategy(space: StrategySpace, agent: Agent, name: str) -> None:
    strategy_id = space.resolve(name)
    agent.adopt(strategy_id, space.genome(strategy_id))


@pytest.fixture
def make_population(rng: random.Random) -> PopulationFactory:
    """Build a population holding the given strategies, one agent each."""

    def _make(space: StrategySpace, strategies: list[str]) -> Population:
        population = Population(space, rng, initial_strategy=strategies[0])
        population.initialize(len(strategies))
        for agent, name in zip(population, strategies, strict=True):
            set_strategy(space, agent, name)
        return population

    return _make
