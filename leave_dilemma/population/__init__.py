"""Agents and the population arena."""

from leave_dilemma.population.agent import Agent
from leave_dilemma.population.aggregates import StrategyAggregates
from leave_dilemma.population.population import Population

__all__ = [
    "Agent",
    "Population",
    "StrategyAggregates",
]
