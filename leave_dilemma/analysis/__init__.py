"""Statistics and run results."""

from leave_dilemma.analysis.results import SimulationResult
from leave_dilemma.analysis.statistics import StepStatistics, collect_statistics

__all__ = [
    "SimulationResult",
    "StepStatistics",
    "collect_statistics",
]
