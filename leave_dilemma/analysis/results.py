"""Time series of a simulation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from leave_dilemma.analysis.statistics import StepStatistics
from leave_dilemma.genome.space import StrategySpace

# Scalar per-step series available through ``timeseries``.
SCALAR_SERIES = (
    "outcome_cc",
    "outcome_cd",
    "outcome_dd",
    "mean_payoff",
    "mean_payoff_new",
    "unpartnered_fraction",
    "first_cooperate",
    "population_size",
    "pairs_played",
)


@dataclass
class SimulationResult:
    """Full result of a simulation run.

    Attributes:
        config: The run configuration as a dictionary.
        snapshots: Statistics of every recorded step, in order.
    """

    config: dict[str, Any]
    snapshots: list[StepStatistics] = field(default_factory=list)

    @property
    def final(self) -> StepStatistics | None:
        return self.snapshots[-1] if self.snapshots else None

    def timeseries(self, name: str) -> list[Any]:
        """One scalar statistic across all recorded steps.

        Raises:
            KeyError: If ``name`` is not a known scalar series.
        """
        if name not in SCALAR_SERIES:
            available = ", ".join(SCALAR_SERIES)
            raise KeyError(f"Unknown series '{name}'. Available: {available}")
        return [getattr(snap, name) for snap in self.snapshots]

    def context_timeseries(self, context: str, response: str) -> list[float]:
        """Share giving ``response`` in ``context`` across all steps.

        Args:
            context: One of CC, CD, DC, DD.
            response: One of cooperate, defect, leave, stay.
        """
        return [getattr(snap.contexts[context], response) for snap in self.snapshots]

    def final_distribution(
        self,
        space: StrategySpace,
        top: int = 10,
    ) -> dict[str, int]:
        """Most held strategies at the end of the run, by genome name."""
        if self.final is None:
            return {}
        return {
            space.id_to_name(sid): count for sid, count in self.final.top_strategies(top)
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dictionary."""
        return {
            "config": dict(self.config),
            "snapshots": [s.to_dict() for s in self.snapshots],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationResult:
        """Deserialize from dictionary."""
        return cls(
            config=data["config"],
            snapshots=[StepStatistics.from_dict(s) for s in data["snapshots"]],
        )
