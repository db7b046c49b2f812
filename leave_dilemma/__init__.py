"""Evolution of cooperation in a Prisoner's Dilemma with the option to leave."""

from leave_dilemma.analysis.results import SimulationResult
from leave_dilemma.analysis.statistics import (
    ContextDistribution,
    StepStatistics,
    collect_statistics,
)
from leave_dilemma.core.action import Action
from leave_dilemma.core.config import RANDOM_STRATEGY, SimulationConfig
from leave_dilemma.core.exceptions import (
    DegenerateWeightedSample,
    InvalidGenomeName,
    InvalidStrategyId,
    InvalidStrategyName,
    LeaveDilemmaError,
    PopulationInvariantError,
)
from leave_dilemma.engine.matching import MatchingEngine
from leave_dilemma.engine.revision import RevisionEngine
from leave_dilemma.engine.sampling import weighted_sample
from leave_dilemma.engine.separation import SeparationEngine
from leave_dilemma.genome.codec import Genome, GenomeCodec
from leave_dilemma.genome.space import StrategyAliases, StrategySpace
from leave_dilemma.population.agent import Agent
from leave_dilemma.population.population import Population
from leave_dilemma.simulation import Simulation

__version__ = "0.1.0"

__all__ = [
    "RANDOM_STRATEGY",
    "Action",
    "Agent",
    "ContextDistribution",
    "DegenerateWeightedSample",
    "Genome",
    "GenomeCodec",
    "InvalidGenomeName",
    "InvalidStrategyId",
    "InvalidStrategyName",
    "LeaveDilemmaError",
    "MatchingEngine",
    "Population",
    "PopulationInvariantError",
    "RevisionEngine",
    "SeparationEngine",
    "Simulation",
    "SimulationConfig",
    "SimulationResult",
    "StepStatistics",
    "StrategyAliases",
    "StrategySpace",
    "__version__",
    "collect_statistics",
    "weighted_sample",
]

# Register built-in strategy aliases
StrategyAliases.register("always_cooperate", "C-C-C-C-C")
StrategyAliases.register("always_defect", "D-D-D-D-D")
StrategyAliases.register("tit_for_tat", "C-C-D-C-D")
StrategyAliases.register("pavlov", "C-C-D-D-C")
StrategyAliases.register("grim_trigger", "C-C-D-D-D")
StrategyAliases.register("out_for_tat", "C-C-L-C-L")
StrategyAliases.register("d_out_for_tat", "D-C-L-C-L")
StrategyAliases.register("always_leave", "D-L-L-L-L")
