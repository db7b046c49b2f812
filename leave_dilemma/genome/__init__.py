"""Strategy genomes and the strategy space."""

from leave_dilemma.genome.codec import Genome, GenomeCodec
from leave_dilemma.genome.space import StrategyAliases, StrategySpace

__all__ = [
    "Genome",
    "GenomeCodec",
    "StrategyAliases",
    "StrategySpace",
]
