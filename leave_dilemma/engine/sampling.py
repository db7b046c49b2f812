"""Fitness-proportional sampling with replacement."""

from __future__ import annotations

import random
from collections.abc import Sequence

import numpy as np

from leave_dilemma.core.exceptions import DegenerateWeightedSample
from leave_dilemma.core.logging import get_logger

logger = get_logger(__name__)


def weighted_sample(
    weights: Sequence[float] | np.ndarray,
    k: int,
    rng: random.Random,
) -> list[int]:
    """Draw ``k`` indices with probability proportional to weight.

    Uses a cumulative-weight binary search per draw, so zero-weight
    indices are never drawn. When every weight is zero the draw falls
    back to uniform over all indices.

    Args:
        weights: Non-negative weight per index.
        k: Number of draws.
        rng: Uniform random source.

    Returns:
        List of ``k`` drawn indices.

    Raises:
        DegenerateWeightedSample: If there are no weights, or any
            weight is negative or not finite.
    """
    w = np.asarray(weights, dtype=float)
    if k <= 0:
        return []
    if w.size == 0:
        raise DegenerateWeightedSample("Cannot sample from an empty weight vector")
    if not np.all(np.isfinite(w)):
        raise DegenerateWeightedSample("Weights must be finite")
    if np.any(w < 0):
        raise DegenerateWeightedSample("Weights must be non-negative")

    total = float(w.sum())
    if total == 0.0:
        logger.warning("weighted_sample_fallback", draws=k, candidates=int(w.size))
        return [rng.randrange(w.size) for _ in range(k)]

    cumulative = np.cumsum(w) / total
    # Guard against rounding past the last positive weight.
    last = int(np.flatnonzero(w)[-1])
    drawn: list[int] = []
    for _ in range(k):
        idx = int(np.searchsorted(cumulative, rng.random(), side="right"))
        drawn.append(min(idx, last))
    return drawn
