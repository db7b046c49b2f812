"""Leave-dilemma exceptions."""


class LeaveDilemmaError(Exception):
    """Base exception for all leave-dilemma errors."""


class InvalidGenomeName(LeaveDilemmaError, ValueError):
    """Raised when a textual genome cannot be parsed.

    A valid name is five hyphen-joined symbols from the active
    alphabet, e.g. ``D-C-L-C-C``.
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid genome name {name!r}: {reason}")


# Strategy lookups and genome parsing fail the same way.
InvalidStrategyName = InvalidGenomeName


class InvalidStrategyId(LeaveDilemmaError, ValueError):
    """Raised when a strategy id is outside the active strategy space."""

    def __init__(self, strategy_id: int, num_strategies: int) -> None:
        self.strategy_id = strategy_id
        self.num_strategies = num_strategies
        super().__init__(
            f"Strategy id {strategy_id} out of range [0, {num_strategies})"
        )


class DegenerateWeightedSample(LeaveDilemmaError):
    """Raised when fitness weights cannot define a distribution."""


class PopulationInvariantError(LeaveDilemmaError):
    """Raised when a population invariant is violated.

    Indicates a bug rather than a recoverable condition.
    """
