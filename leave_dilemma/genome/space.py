"""Strategy space enumeration and named-strategy lookup."""

from __future__ import annotations

import random
from collections.abc import Iterator

from leave_dilemma.core.action import FIRST_MOVES
from leave_dilemma.core.exceptions import InvalidStrategyName
from leave_dilemma.genome.codec import NUM_GENES, Genome, GenomeCodec


class StrategyAliases:
    """Registry mapping well-known strategy aliases to genome names.

    Lets configuration refer to ``tit_for_tat`` instead of
    ``C-C-D-C-D``.
    """

    _registry: dict[str, str] = {}

    @classmethod
    def register(cls, alias: str, genome_name: str) -> None:
        """Register a genome name under an alias.

        Raises:
            ValueError: If the alias is already registered.
        """
        if alias in cls._registry:
            raise ValueError(f"Strategy alias '{alias}' is already registered")
        cls._registry[alias] = genome_name

    @classmethod
    def get(cls, alias: str) -> str:
        """Look up the genome name for an alias.

        Raises:
            KeyError: If the alias is not registered.
        """
        if alias not in cls._registry:
            available = ", ".join(sorted(cls._registry))
            raise KeyError(f"Unknown strategy alias '{alias}'. Available: {available}")
        return cls._registry[alias]

    @classmethod
    def list_aliases(cls) -> list[str]:
        return sorted(cls._registry)

    @classmethod
    def clear(cls) -> None:
        """Remove all registered aliases (for testing)."""
        cls._registry.clear()


class StrategySpace:
    """All strategy ids of one alphabet, with name lookup.

    There are ``2 * 3**4 = 162`` strategies with the leave option and
    ``2**5 = 32`` without.

    Args:
        leave_option: Whether conditional genes may take ``L``.
    """

    def __init__(self, leave_option: bool = True) -> None:
        self.codec = GenomeCodec(leave_option)

    @property
    def leave_option(self) -> bool:
        return self.codec.leave_option

    @property
    def radix(self) -> int:
        return self.codec.radix

    @property
    def size(self) -> int:
        return self.codec.num_strategies

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.size))

    def __contains__(self, strategy_id: object) -> bool:
        return isinstance(strategy_id, int) and 0 <= strategy_id < self.size

    def ids(self) -> range:
        return range(self.size)

    def genome(self, strategy_id: int) -> Genome:
        return self.codec.decode(strategy_id)

    def strategy_id(self, genome: Genome) -> int:
        return self.codec.encode(genome)

    def name_to_id(self, name: str) -> int:
        return self.codec.name_to_id(name)

    def id_to_name(self, strategy_id: int) -> str:
        return self.codec.id_to_name(strategy_id)

    def names(self) -> list[str]:
        """Genome names of every strategy, indexed by id."""
        return [self.id_to_name(i) for i in self.ids()]

    def resolve(self, token: str) -> int:
        """Resolve a registered alias or a literal genome name to an id.

        Raises:
            InvalidStrategyName: If the token is neither a known alias
                nor a genome valid in this alphabet.
        """
        try:
            name = StrategyAliases.get(token)
        except KeyError:
            name = token
        return self.name_to_id(name)

    def aliases(self) -> dict[str, int]:
        """Registered aliases that are valid in this alphabet."""
        available: dict[str, int] = {}
        for alias in StrategyAliases.list_aliases():
            try:
                available[alias] = self.resolve(alias)
            except InvalidStrategyName:
                continue
        return available

    def random_genome(self, rng: random.Random) -> Genome:
        """Draw every gene independently and uniformly."""
        first = rng.choice(FIRST_MOVES)
        responses = [rng.choice(self.codec.alphabet) for _ in range(NUM_GENES - 1)]
        return Genome(first, *responses)

    def __repr__(self) -> str:
        return f"StrategySpace(leave_option={self.leave_option}, size={self.size})"
