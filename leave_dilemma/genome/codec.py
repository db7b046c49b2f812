"""Genome codec: strategy genomes to integer ids and back.

A strategy id is a mixed-radix number. The most significant digit is
the first move (radix 2); the remaining four digits are the responses
to the previous outcomes CC, CD, DC and DD (radix 3 with the leave
option, 2 without). Digits follow ``Action.digit``: C=0, D=1, L=2.
"""

from __future__ import annotations

from dataclasses import dataclass

from leave_dilemma.core.action import FIRST_MOVES, Action, response_alphabet
from leave_dilemma.core.exceptions import InvalidGenomeName, InvalidStrategyId

NUM_GENES = 5
NAME_SEPARATOR = "-"

# Gene positions, most significant first.
GENE_NAMES: tuple[str, ...] = ("action_first", "if_cc", "if_cd", "if_dc", "if_dd")
FIRST_GENE = 0


@dataclass(frozen=True)
class Genome:
    """Five-gene strategy descriptor.

    Attributes:
        action_first: Action played in the first round of a partnership.
        if_cc: Response after own C, partner C.
        if_cd: Response after own C, partner D.
        if_dc: Response after own D, partner C.
        if_dd: Response after own D, partner D.
    """

    action_first: Action
    if_cc: Action
    if_cd: Action
    if_dc: Action
    if_dd: Action

    def __post_init__(self) -> None:
        if self.action_first not in FIRST_MOVES:
            raise ValueError(f"action_first must be C or D, got {self.action_first}")

    @classmethod
    def from_genes(cls, genes: tuple[Action, ...] | list[Action]) -> Genome:
        if len(genes) != NUM_GENES:
            raise ValueError(f"Expected {NUM_GENES} genes, got {len(genes)}")
        return cls(*genes)

    @property
    def genes(self) -> tuple[Action, ...]:
        return (self.action_first, self.if_cc, self.if_cd, self.if_dc, self.if_dd)

    @property
    def name(self) -> str:
        """Hyphen-joined textual form, e.g. ``C-C-D-C-D``."""
        return NAME_SEPARATOR.join(str(g) for g in self.genes)

    @property
    def uses_leave(self) -> bool:
        return Action.LEAVE in self.genes

    def response(self, own: Action, other: Action) -> Action:
        """Next intended action after a round with the given outcome."""
        if own is Action.COOPERATE:
            return self.if_cc if other is Action.COOPERATE else self.if_cd
        return self.if_dc if other is Action.COOPERATE else self.if_dd

    def with_gene(self, index: int, value: Action) -> Genome:
        """Return a copy with the gene at ``index`` replaced."""
        genes = list(self.genes)
        genes[index] = value
        return Genome.from_genes(genes)

    def __str__(self) -> str:
        return self.name


class GenomeCodec:
    """Bijection between genomes and strategy ids for one alphabet.

    Args:
        leave_option: Whether conditional genes may take ``L``.
    """

    def __init__(self, leave_option: bool = True) -> None:
        self.leave_option = leave_option
        self.alphabet = response_alphabet(leave_option)
        self.radix = len(self.alphabet)
        self.num_strategies = len(FIRST_MOVES) * self.radix ** (NUM_GENES - 1)

    def encode(self, genome: Genome) -> int:
        """Compose a genome into its strategy id, most significant first.

        Raises:
            InvalidGenomeName: If the genome uses a symbol outside the
                active alphabet.
        """
        if genome.uses_leave and not self.leave_option:
            raise InvalidGenomeName(genome.name, "L requires the leave option")
        value = genome.action_first.digit
        for gene in genome.genes[1:]:
            value = value * self.radix + gene.digit
        return value

    def decode(self, strategy_id: int) -> Genome:
        """Recover the genome for a strategy id.

        Raises:
            InvalidStrategyId: If the id is outside ``[0, num_strategies)``.
        """
        if not 0 <= strategy_id < self.num_strategies:
            raise InvalidStrategyId(strategy_id, self.num_strategies)
        responses: list[Action] = []
        value = strategy_id
        for _ in range(NUM_GENES - 1):
            value, digit = divmod(value, self.radix)
            responses.insert(0, Action.from_digit(digit))
        first = Action.from_digit(value % len(FIRST_MOVES))
        return Genome(first, *responses)

    def parse(self, name: str) -> Genome:
        """Parse a textual genome such as ``D-C-L-C-C``.

        Raises:
            InvalidGenomeName: On a wrong gene count, an unknown symbol,
                ``L`` as first move, or ``L`` without the leave option.
        """
        tokens = name.split(NAME_SEPARATOR)
        if len(tokens) != NUM_GENES:
            raise InvalidGenomeName(
                name, f"expected {NUM_GENES} genes, got {len(tokens)}"
            )
        genes: list[Action] = []
        for position, token in enumerate(tokens):
            try:
                gene = Action(token)
            except ValueError:
                raise InvalidGenomeName(name, f"unknown symbol {token!r}") from None
            allowed = FIRST_MOVES if position == FIRST_GENE else self.alphabet
            if gene not in allowed:
                if gene is Action.LEAVE and position != FIRST_GENE:
                    reason = "L requires the leave option"
                else:
                    reason = f"{GENE_NAMES[position]} cannot be {gene}"
                raise InvalidGenomeName(name, reason)
            genes.append(gene)
        return Genome.from_genes(genes)

    def name_to_id(self, name: str) -> int:
        return self.encode(self.parse(name))

    def id_to_name(self, strategy_id: int) -> str:
        return self.decode(strategy_id).name
