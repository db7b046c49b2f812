"""Actions and gene alphabets."""

from __future__ import annotations

from enum import StrEnum


class Action(StrEnum):
    """An action or a gene value.

    The string value is the single-letter symbol used in genome
    names. ``LEAVE`` is only ever a response, never a first move.
    """

    COOPERATE = "C"
    DEFECT = "D"
    LEAVE = "L"

    @property
    def digit(self) -> int:
        """Positional digit of this symbol in a strategy id."""
        return _DIGITS[self]

    @classmethod
    def from_digit(cls, digit: int) -> Action:
        return _ACTIONS[digit]

    def flipped(self) -> Action:
        """Swap cooperate and defect (trembling hand).

        Raises:
            ValueError: If called on ``LEAVE``, which is never played.
        """
        if self is Action.COOPERATE:
            return Action.DEFECT
        if self is Action.DEFECT:
            return Action.COOPERATE
        raise ValueError("LEAVE cannot be played, so it cannot be flipped")


_ACTIONS: tuple[Action, ...] = (Action.COOPERATE, Action.DEFECT, Action.LEAVE)
_DIGITS: dict[Action, int] = {a: i for i, a in enumerate(_ACTIONS)}

# First moves are always cooperate or defect.
FIRST_MOVES: tuple[Action, ...] = (Action.COOPERATE, Action.DEFECT)


def response_alphabet(leave_option: bool) -> tuple[Action, ...]:
    """Symbols allowed in the four conditional genes."""
    if leave_option:
        return _ACTIONS
    return FIRST_MOVES
