"""Core types: actions, configuration, settings, errors and logging."""

from leave_dilemma.core.action import Action
from leave_dilemma.core.exceptions import LeaveDilemmaError

__all__ = [
    "Action",
    "LeaveDilemmaError",
]
