"""CLI subcommands."""

from leave_dilemma.cli.commands.run import run_command
from leave_dilemma.cli.commands.strategies import (
    decode_command,
    encode_command,
    strategies_command,
)

__all__ = [
    "decode_command",
    "encode_command",
    "run_command",
    "strategies_command",
]
