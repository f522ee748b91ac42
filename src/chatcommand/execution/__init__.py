"""
Command execution.

This package resolves parsed command tokens against a flattened action map
and invokes the matching actions.
"""

from chatcommand.execution.executor import (
    CommandExecutor,
    split_arguments,
    split_command,
)

__all__ = [
    "CommandExecutor",
    "split_arguments",
    "split_command",
]
