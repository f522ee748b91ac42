"""
Core chatcommand components.

This package provides the type definitions shared by the flattener, the
tokenizer and the executor.
"""

from chatcommand.core.types import (
    ActionKind,
    ActionRegistry,
    Lazy,
    classify_action,
    computed,
    iter_container,
)

__all__ = [
    "ActionKind",
    "ActionRegistry",
    "Lazy",
    "classify_action",
    "computed",
    "iter_container",
]
