"""
Action registry structure.

This package turns nested action registries into flat, path-addressable maps.
"""

from chatcommand.structure.flatten import (
    ActionEntry,
    FlatActionMap,
    collect_entries,
    flatten_actions,
)

__all__ = [
    "ActionEntry",
    "FlatActionMap",
    "collect_entries",
    "flatten_actions",
]
