"""
Flattening of nested action registries.

A registry such as ``{"math": {"add": add, "pi": 3.14}}`` becomes a single
level map ``{"math.add": add, "math.pi": 3.14}`` keyed by delimiter-joined
paths. The executor looks commands up in this map directly.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from attrs import frozen

from chatcommand.core.types import (
    ActionKind,
    ActionRegistry,
    classify_action,
    iter_container,
)
from chatcommand.exceptions import RegistryError


@frozen
class ActionEntry:
    """A leaf stored at a flattened path, tagged with its kind."""

    kind: ActionKind
    value: Any

    def resolve(self) -> Any:
        """Return the leaf value, computing it if it is lazy."""
        if self.kind is ActionKind.LAZY:
            return self.value.realize()
        return self.value


class FlatActionMap(Mapping):
    """Read-only mapping from action path to leaf.

    Reading a path holding a `Lazy` calls its getter on every read. Use `raw`
    to get the stored leaf without evaluating it.
    """

    def __init__(self, entries: dict[str, ActionEntry], delimiter: str = "."):
        self._entries = MappingProxyType(dict(entries))
        self.delimiter = delimiter

    def __getitem__(self, path: str) -> Any:
        return self._entries[path].resolve()

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __repr__(self) -> str:
        return f"FlatActionMap({list(self._entries)!r})"

    def entry(self, path: str) -> ActionEntry | None:
        return self._entries.get(path)

    def raw(self, path: str, default: Any = None) -> Any:
        """Return the stored leaf at `path` without realizing lazy values."""
        entry = self._entries.get(path)
        return entry.value if entry is not None else default

    def kind(self, path: str) -> ActionKind | None:
        entry = self._entries.get(path)
        return entry.kind if entry is not None else None


def collect_entries(
    registry: ActionRegistry, delimiter: str, prefix: str = ""
) -> dict[str, ActionEntry]:
    """
    Walk a registry and collect its leaves keyed by prefixed path.

    Containers are descended into with the prefix extended by
    ``key + delimiter``; every other kind is recorded unchanged. Later paths
    overwrite earlier identical ones, since keys are not escaped.

    Params:
        registry: Mapping or SimpleNamespace container
        delimiter: Separator placed between nested keys
        prefix: Path of the container being walked

    Returns:
        Path to ActionEntry mapping in traversal order
    """
    entries: dict[str, ActionEntry] = {}
    for key, value in iter_container(registry):
        path = f"{prefix}{key}"
        kind = classify_action(value)
        if kind is ActionKind.CONTAINER:
            entries.update(collect_entries(value, delimiter, path + delimiter))
        else:
            entries[path] = ActionEntry(kind=kind, value=value)
    return entries


def flatten_actions(
    registry: ActionRegistry, delimiter: str = ".", prefix: str = ""
) -> FlatActionMap:
    """
    Flatten a nested action registry into a FlatActionMap.

    Params:
        registry: Nested mapping (or SimpleNamespace) of actions and values
        delimiter: Separator joining nested keys
        prefix: Optional path prepended to every key

    Returns:
        Immutable FlatActionMap

    Raises:
        RegistryError: If the registry itself is not a container
    """
    if classify_action(registry) is not ActionKind.CONTAINER:
        raise RegistryError(
            f"expected a mapping of actions, got {type(registry).__name__}"
        )
    return FlatActionMap(collect_entries(registry, delimiter, prefix), delimiter)


__all__ = [
    "ActionEntry",
    "FlatActionMap",
    "collect_entries",
    "flatten_actions",
]
