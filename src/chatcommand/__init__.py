"""
chatcommand - Extract and execute namespaced commands embedded in chat text

Finds tokens such as ``bot.math.add(1, 2)`` in arbitrary prose and dispatches
them against a nested registry of actions.
"""

from importlib.metadata import version

from chatcommand.config import CommandConfig
from chatcommand.core.types import ActionKind, Lazy, computed
from chatcommand.handler import CommandHandler, create_command_handler
from chatcommand.structure.flatten import FlatActionMap, flatten_actions

__version__ = version("chatcommand")

__all__ = [
    "__version__",
    "ActionKind",
    "CommandConfig",
    "CommandHandler",
    "FlatActionMap",
    "Lazy",
    "computed",
    "create_command_handler",
    "flatten_actions",
]
