"""
Command resolution and execution.

Given a token such as ``math.add(1, 2)``, the executor separates the path
from the argument text, looks the path up in a FlatActionMap and calls the
action with the split arguments. Unknown paths resolve to None; exceptions
raised by actions are not caught.

Awaitable results are returned as-is. `execute_all` never awaits, so a batch
of async actions comes back as a list of pending awaitables that the caller
gathers however it sees fit.
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

from chatcommand.config import DEFAULT_ARGUMENT_DELIMITER
from chatcommand.core.types import ActionKind
from chatcommand.structure.flatten import FlatActionMap

logger = logging.getLogger(__name__)


def split_command(token: str) -> tuple[str, str | None]:
    """
    Split a command token into its path and argument text.

    The path is everything before the first ``(``. The argument text runs from
    that ``(`` to the last ``)`` after it, without balancing, so inner
    parentheses stay part of the arguments. A missing ``)`` extends the
    arguments to the end of the token.

    Params:
        token: Command token as produced by the tokenizer

    Returns:
        (path, args_text) where args_text is None when the token has no ``(``

    Examples:
        "help" -> ("help", None)
        "add(1, 2)" -> ("add", "1, 2")
        "say(f(x))" -> ("say", "f(x)")
        "ping()" -> ("ping", "")
    """
    path, paren, rest = token.partition("(")
    if not paren:
        return token, None
    closing = rest.rfind(")")
    return path, rest if closing == -1 else rest[:closing]


def split_arguments(
    args_text: str, delimiter: str | re.Pattern[str] = DEFAULT_ARGUMENT_DELIMITER
) -> list[str]:
    """
    Split argument text into positional arguments.

    An empty argument span yields a single empty string, so ``ping()`` calls
    ``ping("")``.

    Params:
        args_text: Text between the call parentheses
        delimiter: Literal separator or compiled pattern

    Returns:
        Argument strings in order
    """
    if isinstance(delimiter, re.Pattern):
        return delimiter.split(args_text)
    return args_text.split(delimiter)


class CommandExecutor:
    """Resolves command tokens against a flattened action map."""

    def __init__(
        self,
        actions: FlatActionMap,
        argument_delimiter: str | re.Pattern[str] = DEFAULT_ARGUMENT_DELIMITER,
    ):
        self.actions = actions
        self.argument_delimiter = argument_delimiter

    def execute(self, token: str) -> Any:
        """
        Resolve and run a single command token.

        Params:
            token: Command token without the namespace prefix

        Returns:
            The action result, the stored value for non-callable entries, or
            None if the path is unknown
        """
        path, args_text = split_command(token)
        entry = self.actions.entry(path)
        if entry is None:
            logger.debug("No action registered at '%s'", path)
            return None

        value = entry.resolve()
        # A lazy entry may compute a callable; dispatch on what it produced
        if entry.kind is ActionKind.LAZY and callable(value):
            kind = ActionKind.INVOCABLE
        else:
            kind = entry.kind

        if kind is not ActionKind.INVOCABLE:
            return value
        if args_text is None:
            return value()
        return value(*split_arguments(args_text, self.argument_delimiter))

    def execute_all(self, tokens: Iterable[str]) -> list[Any]:
        """Execute every token in order; the result list matches `tokens` in length."""
        return [self.execute(token) for token in tokens]
