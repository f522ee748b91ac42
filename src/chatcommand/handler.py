"""
Command handler factory.

`create_command_handler` wires a CommandTokenizer and a CommandExecutor around
one flattened action registry. The returned handler is callable on raw text
and also exposes each stage, so callers can filter parsed commands before
running them:

    handler = create_command_handler("bot", {"math": {"add": add}})
    handler("hi bot.math.add(1, 2)")          # -> [add("1", "2")]
    tokens = [t for t in handler.parse(text) if not t.startswith("admin.")]
    handler.execute_all(tokens)
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from chatcommand.config import DEFAULT_CONFIG, CommandConfig
from chatcommand.core.types import ActionRegistry
from chatcommand.exceptions import ConfigurationError
from chatcommand.execution.executor import CommandExecutor
from chatcommand.parsing.tokenizer import CommandTokenizer
from chatcommand.structure.flatten import FlatActionMap, flatten_actions

logger = logging.getLogger(__name__)


class CommandHandler:
    """Parses namespaced commands out of text and executes them.

    Calling the handler is the same as `parse_and_execute_all`. The stage
    methods are plain bound methods and may be passed around on their own.
    """

    def __init__(
        self,
        namespace: str,
        actions: ActionRegistry,
        config: CommandConfig = DEFAULT_CONFIG,
    ):
        if not isinstance(namespace, str):
            raise ConfigurationError(
                "namespace", f"expected a string, got {type(namespace).__name__}"
            )
        self._namespace = namespace
        self._registry = actions
        self._config = config
        self._actions = flatten_actions(actions, config.delimiter)
        self._tokenizer = CommandTokenizer(config.namespace_prefix(namespace))
        self._executor = CommandExecutor(self._actions, config.argument_delimiter)
        logger.debug(
            "Built command handler for namespace %r with %d action path(s)",
            namespace,
            len(self._actions),
        )

    def __call__(self, text: str) -> list[Any]:
        return self.parse_and_execute_all(text)

    def __repr__(self) -> str:
        return f"CommandHandler(namespace={self._namespace!r}, actions={len(self._actions)})"

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def prefix(self) -> str:
        """Literal prefix a command must carry in text."""
        return self._tokenizer.prefix

    @property
    def config(self) -> CommandConfig:
        return self._config

    @property
    def actions(self) -> FlatActionMap:
        return self._actions

    def parse(self, text: str) -> list[str]:
        """Extract command tokens from text, namespace prefix stripped."""
        return self._tokenizer.parse(text)

    def execute(self, command: str) -> Any:
        """Execute a single command token."""
        return self._executor.execute(command)

    def execute_all(self, commands: Iterable[str]) -> list[Any]:
        """Execute command tokens in order. Awaitable results are not awaited."""
        return self._executor.execute_all(commands)

    def parse_and_execute_all(self, text: str) -> list[Any]:
        return self.execute_all(self.parse(text))

    # camelCase names for callers ported from the JavaScript API
    executeAll = execute_all
    parseAndExecuteAll = parse_and_execute_all

    def with_config(self, **overrides: Any) -> "CommandHandler":
        """Return a new handler with configuration overrides applied."""
        return CommandHandler(
            self._namespace, self._registry, self._config.merged(**overrides)
        )

    def with_actions(self, actions: ActionRegistry) -> "CommandHandler":
        """Return a new handler for a different registry with the same configuration."""
        return CommandHandler(self._namespace, actions, self._config)


def create_command_handler(
    namespace: str,
    actions: ActionRegistry,
    config: CommandConfig | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> CommandHandler:
    """
    Build a command handler for a namespace and an action registry.

    Params:
        namespace: Literal command prefix; "" accepts every word as a command
        actions: Nested mapping of callables, awaitables, lazy and static values
        config: CommandConfig or mapping of options (snake_case or camelCase)
        **overrides: Individual options applied on top of `config`

    Returns:
        CommandHandler with the registry flattened once

    Raises:
        ConfigurationError: If the namespace or an option is invalid
        RegistryError: If `actions` is not a mapping
    """
    if isinstance(config, CommandConfig):
        resolved = config
    else:
        resolved = CommandConfig.from_options(config)
    return CommandHandler(namespace, actions, resolved.merged(**overrides))
