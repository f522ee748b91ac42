"""
Tests for the command handler factory and orchestration.

Exercises the full text -> tokens -> results path, the exposed stage
methods, configuration handling and rebuilding.
"""

import asyncio
import inspect
import re
from types import SimpleNamespace

import pytest

from chatcommand import CommandConfig, CommandHandler, create_command_handler
from chatcommand.exceptions import ConfigurationError, RegistryError

NAMESPACE = "TEST"


async def _gather(results):
    return await asyncio.gather(*results)


class TestCreateCommandHandler:
    """Tests for create_command_handler."""

    def test_returns_callable_handler(self, actions):
        """Test the factory returns a callable CommandHandler."""
        handler = create_command_handler(NAMESPACE, actions)
        assert isinstance(handler, CommandHandler)
        assert callable(handler)

    def test_exposes_stage_operations(self, handler):
        """Test parse, execute, execute_all and parse_and_execute_all are exposed."""
        for name in (
            "parse",
            "execute",
            "execute_all",
            "parse_and_execute_all",
            "executeAll",
            "parseAndExecuteAll",
        ):
            assert callable(getattr(handler, name))

    def test_properties(self, handler):
        """Test read-only handler properties."""
        assert handler.namespace == NAMESPACE
        assert handler.prefix == "TEST."
        assert handler.config == CommandConfig()
        assert "math.add" in handler.actions
        assert "TEST" in repr(handler)

    def test_config_mapping(self, actions):
        """Test configuration given as a camelCase mapping."""
        handler = create_command_handler(
            "/", actions, {"includeLeadingDelimiter": False}
        )
        assert handler.prefix == "/"

    def test_config_model_and_overrides(self, actions):
        """Test keyword overrides are applied on top of a config model."""
        handler = create_command_handler(
            NAMESPACE, actions, CommandConfig(delimiter="/"), argument_delimiter=";"
        )
        assert handler.prefix == "TEST/"
        assert handler.config.argument_delimiter == ";"
        assert "math/add" in handler.actions

    def test_invalid_option(self, actions):
        """Test invalid options raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            create_command_handler(NAMESPACE, actions, {"bogus": 1})

    def test_non_string_namespace(self, actions):
        """Test a non-string namespace raises ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            create_command_handler(None, actions)
        assert exc_info.value.option == "namespace"

    def test_invalid_registry(self):
        """Test a non-mapping registry raises RegistryError."""
        with pytest.raises(RegistryError):
            create_command_handler(NAMESPACE, ["not", "a", "mapping"])

    def test_flattening_happens_once(self, actions, call_log):
        """Test building a handler does not evaluate lazy values."""
        create_command_handler(NAMESPACE, actions)
        assert call_log == []


class TestParse:
    """Tests for handler.parse."""

    def test_no_commands(self, handler):
        """Test text without commands yields an empty list."""
        assert handler.parse("foo") == []

    def test_multiple_commands(self, handler):
        """Test commands are extracted in order."""
        assert handler.parse("abcd TEST.foo efg TEST.bar TEST.baz hijk") == [
            "foo",
            "bar",
            "baz",
        ]

    def test_namespace_not_rematched(self, handler):
        """Test a namespace inside a command is literal text."""
        assert handler.parse("abcd TEST.foo.TEST.bar efgh") == ["foo.TEST.bar"]

    def test_without_leading_delimiter(self, actions):
        """Test a bare slash namespace."""
        handler = create_command_handler(
            "/", actions, include_leading_delimiter=False
        )
        assert handler.parse("abcd /help efghi //help!") == ["help", "/help!"]

    def test_global_namespace(self, actions):
        """Test an empty namespace treats every word as a command."""
        handler = create_command_handler("", actions)
        assert handler("stringOutput and staticValue") == [
            "OUTPUT A",
            None,
            "STATIC",
        ]

    def test_parse_usable_standalone(self, handler):
        """Test a detached parse method still works."""
        parse = handler.parse
        assert parse("TEST.x") == ["x"]


class TestExecution:
    """Tests for execute, execute_all and parse_and_execute_all."""

    def test_round_trip(self, handler, actions):
        """Test executing the parsed token equals calling the action directly."""
        (token,) = handler.parse(NAMESPACE + ".stringOutput")
        assert handler.execute(token) == actions["stringOutput"]()

    def test_execute_all_elementwise(self, handler):
        """Test execute_all matches execute over each token."""
        tokens = ["stringOutput", "nope", "math.add(1, 2)", "staticValue(x)"]
        assert handler.execute_all(tokens) == [handler.execute(t) for t in tokens]
        assert handler.executeAll(tokens) == handler.execute_all(tokens)

    def test_parse_and_execute_all(self, handler):
        """Test parse_and_execute_all composes parse and execute_all."""
        text = "please TEST.math.add(2, 2) and TEST.staticValue now"
        expected = handler.execute_all(handler.parse(text))
        assert handler.parse_and_execute_all(text) == expected == [4, "STATIC"]
        assert handler.parseAndExecuteAll(text) == expected

    def test_call_proxies_parse_and_execute_all(self, handler):
        """Test calling the handler equals parse_and_execute_all."""
        text = "TEST.stringOutput TEST.promiseOutput"
        assert handler(text) == handler.parse_and_execute_all(text)

    def test_filter_before_execute(self, handler):
        """Test callers can filter parsed tokens before executing."""
        tokens = handler.parse("TEST.math.pi TEST.staticValue")
        allowed = [t for t in tokens if t.startswith("math.")]
        assert handler.execute_all(allowed) == [3.14]

    def test_multiline_arguments(self, handler):
        """Test arguments spanning lines reach the action intact."""
        assert handler("TEST.echo(line one,\nline two)") == [["line one", "\nline two"]]

    def test_pending_results_left_to_caller(self, handler):
        """Test awaitable results are returned unsettled for the caller to gather."""
        results = handler("TEST.promiseOutput TEST.stringOutput TEST.promiseOutput")
        pending = [r for r in results if inspect.isawaitable(r)]
        assert len(pending) == 2
        assert asyncio.run(_gather(pending)) == ["OUTPUT B", "OUTPUT B"]

    def test_action_errors_propagate(self):
        """Test action exceptions reach the caller unchanged."""

        def fail(reason):
            raise ValueError(reason)

        handler = create_command_handler(NAMESPACE, {"fail": fail})
        with pytest.raises(ValueError, match="broken"):
            handler("TEST.fail(broken)")

    def test_custom_delimiters_end_to_end(self):
        """Test delimiter and argument delimiter in one handler."""
        registry = {"math": SimpleNamespace(add=lambda *xs: sum(map(int, xs)))}
        handler = create_command_handler(
            "bot",
            registry,
            delimiter="::",
            argumentDelimiter=re.compile(r"\s*\+\s*"),
        )
        assert handler("hey bot::math::add(1 + 2+3)") == [6]

    def test_lazy_values_realized_per_lookup(self, handler, call_log):
        """Test lazy registry values are computed at execution time."""
        assert handler("TEST.counter TEST.counter") == [1, 2]
        assert call_log == ["counter", "counter"]


class TestRebuilding:
    """Tests for with_config and with_actions."""

    def test_with_config_rebuilds_map(self, handler):
        """Test a new delimiter produces a new flattened map."""
        rebuilt = handler.with_config(delimiter="/")
        assert rebuilt is not handler
        assert "math/add" in rebuilt.actions
        assert "math.add" in handler.actions
        assert rebuilt("TEST/math/add(1, 1)") == [2]

    def test_with_actions_keeps_config(self, actions):
        """Test swapping the registry keeps the configuration."""
        handler = create_command_handler(NAMESPACE, actions, delimiter="/")
        swapped = handler.with_actions({"ping": lambda: "pong"})
        assert swapped.config is handler.config
        assert swapped("TEST/ping") == ["pong"]
        assert len(swapped.actions) == 1
