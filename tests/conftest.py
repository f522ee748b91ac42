"""
Shared test fixtures and utilities for the chatcommand test suite.
"""

from dataclasses import dataclass

import pytest

from chatcommand.core.types import computed
from chatcommand.handler import create_command_handler

NAMESPACE = "TEST"


def string_output():
    return "OUTPUT A"


@dataclass(frozen=True)
class Pending:
    """Minimal awaitable standing in for an unresolved async result."""

    value: object

    def __await__(self):
        yield from ()
        return self.value


def promise_output():
    return Pending("OUTPUT B")


def multi_argument_output(a, b, c):
    return f"{a}|{b}|{c}"


@pytest.fixture
def call_log():
    """List that lazy actions append to when they are realized."""
    return []


@pytest.fixture
def actions(call_log):
    """Nested registry mixing callables, static values and lazy values.

    Usage:
        def test_something(actions):
            handler = create_command_handler("TEST", actions)
    """

    @computed
    def counter():
        call_log.append("counter")
        return len(call_log)

    return {
        "stringOutput": string_output,
        "promiseOutput": promise_output,
        "multiArgumentOutput": multi_argument_output,
        "echo": lambda *args: list(args),
        "staticValue": "STATIC",
        "math": {
            "add": lambda a, b: int(a) + int(b),
            "pi": 3.14,
            "nested": {"deep": lambda: "DEEP"},
        },
        "counter": counter,
        "weird(key": lambda: "unreachable",
    }


@pytest.fixture
def handler(actions):
    """Handler for the TEST namespace with default configuration."""
    return create_command_handler(NAMESPACE, actions)
