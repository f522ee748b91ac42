"""
Exception classes for command handler construction.

This module defines the exception types raised while configuring a command
handler. Parsing and execution are permissive by design of the command syntax:
unknown paths resolve to None and errors raised by actions propagate to the
caller untouched.
"""


class ChatCommandError(Exception):
    """Base exception for all chatcommand errors."""

    pass


class ConfigurationError(ChatCommandError):
    """Raised when a handler option or the namespace is invalid."""

    def __init__(self, option: str, reason: str):
        """
        Initialize the exception.

        Params:
            option: Name of the offending option (or "namespace")
            reason: Why the value was rejected
        """
        self.option = option
        self.reason = reason
        super().__init__(f"Invalid option '{option}': {reason}")


class RegistryError(ChatCommandError):
    """Raised when the action registry cannot be flattened."""

    def __init__(self, reason: str):
        """
        Initialize the exception.

        Params:
            reason: Why the registry was rejected
        """
        self.reason = reason
        super().__init__(f"Invalid action registry: {reason}")
