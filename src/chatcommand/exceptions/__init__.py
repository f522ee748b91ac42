"""
chatcommand exception classes.

This package provides all exception types raised by the command handler
framework. Unresolved or malformed commands never raise; these classes cover
setup-time mistakes only.
"""

from chatcommand.exceptions.core import (
    ChatCommandError,
    ConfigurationError,
    RegistryError,
)

__all__ = [
    "ChatCommandError",
    "ConfigurationError",
    "RegistryError",
]
