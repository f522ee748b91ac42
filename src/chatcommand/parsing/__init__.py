"""
Command text parsing.

This package locates namespaced command tokens inside free-form text.
"""

from chatcommand.parsing.tokenizer import (
    CommandTokenizer,
    is_break_char,
    parse_commands,
)

__all__ = [
    "CommandTokenizer",
    "is_break_char",
    "parse_commands",
]
