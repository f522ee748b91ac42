"""
Command tokenizer for free-form chat text.

Scans text one character at a time and extracts the commands carrying the
namespace prefix, e.g. ``"please run TEST.math.add(1, 2) now"`` yields
``["math.add(1, 2)"]``. Argument spans are opaque: parentheses inside them are
not balanced, and whitespace inside them is kept.

Token termination rules:
    - Outside arguments, a command ends before the next break character.
    - Inside arguments, only a ``)`` directly followed by a break character
      (or the end of the text) ends the command.
    - Once a command has started, the namespace is not matched again, so
      ``TEST.foo.TEST.bar`` yields ``foo.TEST.bar``.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


def is_break_char(char: str | None) -> bool:
    """Check if `char` ends a command outside arguments; None marks end of text."""
    return char is None or char.isspace()


@dataclass
class ScanState:
    """Mutable state of a single `parse` pass.

    `matched` counts prefix characters matched so far; `start` is the index of
    the first captured character of the current command, or None.
    """

    in_command: bool
    in_arguments: bool = False
    matched: int = 0
    start: int | None = None


class CommandTokenizer:
    """Extracts namespaced command tokens from text.

    Params:
        prefix: Literal prefix commands must carry (see
            `CommandConfig.namespace_prefix`). Empty means global mode, where
            every whitespace-separated word is a command candidate.
    """

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def _reset(self, state: ScanState) -> None:
        state.in_command = not self.prefix
        state.in_arguments = False
        state.matched = 0
        state.start = None

    def _emit(self, state: ScanState, text: str, end: int, commands: list[str]) -> None:
        commands.append(text[state.start : end])
        self._reset(state)

    def _match_prefix(self, state: ScanState, char: str) -> None:
        if char == self.prefix[state.matched]:
            state.matched += 1
        else:
            # Restart from this character only if it could begin the prefix
            state.matched = 1 if char == self.prefix[0] else 0
        if state.matched == len(self.prefix):
            state.in_command = True
            state.matched = 0

    def parse(self, text: str) -> list[str]:
        """
        Extract command tokens from text.

        Outside arguments a captured command never contains a break character,
        so each token is a contiguous slice of `text`.

        Params:
            text: Arbitrary text, possibly multi-line

        Returns:
            Command tokens in order of appearance with the prefix stripped;
            empty when the text holds no commands
        """
        commands: list[str] = []
        state = ScanState(in_command=not self.prefix)
        length = len(text)

        for i, char in enumerate(text):
            next_char = text[i + 1] if i + 1 < length else None

            if not state.in_command:
                self._match_prefix(state, char)
                continue

            if is_break_char(char) and not state.in_arguments:
                # Leading breaks after the prefix (or between words in global mode)
                continue

            if state.start is None:
                state.start = i
            if char == "(":
                state.in_arguments = True
            elif is_break_char(next_char) and (
                not state.in_arguments or char == ")"
            ):
                self._emit(state, text, i + 1, commands)

        if state.start is not None and not state.in_arguments:
            self._emit(state, text, length, commands)

        logger.debug("Parsed %d command(s) from %d characters", len(commands), length)
        return commands


def parse_commands(text: str, prefix: str = "") -> list[str]:
    """Convenience wrapper around `CommandTokenizer(prefix).parse(text)`."""
    return CommandTokenizer(prefix).parse(text)
