"""
Handler configuration.

`CommandConfig` holds the three options that shape both the tokenizer and the
executor. It is immutable: changing an option means building a new handler,
which in turn rebuilds the flattened action map.
"""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from chatcommand.exceptions import ConfigurationError

# Comma optionally followed by one space; the space is consumed by the split
DEFAULT_ARGUMENT_DELIMITER = re.compile(r", ?")


class CommandConfig(BaseModel):
    """Options for a command handler.

    Accepts snake_case field names as well as their camelCase aliases
    (`argumentDelimiter`, `includeLeadingDelimiter`).

    Params:
        delimiter: Joins nested action keys and terminates the namespace prefix
        argument_delimiter: Literal string or compiled pattern splitting call arguments
        include_leading_delimiter: Whether the namespace must be followed by the delimiter
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        arbitrary_types_allowed=True,
    )

    delimiter: str = "."
    argument_delimiter: str | re.Pattern[str] = Field(
        default_factory=lambda: DEFAULT_ARGUMENT_DELIMITER
    )
    include_leading_delimiter: bool = True

    @field_validator("delimiter")
    @classmethod
    def _check_delimiter(cls, value: str) -> str:
        if not value:
            raise ValueError("delimiter must be a non-empty string")
        return value

    @field_validator("argument_delimiter")
    @classmethod
    def _check_argument_delimiter(cls, value: str | re.Pattern[str]):
        pattern = value.pattern if isinstance(value, re.Pattern) else value
        if not pattern:
            raise ValueError("argument delimiter must not be empty")
        return value

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "CommandConfig":
        """
        Build a configuration from a mapping of options.

        Params:
            options: Option names (snake_case or camelCase) to values

        Returns:
            Validated CommandConfig

        Raises:
            ConfigurationError: If an option is unknown or has an invalid value
        """
        try:
            return cls.model_validate(cls._normalize(options or {}))
        except ValidationError as e:
            error = e.errors()[0]
            loc = error["loc"]
            option = cls._field_name(str(loc[0])) if loc else "config"
            reason = error["msg"]
            # Union failures report one branch per loc suffix; name the whole union
            if option == "argument_delimiter" and len(loc) > 1:
                reason = "expected a non-empty string or compiled pattern"
            raise ConfigurationError(option, reason) from e

    def merged(self, **overrides: Any) -> "CommandConfig":
        """Return a new configuration with `overrides` applied on top of this one."""
        if not overrides:
            return self
        current = {name: getattr(self, name) for name in type(self).model_fields}
        return self.from_options({**current, **self._normalize(overrides)})

    def namespace_prefix(self, namespace: str) -> str:
        """
        Derive the literal prefix a command must carry.

        Params:
            namespace: Handler namespace; empty means every token is a command

        Returns:
            `namespace + delimiter`, `namespace`, or "" for global mode
        """
        if namespace and self.include_leading_delimiter:
            return namespace + self.delimiter
        return namespace or ""

    @classmethod
    def _field_name(cls, key: str) -> str:
        for name, field in cls.model_fields.items():
            if key == field.alias:
                return name
        return key

    @classmethod
    def _normalize(cls, options: Mapping[str, Any]) -> dict[str, Any]:
        """Map camelCase aliases onto field names so later keys win consistently."""
        return {cls._field_name(key): value for key, value in options.items()}


DEFAULT_CONFIG = CommandConfig()
