"""Error taxonomy for routepath.

A failed match is not an error: match_path() returns None. Everything
below is a deterministic, input-dependent failure that the caller has
to fix (a bad pattern, incomplete generation data, a malformed route
table). Nothing here is retried.

    RoutePathError
    ├── InvalidPatternError
    │   └── PatternTooLongError
    ├── ParameterError
    │   ├── MissingParameterError
    │   └── InvalidParameterError
    └── ConfigParseError
"""

from __future__ import annotations


class RoutePathError(Exception):
    """Base class for all routepath errors."""


class InvalidPatternError(RoutePathError):
    """A path pattern could not be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid path pattern {pattern!r}: {reason}")


class PatternTooLongError(InvalidPatternError):
    """A path pattern exceeds the length limit."""

    def __init__(self, pattern: str, max_: int) -> None:
        self.length = len(pattern)
        self.max = max_
        super().__init__(
            pattern[:64] + "...",
            f"pattern length {self.length} exceeds maximum {max_}",
        )


class ParameterError(RoutePathError):
    """Generation data does not fit the pattern."""

    def __init__(self, name: str, msg: str) -> None:
        self.name = name
        super().__init__(msg)


class MissingParameterError(ParameterError):
    """A required parameter was not supplied."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f'expected "{name}" to be defined')


class InvalidParameterError(ParameterError):
    """A supplied value violates the parameter's segment constraint."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.value = value
        super().__init__(name, f'parameter "{name}": {reason}, got {value!r}')


class ConfigParseError(RoutePathError):
    """Error parsing a config dict into route table config types."""
