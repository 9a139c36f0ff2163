"""Core value types and type aliases for routepath.

- MatchOptions is the single normalized options record every matcher sees
- PathSpec is the boundary union callers may pass instead (bare pattern or options)
- Key describes one declared parameter of a compiled pattern
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

# Values accepted by generate_path(). Sequences only fit repeat parameters.
type ParamValue = str | int | float | Sequence[str | int | float]
type Params = Mapping[str, ParamValue]


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """Options for matching a pathname against a pattern.

    path=None means "no pattern": the match engine propagates the parent
    match instead of matching anything.
    """

    path: str | None = None
    exact: bool = False
    strict: bool = False
    sensitive: bool = False

    @property
    def cache_key(self) -> str:
        """Fixed-order discriminator of the three flags, e.g. ``"100"``."""
        return "".join(
            "1" if flag else "0" for flag in (self.exact, self.strict, self.sensitive)
        )

    @classmethod
    def coerce(cls, spec: PathSpec) -> MatchOptions:
        """Normalize a PathSpec into MatchOptions.

        >>> MatchOptions.coerce("/users/:id")
        MatchOptions(path='/users/:id', exact=False, strict=False, sensitive=False)
        """
        match spec:
            case MatchOptions():
                return spec
            case str():
                return cls(path=spec)
            case None:
                return cls()
        msg = f"expected a pattern string or MatchOptions, got {type(spec).__name__}"
        raise TypeError(msg)


# A bare pattern string is shorthand for MatchOptions(path=pattern).
type PathSpec = str | MatchOptions | None


@dataclass(frozen=True, slots=True)
class Key:
    """A parameter declared in a pattern.

    ``name`` is the parameter name, or its position ("0", "1", ...) for
    unnamed groups. ``pattern`` is the regex body a single segment value
    must satisfy.
    """

    name: str
    prefix: str
    delimiter: str
    optional: bool
    repeat: bool
    partial: bool
    asterisk: bool
    pattern: str
