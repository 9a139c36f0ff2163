"""Pattern syntax compiler: path patterns -> recognizers and templates.

Pattern syntax::

    /users/:id            named parameter, one segment
    /users/:id(\\d+)       named parameter with a custom segment pattern
    /files/(.*)           unnamed parameter, named "0", "1", ... by position
    /:lang?/docs          optional parameter
    /tags/:tag+           one or more segments
    /tags/:tag*           zero or more segments
    /static/*             anything
    /a\\:b                 escaped literal

A parameter preceded by "/" or "." takes that character as its prefix
and delimiter. The default segment pattern is "anything but the
delimiter", matched lazily.

Recognizers are compiled with ``google-re2``, which guarantees
linear-time matching. RE2 does not support backreferences or lookaround,
so the segment-boundary check that a lookahead would express is a
trailing non-capturing group outside the captured prefix instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import re2

from routepath._errors import (
    InvalidParameterError,
    InvalidPatternError,
    MissingParameterError,
    PatternTooLongError,
)
from routepath._types import Key

if TYPE_CHECKING:
    from routepath._types import Params, ParamValue

MAX_PATTERN_LENGTH = 8192
DEFAULT_DELIMITER = "/"

_TOKEN_RE = re2.compile(
    # An escaped character, e.g. "\:" or "\(".
    r"(\\.)"
    # "/:name(custom)?", "/(custom)+", or a bare "*".
    r"|([/.])?(?:(?::(\w+)(?:\(((?:\\.|[^\\()])+)\))?|\(((?:\\.|[^\\()])+)\))([+*?])?|(\*))"
)

_STRING_SPECIALS = frozenset(".+*?=^!:${}()[]|/\\")
_GROUP_SPECIALS = frozenset("=!:$/()")


def _escape_string(s: str) -> str:
    return "".join("\\" + c if c in _STRING_SPECIALS else c for c in s)


def _escape_group(s: str) -> str:
    return "".join("\\" + c if c in _GROUP_SPECIALS else c for c in s)


def _check_pattern(pattern: str) -> None:
    if not isinstance(pattern, str):
        msg = f"path pattern must be a string, got {type(pattern).__name__}"
        raise TypeError(msg)
    if len(pattern) > MAX_PATTERN_LENGTH:
        raise PatternTooLongError(pattern, MAX_PATTERN_LENGTH)


def parse(pattern: str) -> tuple[str | Key, ...]:
    """Split a pattern into literal strings and parameter Keys.

    >>> parse("/users/:id")
    ('/users', Key(name='id', prefix='/', delimiter='/', optional=False, repeat=False, partial=False, asterisk=False, pattern='[^\\\\/]+?'))
    """
    _check_pattern(pattern)

    tokens: list[str | Key] = []
    unnamed = 0
    index = 0
    path = ""

    for m in _TOKEN_RE.finditer(pattern):
        escaped, prefix, name, capture, group, modifier, asterisk = m.groups()
        path += pattern[index : m.start()]
        index = m.end()

        if escaped:
            path += escaped[1]
            continue

        next_char = pattern[index] if index < len(pattern) else None

        if path:
            tokens.append(path)
            path = ""

        if name is None:
            name = str(unnamed)
            unnamed += 1

        delimiter = prefix or DEFAULT_DELIMITER
        body = capture or group
        if body:
            segment = _escape_group(body)
        elif asterisk:
            segment = ".*"
        else:
            segment = f"[^{_escape_string(delimiter)}]+?"

        tokens.append(
            Key(
                name=name,
                prefix=prefix or "",
                delimiter=delimiter,
                optional=modifier in ("?", "*"),
                repeat=modifier in ("+", "*"),
                # The prefix is followed by a literal that is not itself a prefix,
                # e.g. "/:id-edit" or "/(\d+).json"
                partial=prefix is not None and next_char is not None and next_char != prefix,
                asterisk=asterisk is not None,
                pattern=segment,
            )
        )

    path += pattern[index:]
    if path:
        tokens.append(path)

    return tuple(tokens)


def _build_source(
    tokens: Sequence[str | Key], *, end: bool, strict: bool, sensitive: bool
) -> str:
    """Build the RE2 source for a token sequence.

    Group 1 is the recognized prefix (the matched url); groups 2..n are
    the parameter values in declaration order.
    """
    delimiter = _escape_string(DEFAULT_DELIMITER)
    route = ""

    for token in tokens:
        if isinstance(token, str):
            route += _escape_string(token)
            continue

        prefix = _escape_string(token.prefix)
        capture = f"(?:{token.pattern})"
        if token.repeat:
            capture += f"(?:{prefix}{capture})*"

        if token.optional:
            if token.partial:
                capture = f"{prefix}({capture})?"
            else:
                capture = f"(?:{prefix}({capture}))?"
        else:
            capture = f"{prefix}({capture})"

        route += capture

    ends_with_delimiter = route.endswith(delimiter)

    # Non-strict: a trailing delimiter is optional and only consumed at the end.
    if not strict:
        if ends_with_delimiter:
            route = route[: -len(delimiter)]
        route += f"(?:{delimiter}$)?"

    boundary = ""
    if end:
        route += "$"
    elif not (strict and ends_with_delimiter):
        # Prefix matches stop on a segment boundary: "/users" must not match "/usersfoo".
        boundary = f"(?:{delimiter}|$)"

    flags = "" if sensitive else "(?i)"
    return f"{flags}^({route}){boundary}"


@dataclass(frozen=True, slots=True)
class Recognizer:
    """Compiled executable form of a pattern.

    Holds a compiled RE2 program whose first group is the recognized
    prefix and whose remaining groups are the parameter captures.
    """

    source: str
    program: re2.Pattern[str] = field(repr=False, compare=False)

    def recognize(self, pathname: str) -> tuple[str, tuple[str | None, ...]] | None:
        """Return ``(url, values)`` for a match at the start of *pathname*, else None."""
        try:
            m = self.program.match(pathname)
        except UnicodeEncodeError:
            # RE2 matches UTF-8; lone surrogates have no encoding and match nothing.
            return None
        if m is None:
            return None
        url, *values = m.groups()
        return url, tuple(values)


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A recognizer plus the ordered keys it captures."""

    recognizer: Recognizer
    keys: tuple[Key, ...]

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(key.name for key in self.keys)


def compile_pattern(
    pattern: str,
    *,
    end: bool = True,
    strict: bool = False,
    sensitive: bool = False,
) -> CompiledPattern:
    """Compile a path pattern into a CompiledPattern.

    Args:
        end: the recognizer must consume the whole input.
        strict: a trailing delimiter on the pattern is significant.
        sensitive: match case-sensitively.

    Raises:
        TypeError: If *pattern* is not a string.
        InvalidPatternError: If the pattern does not compile.
        PatternTooLongError: If the pattern exceeds MAX_PATTERN_LENGTH.
    """
    tokens = parse(pattern)
    keys = tuple(token for token in tokens if isinstance(token, Key))
    source = _build_source(tokens, end=end, strict=strict, sensitive=sensitive)

    try:
        program = re2.compile(source)
    except re2.error as e:
        raise InvalidPatternError(pattern, str(e)) from e

    if program.groups != len(keys) + 1:
        msg = "custom parameter patterns must not contain capturing groups"
        raise InvalidPatternError(pattern, msg)

    return CompiledPattern(recognizer=Recognizer(source, program), keys=keys)


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """Reverse-generation form of a pattern.

    Each Key's segment pattern is compiled once so supplied values can be
    validated before they are substituted.
    """

    pattern: str
    tokens: tuple[str | Key, ...]
    _checks: dict[Key, re2.Pattern[str]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        checks: dict[Key, re2.Pattern[str]] = {}
        for token in self.tokens:
            if isinstance(token, Key):
                try:
                    checks[token] = re2.compile(f"^(?:{token.pattern})$")
                except re2.error as e:
                    raise InvalidPatternError(self.pattern, str(e)) from e
        object.__setattr__(self, "_checks", checks)

    @property
    def keys(self) -> tuple[Key, ...]:
        return tuple(token for token in self.tokens if isinstance(token, Key))

    def render(self, params: Params | None = None) -> str:
        """Substitute *params* into the template.

        Values are inserted verbatim (no URL encoding) after being checked
        against their segment pattern.

        Raises:
            MissingParameterError: A required parameter is absent.
            InvalidParameterError: A value does not fit its parameter.
        """
        data = params or {}
        path = ""

        for token in self.tokens:
            if isinstance(token, str):
                path += token
                continue

            value = data.get(token.name)

            if value is None:
                if token.optional:
                    # Partial parameters keep their prefix, e.g. "/:id?-edit" -> "/-edit".
                    if token.partial:
                        path += token.prefix
                    continue
                raise MissingParameterError(token.name)

            if isinstance(value, (list, tuple)):
                path += self._render_repeat(token, value)
                continue

            segment = self._check(token, value)
            path += token.prefix + segment

        return path

    def _render_repeat(self, token: Key, values: Sequence[ParamValue]) -> str:
        if not token.repeat:
            raise InvalidParameterError(token.name, values, "expected a single value")
        if not values:
            if token.optional:
                return ""
            raise InvalidParameterError(token.name, values, "expected at least one value")
        return "".join(
            (token.prefix if i == 0 else token.delimiter) + self._check(token, value)
            for i, value in enumerate(values)
        )

    def _check(self, token: Key, value: ParamValue) -> str:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise InvalidParameterError(token.name, value, "expected a string or number")
        segment = str(value)
        try:
            fits = self._checks[token].match(segment) is not None
        except UnicodeEncodeError:
            fits = False
        if not fits:
            raise InvalidParameterError(
                token.name, value, f'expected to match "{token.pattern}"'
            )
        return segment


def compile_template(pattern: str) -> PathTemplate:
    """Compile a path pattern into a PathTemplate for generation.

    Raises:
        TypeError: If *pattern* is not a string.
        InvalidPatternError: If a parameter's segment pattern does not compile.
    """
    return PathTemplate(pattern, parse(pattern))
