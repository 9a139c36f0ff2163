"""Routes, redirects and route groups.

The decision logic a routing UI needs around the match engine, as plain
frozen dataclasses:

- Route.compute_match: the match a route reports (group-computed or its own)
- Redirect.compute_to: the navigation target, generated from captured params
- switch: first-match-wins selection over an ordered group of entries
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from routepath._generate import generate_path
from routepath._match import match_path
from routepath._types import MatchOptions

if TYPE_CHECKING:
    from collections.abc import Iterable

    from routepath._cache import PatternCache, TemplateCache
    from routepath._match import MatchResult


@dataclass(frozen=True, slots=True)
class Location:
    """A composite navigation destination.

    Only ``pathname`` is interpreted (as a pattern when redirecting);
    ``search``, ``hash``, ``state`` and ``key`` are carried unchanged.
    """

    pathname: str
    search: str = ""
    hash: str = ""
    state: Any = None
    key: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A declarative route. A route without ``path`` always takes its parent's match."""

    path: str | None = None
    exact: bool = False
    strict: bool = False
    sensitive: bool = False
    name: str | None = None

    @property
    def options(self) -> MatchOptions:
        return MatchOptions(
            path=self.path, exact=self.exact, strict=self.strict, sensitive=self.sensitive
        )

    def compute_match(
        self,
        pathname: str,
        parent: MatchResult | None = None,
        computed_match: MatchResult | None = None,
        *,
        cache: PatternCache | None = None,
    ) -> MatchResult | None:
        """Return the match this route reports for *pathname*.

        A match already computed by the enclosing group wins; otherwise the
        route matches on its own options, falling back to *parent*.
        """
        if computed_match is not None:
            return computed_match
        return match_path(pathname, self.options, parent, cache=cache)


@dataclass(frozen=True, slots=True)
class Redirect:
    """Navigate to ``to``, optionally only when ``from_path`` matches.

    ``to`` may be a pattern; inside a group, parameters captured by
    ``from_path`` fill it in.
    """

    to: str | Location
    from_path: str | None = None
    exact: bool = False
    strict: bool = False
    push: bool = False

    @property
    def path(self) -> str | None:
        return self.from_path

    @property
    def options(self) -> MatchOptions:
        return MatchOptions(path=self.from_path, exact=self.exact, strict=self.strict)

    def compute_to(
        self,
        computed_match: MatchResult | None = None,
        *,
        cache: TemplateCache | None = None,
    ) -> str | Location:
        """Return the navigation target.

        With a match, a string target is generated from the match's params;
        for a Location only ``pathname`` is generated. Without a match the
        target is returned as given.

        Raises:
            MissingParameterError: The target needs a parameter the match lacks.
            InvalidParameterError: A captured value does not fit the target.
        """
        if computed_match is None:
            return self.to
        if isinstance(self.to, str):
            return generate_path(self.to, computed_match.params, cache=cache)
        return replace(
            self.to,
            pathname=generate_path(self.to.pathname, computed_match.params, cache=cache),
        )


type Entry = Route | Redirect


def switch(
    entries: Iterable[Entry],
    pathname: str,
    parent: MatchResult | None = None,
    *,
    cache: PatternCache | None = None,
) -> tuple[Entry, MatchResult] | None:
    """Select the first entry that matches *pathname*.

    An entry with a path (``from_path`` for redirects) is matched against
    *pathname*; an entry without one takes *parent*. Later entries are
    never consulted once one matches.
    """
    for entry in entries:
        match = match_path(pathname, entry.options, parent, cache=cache)
        if match is not None:
            return entry, match
    return None
