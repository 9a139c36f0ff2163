"""Match engine: pathname + pattern (+ parent match) -> MatchResult | None.

Evaluation rules:
- A bare pattern string is shorthand for MatchOptions(path=pattern)
- No path: nothing is matched, the parent match is returned unchanged
  (this is how a route without a pattern inherits its ancestor's match)
- No recognition is None, never an exception
- exact=True rejects a recognized prefix that is shorter than the pathname
- Pattern "/" recognized as "" is reported with url "/"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from routepath._cache import PatternCache, default_cache
from routepath._types import MatchOptions

if TYPE_CHECKING:
    from routepath._types import PathSpec


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of a successful match.

    ``path`` is the pattern as given, ``url`` the matched portion of the
    pathname. ``params`` is read-only and ordered as the pattern declares
    its parameters.
    """

    path: str
    url: str
    is_exact: bool
    params: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.params, MappingProxyType):
            object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __hash__(self) -> int:
        return hash((self.path, self.url, self.is_exact, tuple(self.params.items())))

    def to_dict(self) -> dict[str, object]:
        """Plain-dict form, e.g. for JSON output."""
        return {
            "path": self.path,
            "url": self.url,
            "isExact": self.is_exact,
            "params": dict(self.params),
        }


def root_match(pathname: str) -> MatchResult:
    """The match every top-level route group inherits: "/" with no params."""
    return MatchResult(path="/", url="/", is_exact=pathname == "/")


def match_path(
    pathname: str,
    options: PathSpec = None,
    parent: MatchResult | None = None,
    *,
    cache: PatternCache | None = None,
) -> MatchResult | None:
    """Match *pathname* against a pattern.

    >>> match_path("/users/42", "/users/:id")
    MatchResult(path='/users/:id', url='/users/42', is_exact=True, params=mappingproxy({'id': '42'}))

    Args:
        pathname: The pathname to test. Query string and hash are not
            understood and must already be stripped.
        options: A pattern string or MatchOptions.
        parent: The enclosing route's match, returned as-is when
            *options* has no path.
        cache: PatternCache to compile through; the process-wide cache
            when omitted.

    Raises:
        InvalidPatternError: If the pattern does not compile.
    """
    opts = MatchOptions.coerce(options)
    if opts.path is None:
        return parent

    compiled = (cache if cache is not None else default_cache()).compile(opts.path, opts)
    recognized = compiled.recognizer.recognize(pathname)
    if recognized is None:
        return None

    url, values = recognized
    is_exact = pathname == url
    if opts.exact and not is_exact:
        return None

    params = {
        name: value
        for name, value in zip(compiled.param_names, values, strict=True)
        # Optional parameters that took no part in the match are left out.
        if value is not None
    }

    return MatchResult(
        path=opts.path,
        url="/" if opts.path == "/" and url == "" else url,
        is_exact=is_exact,
        params=MappingProxyType(params),
    )


class PathMatcher:
    """match_path() bound to an owned PatternCache.

    Usage::

        matcher = PathMatcher()
        matcher.match("/users/42", MatchOptions(path="/users/:id", exact=True))
    """

    __slots__ = ("_cache",)

    def __init__(self, cache: PatternCache | None = None) -> None:
        self._cache = cache if cache is not None else PatternCache()

    @property
    def cache(self) -> PatternCache:
        return self._cache

    def match(
        self,
        pathname: str,
        options: PathSpec = None,
        parent: MatchResult | None = None,
    ) -> MatchResult | None:
        """Same as match_path() with this matcher's cache."""
        return match_path(pathname, options, parent, cache=self._cache)
