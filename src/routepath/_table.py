"""Route tables built from config.

    config = parse_route_config(yaml.safe_load(text))
    table = load_route_table(config)

    hit = table.resolve("/users/42")
    table.url_for("user", {"id": 42})

Loading compiles every pattern up front, so a bad pattern fails when the
table is loaded rather than on the first request that reaches it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import yaml

from routepath._cache import PatternCache, TemplateCache, default_cache, default_template_cache
from routepath._config import (
    LocationConfig,
    RedirectConfig,
    RouteConfig,
    RouteTableConfig,
    parse_route_config,
)
from routepath._errors import ConfigParseError
from routepath._generate import generate_path
from routepath._match import root_match
from routepath._route import Location, Redirect, Route, switch

if TYPE_CHECKING:
    from routepath._match import MatchResult
    from routepath._route import Entry
    from routepath._types import Params


@dataclass(frozen=True, slots=True)
class RouteTable:
    """Immutable, ordered route table.

    Constructed via load_route_table(). ``resolve`` is first-match-wins
    over the entries; ``url_for`` generates a path for a named route.
    """

    entries: tuple[Entry, ...]
    cache: PatternCache = field(repr=False, compare=False)
    template_cache: TemplateCache = field(repr=False, compare=False)
    _by_name: MappingProxyType[str, Route] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name = {
            entry.name: entry
            for entry in self.entries
            if isinstance(entry, Route) and entry.name is not None
        }
        object.__setattr__(self, "_by_name", MappingProxyType(by_name))

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def names(self) -> list[str]:
        """Names of the named routes, in table order."""
        return list(self._by_name)

    def resolve(
        self, pathname: str, parent: MatchResult | None = None
    ) -> tuple[Entry, MatchResult] | None:
        """Return the first entry matching *pathname* and its match, or None.

        Without *parent* the table is treated as top-level, so pathless
        entries take root_match(pathname).
        """
        if parent is None:
            parent = root_match(pathname)
        return switch(self.entries, pathname, parent, cache=self.cache)

    def url_for(self, name: str, params: Params | None = None) -> str:
        """Generate the path of the route called *name*.

        Raises:
            KeyError: No route has that name.
            MissingParameterError: A required parameter is absent.
            InvalidParameterError: A value does not fit its parameter.
        """
        route = self._by_name.get(name)
        if route is None:
            msg = f"no route named {name!r} (known: {sorted(self._by_name)})"
            raise KeyError(msg)
        if route.path is None:
            msg = f"route {name!r} has no path to generate from"
            raise KeyError(msg)
        return generate_path(route.path, params, cache=self.template_cache)


def load_route_table(
    config: RouteTableConfig,
    *,
    cache: PatternCache | None = None,
    template_cache: TemplateCache | None = None,
) -> RouteTable:
    """Build a RouteTable from config, compiling every pattern.

    Raises:
        InvalidPatternError: A route path, redirect source or redirect target
            does not compile.
    """
    cache = cache if cache is not None else default_cache()
    template_cache = template_cache if template_cache is not None else default_template_cache()

    entries: list[Entry] = []
    for entry_config in config.entries:
        entry = _load_entry(entry_config)
        if entry.options.path is not None:
            cache.compile(entry.options.path, entry.options)
        if isinstance(entry, Redirect):
            target = entry.to if isinstance(entry.to, str) else entry.to.pathname
            template_cache.compile(target)
        entries.append(entry)

    return RouteTable(entries=tuple(entries), cache=cache, template_cache=template_cache)


def load_route_table_yaml(text: str, **kwargs: Any) -> RouteTable:
    """Parse a YAML document and load it as a RouteTable.

    Raises:
        ConfigParseError: If the YAML is invalid or malformed as a route table.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"invalid YAML: {e}"
        raise ConfigParseError(msg) from e
    return load_route_table(parse_route_config(data), **kwargs)


def _load_entry(config: RouteConfig | RedirectConfig) -> Entry:
    match config:
        case RouteConfig():
            return Route(
                path=config.path,
                exact=config.exact,
                strict=config.strict,
                sensitive=config.sensitive,
                name=config.name,
            )
        case RedirectConfig(to=LocationConfig() as loc):
            return Redirect(
                to=Location(pathname=loc.pathname, search=loc.search, hash=loc.hash),
                from_path=config.from_path,
                exact=config.exact,
                strict=config.strict,
                push=config.push,
            )
        case RedirectConfig(to=str() as to):
            return Redirect(
                to=to,
                from_path=config.from_path,
                exact=config.exact,
                strict=config.strict,
                push=config.push,
            )
        case _:  # pragma: no cover
            msg = f"unknown route config type: {type(config).__name__}"
            raise ConfigParseError(msg)
