"""Config types for declarative route tables.

Config-driven construction path:
  dict (JSON/YAML) → parse_route_config() → RouteTableConfig → load_route_table() → RouteTable

Relationship to runtime types:

| Config type       | Runtime type |
|-------------------|--------------|
| RouteTableConfig  | RouteTable   |
| RouteConfig       | Route        |
| RedirectConfig    | Redirect     |
| LocationConfig    | Location     |

Entry shapes::

    - path: /users/:id           # route; every key but "path" is optional
      name: user
      exact: true
    - redirect:                  # redirect; only "to" is required
        from: /u/:id
        to: /users/:id
    - redirect:
        to: {pathname: /login, search: "?next=1"}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from routepath._errors import ConfigParseError

MAX_ROUTES = 256

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """A route entry. ``path=None`` is a catch-all that takes the parent match."""

    path: str | None = None
    exact: bool = False
    strict: bool = False
    sensitive: bool = False
    name: str | None = None


@dataclass(frozen=True, slots=True)
class LocationConfig:
    """A composite redirect target."""

    pathname: str
    search: str = ""
    hash: str = ""


@dataclass(frozen=True, slots=True)
class RedirectConfig:
    """A redirect entry."""

    to: str | LocationConfig
    from_path: str | None = None
    exact: bool = False
    strict: bool = False
    push: bool = False


type EntryConfig = RouteConfig | RedirectConfig


@dataclass(frozen=True, slots=True)
class RouteTableConfig:
    """An ordered route table; the first matching entry wins."""

    entries: tuple[EntryConfig, ...]


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_ROUTE_FIELDS = frozenset({"path", "exact", "strict", "sensitive", "name"})
_REDIRECT_FIELDS = frozenset({"from", "to", "exact", "strict", "push"})
_LOCATION_FIELDS = frozenset({"pathname", "search", "hash"})


def parse_route_config(data: dict[str, Any]) -> RouteTableConfig:
    """Parse a dict into a RouteTableConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_routes = data.get("routes")
    if raw_routes is None:
        msg = "missing required field 'routes'"
        raise ConfigParseError(msg)
    if not isinstance(raw_routes, list):
        msg = f"'routes' must be a list, got {type(raw_routes).__name__}"
        raise ConfigParseError(msg)
    if len(raw_routes) > MAX_ROUTES:
        msg = f"too many routes: {len(raw_routes)} exceeds maximum {MAX_ROUTES}"
        raise ConfigParseError(msg)

    entries = tuple(_parse_entry(entry, i) for i, entry in enumerate(raw_routes))

    names = [e.name for e in entries if isinstance(e, RouteConfig) and e.name is not None]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        msg = f"duplicate route names: {duplicates}"
        raise ConfigParseError(msg)

    return RouteTableConfig(entries=entries)


def _parse_entry(data: dict[str, Any], index: int) -> EntryConfig:
    """Parse one routes[] item; a 'redirect' key selects the redirect shape."""
    if not isinstance(data, dict):
        msg = f"routes[{index}] must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    if "redirect" in data:
        if len(data) != 1:
            extra = sorted(set(data) - {"redirect"})
            msg = f"routes[{index}]: redirect entry has unexpected fields {extra}"
            raise ConfigParseError(msg)
        return _parse_redirect(data["redirect"], f"routes[{index}].redirect")

    return _parse_route(data, f"routes[{index}]")


def _parse_route(data: dict[str, Any], where: str) -> RouteConfig:
    _reject_unknown(data, _ROUTE_FIELDS, where)
    return RouteConfig(
        path=_optional_str(data, "path", where),
        exact=_bool(data, "exact", where),
        strict=_bool(data, "strict", where),
        sensitive=_bool(data, "sensitive", where),
        name=_optional_str(data, "name", where),
    )


def _parse_redirect(data: dict[str, Any], where: str) -> RedirectConfig:
    if not isinstance(data, dict):
        msg = f"{where} must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    _reject_unknown(data, _REDIRECT_FIELDS, where)

    if "to" not in data:
        msg = f"{where} missing required field 'to'"
        raise ConfigParseError(msg)

    raw_to = data["to"]
    to: str | LocationConfig
    if isinstance(raw_to, str):
        to = raw_to
    elif isinstance(raw_to, dict):
        to = _parse_location(raw_to, f"{where}.to")
    else:
        msg = f"{where}.to must be a string or a dict, got {type(raw_to).__name__}"
        raise ConfigParseError(msg)

    return RedirectConfig(
        to=to,
        from_path=_optional_str(data, "from", where),
        exact=_bool(data, "exact", where),
        strict=_bool(data, "strict", where),
        push=_bool(data, "push", where),
    )


def _parse_location(data: dict[str, Any], where: str) -> LocationConfig:
    _reject_unknown(data, _LOCATION_FIELDS, where)
    pathname = _optional_str(data, "pathname", where)
    if pathname is None:
        msg = f"{where} missing required field 'pathname'"
        raise ConfigParseError(msg)
    return LocationConfig(
        pathname=pathname,
        search=_optional_str(data, "search", where) or "",
        hash=_optional_str(data, "hash", where) or "",
    )


def _reject_unknown(data: dict[str, Any], allowed: frozenset[str], where: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        msg = f"{where} has unknown fields {unknown} (allowed: {sorted(allowed)})"
        raise ConfigParseError(msg)


def _optional_str(data: dict[str, Any], name: str, where: str) -> str | None:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        msg = f"{where}.{name} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _bool(data: dict[str, Any], name: str, where: str) -> bool:
    value = data.get(name, False)
    if not isinstance(value, bool):
        msg = f"{where}.{name} must be a bool, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value
