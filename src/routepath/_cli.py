"""Command-line interface for trying patterns and route tables.

Usage:
    routepath match "/users/:id" /users/42 --exact
    routepath generate "/users/:id" -p id=42
    routepath resolve routes.yaml /u/42

Exit status: 0 on success, 1 when nothing matches, 2 on bad input
(invalid pattern, missing or invalid parameter, malformed config).
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from routepath._errors import RoutePathError
from routepath._generate import generate_path
from routepath._match import match_path
from routepath._route import Location, Redirect
from routepath._table import load_route_table_yaml
from routepath._types import MatchOptions

EXIT_NO_MATCH = 1
EXIT_BAD_INPUT = 2


def _fail(e: Exception) -> NoReturn:
    click.echo(f"error: {e}", err=True)
    sys.exit(EXIT_BAD_INPUT)


def _parse_param(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        msg = f"parameter must look like NAME=VALUE, got {raw!r}"
        raise click.BadParameter(msg)
    return name, value


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log cache activity to stderr")
def main(verbose: bool) -> None:
    """Match pathnames against path patterns and generate paths from them."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command("match")
@click.argument("pattern")
@click.argument("pathname")
@click.option("--exact", is_flag=True, help="Require the whole pathname to match")
@click.option("--strict", is_flag=True, help="Make a trailing slash significant")
@click.option("--sensitive", is_flag=True, help="Match case-sensitively")
def match_cmd(pattern: str, pathname: str, exact: bool, strict: bool, sensitive: bool) -> None:
    """Match PATHNAME against PATTERN and print the match as JSON."""
    options = MatchOptions(path=pattern, exact=exact, strict=strict, sensitive=sensitive)
    try:
        result = match_path(pathname, options)
    except RoutePathError as e:
        _fail(e)

    if result is None:
        click.echo("no match", err=True)
        sys.exit(EXIT_NO_MATCH)
    click.echo(json.dumps(result.to_dict(), indent=2))


@main.command("generate")
@click.argument("pattern")
@click.option("-p", "--param", "params", multiple=True, help="NAME=VALUE, repeatable")
def generate_cmd(pattern: str, params: tuple[str, ...]) -> None:
    """Generate a path from PATTERN.

    Giving the same NAME more than once supplies a list, for repeat
    parameters such as ":tags+".
    """
    values: dict[str, str | list[str]] = {}
    for raw in params:
        name, value = _parse_param(raw)
        if name in values:
            previous = values[name]
            values[name] = [*previous, value] if isinstance(previous, list) else [previous, value]
        else:
            values[name] = value

    try:
        click.echo(generate_path(pattern, values))
    except RoutePathError as e:
        _fail(e)


@main.command("resolve")
@click.argument("config", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("pathname")
def resolve_cmd(config: Path, pathname: str) -> None:
    """Resolve PATHNAME against the YAML route table in CONFIG."""
    try:
        table = load_route_table_yaml(config.read_text())
        hit = table.resolve(pathname)
    except RoutePathError as e:
        _fail(e)

    if hit is None:
        click.echo("no match", err=True)
        sys.exit(EXIT_NO_MATCH)

    entry, result = hit
    output: dict[str, object] = {"match": result.to_dict()}
    if isinstance(entry, Redirect):
        try:
            target = entry.compute_to(result)
        except RoutePathError as e:
            _fail(e)
        output["redirect"] = {
            "to": _location_dict(target) if isinstance(target, Location) else target,
            "push": entry.push,
        }
    else:
        output["route"] = {"path": entry.path, "name": entry.name}
    click.echo(json.dumps(output, indent=2))


def _location_dict(location: Location) -> dict[str, object]:
    return {"pathname": location.pathname, "search": location.search, "hash": location.hash}


if __name__ == "__main__":
    main()
