"""Tests for route table config parsing."""

from __future__ import annotations

from typing import Any

import pytest

from routepath import (
    MAX_ROUTES,
    ConfigParseError,
    LocationConfig,
    RedirectConfig,
    RouteConfig,
    RouteTableConfig,
    parse_route_config,
)


class TestParseRouteConfig:
    def test_minimal(self) -> None:
        config = parse_route_config({"routes": [{"path": "/"}]})
        assert config == RouteTableConfig(entries=(RouteConfig(path="/"),))

    def test_empty_routes(self) -> None:
        assert parse_route_config({"routes": []}).entries == ()

    def test_route_fields(self) -> None:
        config = parse_route_config(
            {
                "routes": [
                    {
                        "path": "/users/:id",
                        "exact": True,
                        "strict": True,
                        "sensitive": True,
                        "name": "user",
                    }
                ]
            }
        )
        assert config.entries[0] == RouteConfig(
            path="/users/:id", exact=True, strict=True, sensitive=True, name="user"
        )

    def test_pathless_route(self) -> None:
        config = parse_route_config({"routes": [{"name": "fallback"}]})
        assert config.entries[0] == RouteConfig(path=None, name="fallback")

    def test_redirect_string_target(self) -> None:
        config = parse_route_config(
            {"routes": [{"redirect": {"from": "/u/:id", "to": "/users/:id", "push": True}}]}
        )
        assert config.entries[0] == RedirectConfig(
            to="/users/:id", from_path="/u/:id", push=True
        )

    def test_redirect_location_target(self) -> None:
        config = parse_route_config(
            {"routes": [{"redirect": {"to": {"pathname": "/login", "search": "?next=1"}}}]}
        )
        assert config.entries[0] == RedirectConfig(
            to=LocationConfig(pathname="/login", search="?next=1")
        )

    def test_order_preserved(self) -> None:
        config = parse_route_config(
            {"routes": [{"path": "/b"}, {"redirect": {"to": "/b"}}, {"path": "/a"}]}
        )
        assert [type(e).__name__ for e in config.entries] == [
            "RouteConfig",
            "RedirectConfig",
            "RouteConfig",
        ]


class TestParseErrors:
    @pytest.mark.parametrize(
        ("data", "fragment"),
        [
            ([], "expected dict"),
            ({}, "missing required field 'routes'"),
            ({"routes": {}}, "'routes' must be a list"),
            ({"routes": ["/a"]}, "routes[0] must be a dict"),
            ({"routes": [{"path": 1}]}, "routes[0].path must be a string"),
            ({"routes": [{"path": "/", "exact": "yes"}]}, "routes[0].exact must be a bool"),
            ({"routes": [{"path": "/", "methods": ["GET"]}]}, "unknown fields ['methods']"),
            ({"routes": [{"redirect": {}}]}, "missing required field 'to'"),
            ({"routes": [{"redirect": "/a"}]}, "routes[0].redirect must be a dict"),
            ({"routes": [{"redirect": {"to": 3}}]}, "to must be a string or a dict"),
            ({"routes": [{"redirect": {"to": {}}}]}, "missing required field 'pathname'"),
            (
                {"routes": [{"redirect": {"to": "/a"}, "path": "/b"}]},
                "unexpected fields ['path']",
            ),
            (
                {"routes": [{"path": "/a", "name": "x"}, {"path": "/b", "name": "x"}]},
                "duplicate route names: ['x']",
            ),
        ],
    )
    def test_malformed(self, data: Any, fragment: str) -> None:
        with pytest.raises(ConfigParseError) as exc_info:
            parse_route_config(data)
        assert fragment in str(exc_info.value)

    def test_too_many_routes(self) -> None:
        data = {"routes": [{"path": f"/{i}"} for i in range(MAX_ROUTES + 1)]}
        with pytest.raises(ConfigParseError, match="too many routes"):
            parse_route_config(data)

    def test_max_routes_accepted(self) -> None:
        data = {"routes": [{"path": f"/{i}"} for i in range(MAX_ROUTES)]}
        assert len(parse_route_config(data).entries) == MAX_ROUTES
