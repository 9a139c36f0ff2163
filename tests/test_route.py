"""Tests for Route, Redirect, Location and switch."""

import pytest

from routepath import (
    Location,
    MatchOptions,
    MatchResult,
    MissingParameterError,
    PatternCache,
    Redirect,
    Route,
    switch,
)


def _match(path: str, url: str, **params: str) -> MatchResult:
    return MatchResult(path=path, url=url, is_exact=True, params=params)


class TestRoute:
    def test_options(self) -> None:
        route = Route("/users/:id", exact=True, sensitive=True)
        assert route.options == MatchOptions(path="/users/:id", exact=True, sensitive=True)

    def test_compute_match(self, cache: PatternCache) -> None:
        result = Route("/users/:id").compute_match("/users/3", cache=cache)
        assert result is not None
        assert result.params == {"id": "3"}

    def test_computed_match_wins(self, cache: PatternCache) -> None:
        computed = _match("/x", "/x")
        assert Route("/users/:id").compute_match("/users/3", None, computed, cache=cache) is computed

    def test_pathless_route_takes_parent(self, cache: PatternCache) -> None:
        parent = _match("/users/:id", "/users/3", id="3")
        assert Route().compute_match("/users/3/anything", parent, cache=cache) is parent

    def test_nested_routes(self, cache: PatternCache) -> None:
        parent = Route("/users/:id").compute_match("/users/3/posts/9", cache=cache)
        child = Route("/users/:id/posts/:post").compute_match("/users/3/posts/9", parent, cache=cache)
        assert child is not None
        assert child.params == {"id": "3", "post": "9"}

    def test_no_match(self, cache: PatternCache) -> None:
        assert Route("/users", exact=True).compute_match("/users/3", cache=cache) is None


class TestRedirect:
    def test_without_match_returns_target(self) -> None:
        assert Redirect(to="/users/:id").compute_to(None) == "/users/:id"

    def test_string_target_generated(self, template_cache) -> None:
        redirect = Redirect(to="/users/profile/:id", from_path="/users/:id")
        target = redirect.compute_to(_match("/users/:id", "/users/5", id="5"), cache=template_cache)
        assert target == "/users/profile/5"

    def test_location_target_keeps_other_fields(self, template_cache) -> None:
        to = Location(pathname="/login/:id", search="?next=1", hash="#top", state={"a": 1})
        target = Redirect(to=to).compute_to(_match("/u/:id", "/u/5", id="5"), cache=template_cache)
        assert target == Location(
            pathname="/login/5", search="?next=1", hash="#top", state={"a": 1}
        )

    def test_missing_parameter_surfaces(self, template_cache) -> None:
        redirect = Redirect(to="/users/:id")
        with pytest.raises(MissingParameterError):
            redirect.compute_to(_match("/", "/"), cache=template_cache)

    def test_options_from_from_path(self) -> None:
        redirect = Redirect(to="/b", from_path="/a", exact=True)
        assert redirect.options == MatchOptions(path="/a", exact=True)
        assert redirect.path == "/a"


class TestSwitch:
    def test_first_match_wins(self, cache: PatternCache) -> None:
        first = Route("/users/:id")
        second = Route("/users/:id/edit")
        hit = switch([first, second], "/users/1/edit", cache=cache)
        assert hit is not None
        assert hit[0] is first

    def test_exact_route_skipped(self, cache: PatternCache) -> None:
        first = Route("/users", exact=True)
        second = Route("/users/:id")
        hit = switch([first, second], "/users/1", cache=cache)
        assert hit is not None
        entry, match = hit
        assert entry is second
        assert match.params == {"id": "1"}

    def test_no_match(self, cache: PatternCache) -> None:
        assert switch([Route("/a"), Route("/b")], "/c", cache=cache) is None

    def test_empty(self, cache: PatternCache) -> None:
        assert switch([], "/c", cache=cache) is None

    def test_pathless_entry_takes_parent(self, cache: PatternCache) -> None:
        parent = _match("/", "/")
        fallback = Route()
        hit = switch([Route("/a"), fallback], "/c", parent, cache=cache)
        assert hit == (fallback, parent)

    def test_pathless_entry_without_parent_skipped(self, cache: PatternCache) -> None:
        target = Route("/c")
        hit = switch([Route(), target], "/c", cache=cache)
        assert hit is not None
        assert hit[0] is target

    def test_redirect_matched_by_from_path(self, cache: PatternCache) -> None:
        redirect = Redirect(to="/users/profile/:id", from_path="/users/:id")
        hit = switch([Route("/about"), redirect], "/users/7", cache=cache)
        assert hit is not None
        entry, match = hit
        assert entry is redirect
        assert isinstance(entry, Redirect)
        assert entry.compute_to(match) == "/users/profile/7"

    def test_later_entries_not_consulted(self) -> None:
        # The broken pattern would raise InvalidPatternError if compiled.
        hit = switch([Route("/a"), Route("/:id(\\d{2,1})")], "/a", cache=PatternCache())
        assert hit is not None
