"""Path generator: pattern + params -> concrete path.

The inverse of match_path(): for simple named segments,
``match_path(generate_path(p, params), MatchOptions(path=p, exact=True))``
recovers *params*.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from routepath._cache import TemplateCache, default_template_cache

if TYPE_CHECKING:
    from routepath._types import Params


def generate_path(
    pattern: str = "/",
    params: Params | None = None,
    *,
    cache: TemplateCache | None = None,
) -> str:
    """Substitute *params* into *pattern*.

    >>> generate_path("/users/:id", {"id": 7})
    '/users/7'

    Raises:
        MissingParameterError: A required parameter is absent from *params*.
        InvalidParameterError: A value fails its segment constraint.
        InvalidPatternError: If the pattern does not compile.
    """
    if pattern == "/":
        return pattern
    template = (cache if cache is not None else default_template_cache()).compile(pattern)
    return template.render(params)
