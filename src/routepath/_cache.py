"""Bounded memo tables for compiled patterns and generation templates.

Routing components call match_path() on every render with the same handful
of patterns. PatternCache keeps one CompiledPattern per
(options discriminator, pattern) so those calls never recompile:

    cache = PatternCache()
    compiled = cache.compile("/users/:id", MatchOptions(exact=True))
    assert cache.compile("/users/:id", MatchOptions(exact=True)) is compiled

Both caches share one policy:
- the entry count is bounded (CACHE_LIMIT by default) across all buckets
- nothing is ever evicted; past the bound misses compile without storing
- check, compile and insert happen under a lock, so one key never has
  two stored entries and the count never exceeds the bound
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from routepath._compiler import compile_pattern, compile_template

if TYPE_CHECKING:
    from collections.abc import Callable

    from routepath._compiler import CompiledPattern, PathTemplate
    from routepath._types import MatchOptions

logger = logging.getLogger("routepath.cache")

CACHE_LIMIT = 10_000

# Compiler signatures, injectable for tests
type PatternCompiler = Callable[..., CompiledPattern]
type TemplateCompiler = Callable[[str], PathTemplate]


class _BoundedCache[V]:
    """Shared bookkeeping: two-level store, entry count, lock, saturation log."""

    def __init__(self, limit: int) -> None:
        if limit < 0:
            msg = f"cache limit must be >= 0, got {limit}"
            raise ValueError(msg)
        self._limit = limit
        self._buckets: dict[str, dict[str, V]] = {}
        self._count = 0
        self._lock = threading.Lock()
        self._warned = False

    @property
    def limit(self) -> int:
        """Maximum number of stored entries across all buckets."""
        return self._limit

    @property
    def saturated(self) -> bool:
        """True once the bound is reached and misses are no longer stored."""
        return self._count >= self._limit

    def __len__(self) -> int:
        return self._count

    def clear(self) -> None:
        """Drop every stored entry and reset the count."""
        with self._lock:
            self._buckets.clear()
            self._count = 0
            self._warned = False

    def _lookup(self, bucket: str, key: str, factory: Callable[[], V]) -> V:
        with self._lock:
            entries = self._buckets.get(bucket)
            if entries is not None and key in entries:
                return entries[key]

            # Compiler errors propagate and nothing is stored.
            value = factory()

            if self._count < self._limit:
                self._buckets.setdefault(bucket, {})[key] = value
                self._count += 1
                logger.debug(
                    "cached %r in bucket %r (%d/%d)", key, bucket, self._count, self._limit
                )
            elif not self._warned:
                self._warned = True
                logger.warning(
                    "%s is full (%d entries); further patterns compile uncached",
                    type(self).__name__,
                    self._limit,
                )
            return value

    def _contains(self, bucket: str, key: str) -> bool:
        entries = self._buckets.get(bucket)
        return entries is not None and key in entries


class PatternCache(_BoundedCache["CompiledPattern"]):
    """Memo of CompiledPatterns keyed by (options discriminator, pattern).

    Construct one at application start and pass it to every matcher, or
    rely on default_cache() for the process-wide instance.
    """

    def __init__(
        self, limit: int = CACHE_LIMIT, compiler: PatternCompiler = compile_pattern
    ) -> None:
        super().__init__(limit)
        self._compiler = compiler

    def compile(self, pattern: str, options: MatchOptions) -> CompiledPattern:
        """Return the CompiledPattern for *pattern* under *options*.

        Only ``exact``, ``strict`` and ``sensitive`` are read from *options*;
        ``options.path`` is ignored.

        Raises:
            InvalidPatternError: If the pattern does not compile.
        """
        return self._lookup(
            options.cache_key,
            pattern,
            lambda: self._compiler(
                pattern,
                end=options.exact,
                strict=options.strict,
                sensitive=options.sensitive,
            ),
        )

    def __contains__(self, item: object) -> bool:
        match item:
            case (str() as pattern, options) if hasattr(options, "cache_key"):
                return self._contains(options.cache_key, pattern)
        return False


class TemplateCache(_BoundedCache["PathTemplate"]):
    """Memo of PathTemplates keyed by pattern.

    Separate from PatternCache: generation never consults or fills the
    match cache.
    """

    _BUCKET = ""

    def __init__(
        self, limit: int = CACHE_LIMIT, compiler: TemplateCompiler = compile_template
    ) -> None:
        super().__init__(limit)
        self._compiler = compiler

    def compile(self, pattern: str) -> PathTemplate:
        """Return the PathTemplate for *pattern*.

        Raises:
            InvalidPatternError: If the pattern does not compile.
        """
        return self._lookup(self._BUCKET, pattern, lambda: self._compiler(pattern))

    def __contains__(self, item: object) -> bool:
        return isinstance(item, str) and self._contains(self._BUCKET, item)


_default_pattern_cache: PatternCache | None = None
_default_template_cache: TemplateCache | None = None
_default_lock = threading.Lock()


def default_cache() -> PatternCache:
    """Return the process-wide PatternCache, creating it on first use."""
    global _default_pattern_cache
    with _default_lock:
        if _default_pattern_cache is None:
            _default_pattern_cache = PatternCache()
        return _default_pattern_cache


def default_template_cache() -> TemplateCache:
    """Return the process-wide TemplateCache, creating it on first use."""
    global _default_template_cache
    with _default_lock:
        if _default_template_cache is None:
            _default_template_cache = TemplateCache()
        return _default_template_cache
