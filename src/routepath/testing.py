"""Test utilities for routepath.

Compilers that record what they were asked to compile, for asserting
cache behavior without reaching into cache internals:

>>> from routepath import MatchOptions, PatternCache
>>> from routepath.testing import CountingCompiler
>>> compiler = CountingCompiler()
>>> cache = PatternCache(compiler=compiler)
>>> _ = cache.compile("/users/:id", MatchOptions())
>>> _ = cache.compile("/users/:id", MatchOptions())
>>> compiler.calls
1
"""

from __future__ import annotations

import threading
from collections import Counter
from typing import TYPE_CHECKING

from routepath._compiler import compile_pattern, compile_template

if TYPE_CHECKING:
    from routepath._compiler import CompiledPattern, PathTemplate


class CountingCompiler:
    """A PatternCache compiler that counts compilations per (pattern, flags)."""

    def __init__(self) -> None:
        self.counts: Counter[tuple[str, bool, bool, bool]] = Counter()
        self._lock = threading.Lock()

    @property
    def calls(self) -> int:
        return sum(self.counts.values())

    def __call__(
        self, pattern: str, *, end: bool, strict: bool, sensitive: bool
    ) -> CompiledPattern:
        with self._lock:
            self.counts[(pattern, end, strict, sensitive)] += 1
        return compile_pattern(pattern, end=end, strict=strict, sensitive=sensitive)


class CountingTemplateCompiler:
    """A TemplateCache compiler that counts compilations per pattern."""

    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    @property
    def calls(self) -> int:
        return sum(self.counts.values())

    def __call__(self, pattern: str) -> PathTemplate:
        self.counts[pattern] += 1
        return compile_template(pattern)
