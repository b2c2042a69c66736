"""
Static traversal — an in-memory stand-in for find(1).

Serves a fixed list of paths and applies the same basename glob
semantics as ``find -name``, so generator behaviour can be tested
without touching the filesystem.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable
from fnmatch import fnmatchcase

from genmakefile.adapters.base import Traversal
from genmakefile.core.models.rule import FilterExpression


class StaticTraversal(Traversal):
    """Traversal over a predefined set of relative paths."""

    def __init__(self, paths: Iterable[str] = (), available: bool = True):
        self._paths = list(paths)
        self._available = available
        self._call_count = 0

    @property
    def name(self) -> str:
        return "static"

    @property
    def call_count(self) -> int:
        """Number of times walk has been called."""
        return self._call_count

    def is_available(self) -> bool:
        return self._available

    def walk(self, expression: FilterExpression) -> list[str]:
        self._call_count += 1
        if expression.is_empty:
            return []

        patterns = expression.patterns()
        return sorted(
            p for p in self._paths
            if any(fnmatchcase(posixpath.basename(p), pat) for pat in patterns)
        )
