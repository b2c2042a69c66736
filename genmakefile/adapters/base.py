"""
Traversal base — the contract between the generator and path discovery.

The generator never walks the filesystem itself. It hands a
``FilterExpression`` to a ``Traversal`` and gets back paths relative to
the traversal root. ``FindTraversal`` delegates to find(1);
``StaticTraversal`` serves a fixed list for tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from genmakefile.core.models.rule import FilterExpression


class Traversal(ABC):
    """Abstract base class for path discovery.

    Implementations return paths relative to their root, without a
    leading ``./``, sorted, so two runs over an unchanged tree agree.
    They raise ``TraversalError`` when discovery itself fails.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The traversal identifier (e.g., 'find', 'static')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying tool can be run. Never raises."""

    @abstractmethod
    def walk(self, expression: FilterExpression) -> list[str]:
        """Return every path under the root matching ``expression``."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
