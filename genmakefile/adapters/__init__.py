"""Adapters — path discovery backends.

Public re-exports for convenient access.
"""

from genmakefile.adapters.base import Traversal
from genmakefile.adapters.mock import StaticTraversal
from genmakefile.adapters.shell.find import FindTraversal

__all__ = [
    "FindTraversal",
    "StaticTraversal",
    "Traversal",
]
