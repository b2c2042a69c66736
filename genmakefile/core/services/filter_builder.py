"""
Filter builder — extension set → find(1) predicate.

    ("html", "css")  →  -type f ( -name *.html -o -name *.css )

The expression is an argument vector, never a shell string: the globs
reach find untouched, with no shell in between to expand them.
"""

from __future__ import annotations

from collections.abc import Iterable

from genmakefile.core.models.rule import FilterExpression


def build_filter(extensions: Iterable[str]) -> FilterExpression:
    """Build the predicate matching regular files with any of ``extensions``.

    Extensions are expected to be validated already (see
    ``GeneratorConfig``). An empty set yields an expression that matches
    nothing (``-false``); callers can check ``is_empty`` and skip the
    traversal entirely.
    """
    exts = tuple(extensions)

    if not exts:
        return FilterExpression(extensions=(), args=("-type", "f", "-false"))

    clauses: list[str] = []
    for ext in exts:
        if clauses:
            clauses.append("-o")
        clauses.extend(("-name", f"*.{ext}"))

    return FilterExpression(
        extensions=exts,
        args=("-type", "f", "(", *clauses, ")"),
    )
