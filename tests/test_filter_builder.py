"""
Tests for the find(1) filter builder.

Pure unit tests: extension tuple in → FilterExpression out.
"""

from genmakefile.core.models.config import DEFAULT_EXTENSIONS
from genmakefile.core.services.filter_builder import build_filter


class TestBuildFilter:
    def test_single_extension(self):
        expr = build_filter(["html"])
        assert expr.args == ("-type", "f", "(", "-name", "*.html", ")")
        assert not expr.is_empty

    def test_or_between_clauses(self):
        expr = build_filter(["html", "css", "js"])
        assert expr.args == (
            "-type", "f", "(",
            "-name", "*.html", "-o",
            "-name", "*.css", "-o",
            "-name", "*.js",
            ")",
        )

    def test_order_preserved(self):
        expr = build_filter(DEFAULT_EXTENSIONS)
        names = [a for a in expr.args if a.startswith("*.")]
        assert names == [f"*.{e}" for e in DEFAULT_EXTENSIONS]

    def test_no_trailing_or(self):
        expr = build_filter(DEFAULT_EXTENSIONS)
        assert expr.args[-2] != "-o"
        assert expr.args.count("-o") == len(DEFAULT_EXTENSIONS) - 1

    def test_patterns_are_literal_args(self):
        """Globs are separate argv entries, never joined into a string."""
        expr = build_filter(["svg"])
        assert "*.svg" in expr.args
        assert all(" " not in a for a in expr.args)

    def test_empty_matches_nothing(self):
        expr = build_filter([])
        assert expr.is_empty
        assert expr.args == ("-type", "f", "-false")
        assert expr.patterns() == ()

    def test_patterns(self):
        assert build_filter(["xml", "json"]).patterns() == ("*.xml", "*.json")
