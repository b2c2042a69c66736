"""
Rule generator — traversal results → Makefile text.

Output layout:

    all: a.html.gz a.html.br css/site.css.gz css/site.css.br

    a.html.gz: a.html
    	zopfli --i127 a.html

    a.html.br: a.html
    	brotli --quality 15 --input a.html --output a.html.br

    ...

Generation runs in two phases, each with its own traversal: the
aggregate target first, then two independent rules per file. No rule
depends on another derived artifact, so ``make -j`` may run every
command concurrently.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from genmakefile.adapters.base import Traversal
from genmakefile.core.errors import TraversalError, UnsupportedPathError
from genmakefile.core.models.config import (
    INPUT_PLACEHOLDER,
    OUTPUT_PLACEHOLDER,
    CompressorSpec,
    GeneratorConfig,
)
from genmakefile.core.models.rule import BuildRule, FilterExpression
from genmakefile.core.services.escaping import (
    check_rule_path,
    shell_escape,
    to_command_token,
    to_recipe_line,
    to_rule_token,
)
from genmakefile.core.services.filter_builder import build_filter

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(
    "(" + re.escape(INPUT_PLACEHOLDER) + "|" + re.escape(OUTPUT_PLACEHOLDER) + ")"
)


class RuleGenerator:
    """Generate a precompression Makefile from a traversal.

    Args:
        traversal: Where paths come from.
        config: Extensions, compressors and unsupported-path policy.
    """

    def __init__(self, traversal: Traversal, config: GeneratorConfig | None = None):
        self.traversal = traversal
        self.config = config or GeneratorConfig()
        self.filter: FilterExpression = build_filter(self.config.extensions)
        self.skipped: list[UnsupportedPathError] = []

    # ── Public API ──────────────────────────────────────────────

    def generate(self) -> Iterator[str]:
        """Yield the Makefile, one complete block at a time.

        The first block is the aggregate target line. Phase 1 finishes
        its traversal before yielding it, so an unavailable traversal tool
        or an unsupported path (in ``error`` mode) aborts the run before
        any output exists.
        """
        self.skipped = []
        if not self.filter.is_empty and not self.traversal.is_available():
            raise TraversalError(f"Traversal tool not available: {self.traversal!r}")

        yield self.aggregate_target()

        count = 0
        for path in self._discover():
            for rule in self.build_rules(path):
                yield render_rule(rule)
                count += 1

        logger.info("Generated %d rule(s)", count)

    def aggregate_target(self) -> str:
        """Phase 1: the phony default goal depending on every artifact."""
        deps: list[str] = []
        for path in self._discover():
            token = to_rule_token(path)
            for spec in self.config.compressors():
                deps.append(f"{token}.{spec.suffix}")

        head = f"{self.config.aggregate_target}:"
        return f"{head} {' '.join(deps)}\n\n" if deps else f"{head}\n\n"

    def build_rules(self, path: str) -> list[BuildRule]:
        """Phase 2 for one path: one rule per compressor."""
        rule_token = to_rule_token(path)
        # A leading "-" would reach the compressor as an option.
        command_token = to_command_token("./" + path if path.startswith("-") else path)

        rules = []
        for spec in self.config.compressors():
            rules.append(
                BuildRule(
                    target=f"{rule_token}.{spec.suffix}",
                    prerequisite=rule_token,
                    command=_command_words(spec, command_token),
                    source=path,
                )
            )
        return rules

    # ── Internal ────────────────────────────────────────────────

    def _discover(self) -> Iterator[str]:
        """Traverse once, applying the unsupported-path policy."""
        if self.filter.is_empty:
            logger.debug("Empty extension set, skipping traversal")
            return

        for path in self.traversal.walk(self.filter):
            try:
                check_rule_path(path)
            except UnsupportedPathError as e:
                if self.config.on_unsupported == "error":
                    raise
                if path not in {s.path for s in self.skipped}:
                    logger.warning("Skipping %s", e)
                    self.skipped.append(e)
                continue
            yield path


def _command_words(spec: CompressorSpec, command_token: str) -> tuple[str, ...]:
    """Expand a compressor's argument template for one source file.

    Placeholders are replaced with escaped tokens; the literal parts of
    the template are escaped separately.
    """
    output_token = f"{command_token}.{spec.suffix}"
    words = [shell_escape(spec.program)]

    for arg in spec.args:
        parts = []
        for piece in _PLACEHOLDER.split(arg):
            if piece == INPUT_PLACEHOLDER:
                parts.append(command_token)
            elif piece == OUTPUT_PLACEHOLDER:
                parts.append(output_token)
            elif piece:
                parts.append(shell_escape(piece))
        words.append("".join(parts) or "''")

    return tuple(words)


def render_rule(rule: BuildRule) -> str:
    """Serialize one rule: target line, recipe line, blank separator."""
    return (
        f"{rule.target}: {rule.prerequisite}\n"
        f"{to_recipe_line(rule.command)}\n"
        "\n"
    )
