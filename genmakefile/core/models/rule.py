"""
Build rule and filter models — the generator's intermediate values.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FilterExpression(BaseModel):
    """A find(1) predicate selecting regular files by extension.

    ``args`` is an argument vector, handed to find as a list. Nothing is
    ever interpolated into a shell string, so no glob suppression is
    needed.
    """

    model_config = ConfigDict(frozen=True)

    extensions: tuple[str, ...]
    args: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        """True when the expression can match nothing."""
        return not self.extensions

    def patterns(self) -> tuple[str, ...]:
        """The basename globs, one per extension."""
        return tuple(f"*.{ext}" for ext in self.extensions)


class BuildRule(BaseModel):
    """One Makefile rule: a target, its single prerequisite, one command.

    Attributes:
        target:       Rule token of the derived artifact.
        prerequisite: Rule token of the source file.
        command:      Shell words, already escaped as command tokens.
        source:       The raw source path (never written out).
    """

    model_config = ConfigDict(frozen=True)

    target: str
    prerequisite: str
    command: tuple[str, ...]
    source: str = ""
