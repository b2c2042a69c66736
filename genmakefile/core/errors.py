"""
Error hierarchy — everything the generator raises on purpose.

The CLI catches ``GenMakefileError`` and turns it into a message on
stderr plus exit code 1. Anything else is a bug and propagates.
"""

from __future__ import annotations


class GenMakefileError(Exception):
    """Base class for all expected generator failures."""


class UnsupportedPathError(GenMakefileError):
    """A discovered path cannot be written into a Makefile rule.

    The rule grammar has no escape for a newline, and an ``=`` in a
    rule line turns it into a variable assignment.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unsupported path {path!r}: {reason}")


class TraversalError(GenMakefileError):
    """The traversal tool could not be run or reported a failure."""

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr
        super().__init__(f"{message}: {stderr}" if stderr else message)
