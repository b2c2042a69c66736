"""
find(1) traversal — discover candidate files with the real find tool.

find is invoked with an argument list and ``-print0``, so paths with
spaces, quotes or glob characters come back intact, and a path with an
embedded newline is reported as such (and later rejected by the
escaper) instead of being split in two.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from genmakefile.adapters.base import Traversal
from genmakefile.core.errors import TraversalError
from genmakefile.core.models.rule import FilterExpression

logger = logging.getLogger(__name__)

FIND_ENV_VAR = "GENMAKEFILE_FIND"


class FindTraversal(Traversal):
    """Run ``find . <expression> -print0`` inside ``root``.

    Args:
        root: Directory to traverse. Paths are reported relative to it,
              which is also where make must run.
        find_program: find executable (default: $GENMAKEFILE_FIND or "find").
        timeout: Seconds before the traversal is abandoned.
    """

    def __init__(
        self,
        root: str | Path = ".",
        find_program: str | None = None,
        timeout: int = 300,
    ):
        self.root = Path(root)
        self.find_program = find_program or os.environ.get(FIND_ENV_VAR, "find")
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "find"

    def is_available(self) -> bool:
        return shutil.which(self.find_program) is not None

    def command(self, expression: FilterExpression) -> list[str]:
        """The exact argument vector passed to subprocess."""
        return [self.find_program, ".", *expression.args, "-print0"]

    def walk(self, expression: FilterExpression) -> list[str]:
        if not self.root.is_dir():
            raise TraversalError(f"Not a directory: {self.root}")

        cmd = self.command(expression)
        # Byte-wise, locale independent -name matching.
        env = {**os.environ, "LC_ALL": "C"}

        logger.debug("Executing: %s (cwd=%s)", cmd, self.root)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                cwd=self.root,
                env=env,
                capture_output=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise TraversalError(f"Cannot run {self.find_program!r}", str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise TraversalError(f"find timed out after {self.timeout}s") from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stderr = os.fsdecode(result.stderr).strip()

        if result.returncode != 0:
            raise TraversalError(
                f"find exited with code {result.returncode}",
                stderr,
            )

        paths = sorted(
            _strip_dot(os.fsdecode(raw))
            for raw in result.stdout.split(b"\0")
            if raw
        )
        logger.info("find matched %d file(s) in %dms", len(paths), elapsed_ms)
        return paths


def _strip_dot(path: str) -> str:
    return path[2:] if path.startswith("./") else path
