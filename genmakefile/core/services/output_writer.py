"""
Output writer — stream generated blocks to stdout.

Each block (the aggregate line, or one rule) is written whole and
flushed, so a consumer that stops reading never sees half a rule.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable
from typing import TextIO

logger = logging.getLogger(__name__)


class OutputWriter:
    """Write text blocks to a stream, one flush per block."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.blocks_written = 0
        self.broken_pipe = False

    def write_all(self, blocks: Iterable[str]) -> int:
        """Write every block; return how many were written.

        A closed pipe (``genmakefile | head``) ends the stream quietly.
        Errors raised while producing the blocks propagate unchanged.
        """
        for block in blocks:
            try:
                self.stream.write(block)
                self.stream.flush()
            except BrokenPipeError:
                self._on_broken_pipe()
                break
            self.blocks_written += 1

        logger.debug("Wrote %d block(s)", self.blocks_written)
        return self.blocks_written

    def _on_broken_pipe(self) -> None:
        logger.debug("Output pipe closed after %d block(s)", self.blocks_written)
        self.broken_pipe = True
        # Point stdout at devnull so the interpreter's final flush
        # does not raise a second time.
        if self.stream is sys.stdout:
            try:
                fd = sys.stdout.fileno()
            except (OSError, ValueError):
                return
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, fd)
