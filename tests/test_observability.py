"""
Tests for logging setup.
"""

import logging
import sys

import pytest

from genmakefile.core.observability.logging_config import _parse_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("INFO") == logging.INFO

    def test_unknown_and_empty(self):
        assert _parse_level("loud") == logging.WARNING
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("") == logging.WARNING


class TestSetupLogging:
    def test_console_on_stderr_only(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "gen.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("genmakefile.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert "hello file" in log_file.read_text()

        for h in root.handlers:
            if isinstance(h, logging.FileHandler):
                h.close()
