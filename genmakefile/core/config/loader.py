"""
Configuration loader — reads genmakefile.yml into a GeneratorConfig.

The file is optional. Without one the built-in defaults apply, which
reproduce the classic zopfli + brotli Makefile. Example:

    extensions: [html, css, js, svg, xml, json, txt]
    aggregate_target: all
    on_unsupported: skip
    brotli:
      suffix: br
      program: brotli
      args: [--quality, "11", --input, "{input}", --output, "{output}"]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from genmakefile.core.errors import GenMakefileError
from genmakefile.core.models.config import GeneratorConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "genmakefile.yml"


class ConfigError(GenMakefileError):
    """Raised when configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for genmakefile.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to genmakefile.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, start_dir: Path | None = None) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit config file. Must exist.
        start_dir: Where to start the upward search when ``path`` is None.

    Returns:
        Validated GeneratorConfig (defaults if no file was found).

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        path = find_config_file(start_dir)
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return GeneratorConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    config = _validate(data, source=str(path))
    logger.info("Loaded config from %s (%d extensions)", path, len(config.extensions))
    return config


def apply_overrides(config: GeneratorConfig, **overrides: Any) -> GeneratorConfig:
    """Return ``config`` with non-None ``overrides`` applied and revalidated.

    Used for CLI flags, which take precedence over the config file.
    """
    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return config
    return _validate({**config.model_dump(), **updates}, source="command line")


def _validate(data: dict[str, Any], source: str) -> GeneratorConfig:
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration ({source}): {e}") from e
