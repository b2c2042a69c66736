"""
Domain models — Pydantic types for the generator.

    from genmakefile.core.models import GeneratorConfig, BuildRule, FilterExpression
"""

from genmakefile.core.models.config import (
    BROTLI,
    DEFAULT_EXTENSIONS,
    ZOPFLI,
    CompressorSpec,
    GeneratorConfig,
)
from genmakefile.core.models.rule import BuildRule, FilterExpression

__all__ = [
    "BROTLI",
    "BuildRule",
    "CompressorSpec",
    "DEFAULT_EXTENSIONS",
    "FilterExpression",
    "GeneratorConfig",
    "ZOPFLI",
]
