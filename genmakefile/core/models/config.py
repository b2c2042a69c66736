"""
Generator configuration — what to compress and how.

Loaded from genmakefile.yml (optional) and overridden by CLI flags.
The defaults reproduce the classic zopfli + brotli precompression
Makefile exactly.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_EXTENSIONS: tuple[str, ...] = ("html", "css", "js", "svg", "xml", "json")

INPUT_PLACEHOLDER = "{input}"
OUTPUT_PLACEHOLDER = "{output}"

# Characters find(1) -name would interpret, plus anything that makes no
# sense inside a file extension.
_BAD_EXTENSION_CHARS = re.compile(r"[*?\[\]\\/\s]")

# The aggregate target is written verbatim, so keep it a plain make word.
_TARGET_NAME = re.compile(r"^[A-Za-z0-9_.-]+$")


class CompressorSpec(BaseModel):
    """How one derived artifact is produced from its source file.

    Attributes:
        suffix:  Appended to the source path to form the target (``gz``).
        program: Executable name, looked up by the shell at make time.
        args:    Argument template. ``{input}`` is the source path and
                 ``{output}`` the target path; both may be embedded in a
                 larger word (``--out={output}``).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    suffix: str
    program: str
    args: tuple[str, ...]

    @field_validator("suffix")
    @classmethod
    def _check_suffix(cls, v: str) -> str:
        v = v.lstrip(".")
        if not v or _BAD_EXTENSION_CHARS.search(v):
            raise ValueError(f"invalid artifact suffix: {v!r}")
        return v

    @field_validator("program")
    @classmethod
    def _check_program(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("program must not be empty")
        return v

    @field_validator("args")
    @classmethod
    def _check_args(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not any(INPUT_PLACEHOLDER in a for a in v):
            raise ValueError(f"args must reference {INPUT_PLACEHOLDER}")
        return v


ZOPFLI = CompressorSpec(
    suffix="gz",
    program="zopfli",
    args=("--i127", INPUT_PLACEHOLDER),
)

BROTLI = CompressorSpec(
    suffix="br",
    program="brotli",
    args=(
        "--quality", "15",
        "--input", INPUT_PLACEHOLDER,
        "--output", OUTPUT_PLACEHOLDER,
    ),
)


class GeneratorConfig(BaseModel):
    """Resolved settings for one generation run.

    Attributes:
        extensions:       Compressible file extensions, without the dot.
        aggregate_target: Name of the phony default goal.
        gzip:             General-purpose compressor (``.gz`` artifact).
        brotli:           Modern compressor (``.br`` artifact).
        on_unsupported:   ``error`` aborts on a path the Makefile cannot
                          express; ``skip`` logs a warning and leaves it out.
    """

    model_config = ConfigDict(extra="forbid")

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    aggregate_target: str = "all"
    gzip: CompressorSpec = Field(default=ZOPFLI)
    brotli: CompressorSpec = Field(default=BROTLI)
    on_unsupported: Literal["error", "skip"] = "error"

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, v: object) -> object:
        if isinstance(v, str):
            v = [part for part in re.split(r"[,\s]+", v) if part]
        if not isinstance(v, (list, tuple)):
            return v

        seen: list[str] = []
        for ext in v:
            if not isinstance(ext, str):
                raise ValueError(f"extension must be a string, got {type(ext).__name__}")
            ext = ext[1:] if ext.startswith(".") else ext
            if not ext:
                raise ValueError("empty extension")
            if _BAD_EXTENSION_CHARS.search(ext):
                raise ValueError(f"invalid extension: {ext!r}")
            if ext not in seen:
                seen.append(ext)
        return tuple(seen)

    @field_validator("aggregate_target")
    @classmethod
    def _check_target(cls, v: str) -> str:
        if not _TARGET_NAME.match(v):
            raise ValueError(f"invalid aggregate target name: {v!r}")
        return v

    def compressors(self) -> tuple[CompressorSpec, CompressorSpec]:
        """Compressors in emission order: general-purpose, then modern."""
        return self.gzip, self.brotli
