"""genmakefile — Makefile generator for precompressed static assets."""

__version__ = "0.1.0"
