"""
genmakefile — CLI entrypoint.

Usage:
    genmakefile | make -f - -j8
    genmakefile generate -C public --ext html --ext css
    genmakefile filter
    genmakefile config show
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click
import yaml

from genmakefile import __version__
from genmakefile.core.errors import GenMakefileError
from genmakefile.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    LOG_LEVEL_ENV,
    setup_logging,
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="genmakefile")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to genmakefile.yml (default: search upward).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Generate a Makefile that precompresses static assets.

    Every html/css/js/svg/xml/json file gets a .gz (zopfli) and a .br
    (brotli) rule. Without a subcommand, runs `generate` on the current
    directory:

        genmakefile | make -f - -j8
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(generate)


def _load(ctx: click.Context, start_dir: Path | None = None, **overrides):
    """Resolve configuration: CLI overrides > config file > defaults."""
    from genmakefile.core.config.loader import apply_overrides, load_config

    config = load_config(ctx.obj.get("config_path"), start_dir=start_dir)
    return apply_overrides(config, **overrides)


def _fail(err: GenMakefileError) -> None:
    click.secho(f"genmakefile: {err}", fg="red", err=True)
    sys.exit(1)


# ── generate ────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--directory",
    "-C",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Tree to scan. Run make from the same directory.",
)
@click.option(
    "--ext",
    "-e",
    "extensions",
    multiple=True,
    help="Compressible extension (repeatable). Replaces the configured set.",
)
@click.option("--aggregate-target", default=None, help="Name of the default goal.")
@click.option(
    "--skip-unsupported",
    is_flag=True,
    help="Warn about and skip paths a Makefile cannot express, instead of failing.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    directory: str,
    extensions: tuple[str, ...],
    aggregate_target: str | None,
    skip_unsupported: bool,
) -> None:
    """Write the Makefile to stdout."""
    from genmakefile.adapters.shell.find import FindTraversal
    from genmakefile.core.services.output_writer import OutputWriter
    from genmakefile.core.services.rule_generator import RuleGenerator

    root = Path(directory)
    try:
        config = _load(
            ctx,
            start_dir=root,
            extensions=list(extensions) or None,
            aggregate_target=aggregate_target,
            on_unsupported="skip" if skip_unsupported else None,
        )
        generator = RuleGenerator(FindTraversal(root), config)

        stdout = sys.stdout
        try:
            # Undecodable filename bytes go back out exactly as found.
            stdout.reconfigure(errors="surrogateescape")
        except AttributeError:
            pass

        OutputWriter(stdout).write_all(generator.generate())
    except GenMakefileError as e:
        _fail(e)


# ── filter ──────────────────────────────────────────────────────


@cli.command("filter")
@click.option("--ext", "-e", "extensions", multiple=True, help="Extension (repeatable).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show_filter(ctx: click.Context, extensions: tuple[str, ...], as_json: bool) -> None:
    """Show the find command used to discover compressible files."""
    from genmakefile.adapters.shell.find import FindTraversal
    from genmakefile.core.services.escaping import shell_escape
    from genmakefile.core.services.filter_builder import build_filter

    try:
        config = _load(ctx, extensions=list(extensions) or None)
    except GenMakefileError as e:
        _fail(e)
        return

    expression = build_filter(config.extensions)
    cmd = FindTraversal().command(expression)

    if as_json:
        click.echo(json.dumps({
            "extensions": list(expression.extensions),
            "args": list(expression.args),
            "command": cmd,
        }, indent=2))
        return

    click.echo(" ".join(shell_escape(word) for word in cmd))


# ── config ──────────────────────────────────────────────────────


@cli.group()
def config() -> None:
    """Inspect generator configuration."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Print the resolved configuration."""
    try:
        cfg = _load(ctx)
    except GenMakefileError as e:
        _fail(e)
        return

    data = cfg.model_dump(mode="json")
    if as_json:
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)


@config.command("check")
@click.pass_context
def config_check(ctx: click.Context) -> None:
    """Validate the configuration file."""
    from genmakefile.core.config.loader import find_config_file

    path = ctx.obj.get("config_path") or find_config_file()
    try:
        cfg = _load(ctx)
    except GenMakefileError as e:
        _fail(e)
        return

    source = str(path) if path else "built-in defaults"
    click.secho(f"✅ Configuration valid ({source})", fg="green")
    click.echo(f"   Extensions: {', '.join(cfg.extensions) or '(none)'}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
