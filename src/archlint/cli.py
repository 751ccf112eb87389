"""Archlint CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from archlint import __version__
from archlint.config import ADR_FORMATS, CONFIG_FILENAME, MICROTASK_FORMATS

logger = logging.getLogger(__name__)


def _write_output(output: str, destination: Path | None, *, quiet: bool) -> None:
    """Echo *output*, or write it to *destination* when given."""
    if destination is None:
        if output:
            click.echo(output.rstrip("\n"))
        return
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(output, encoding="utf-8")
    if not quiet:
        click.echo(f"Report written to: {destination}")


@click.group()
@click.version_option(version=__version__, prog_name="archlint")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output (debug logging).")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Config file (default: ./{CONFIG_FILENAME} if present).",
)
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool, config_path: Path | None) -> None:
    """Archlint - ADR policy validator and micro-task line linter."""
    from archlint.config import ConfigError, load_config

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    try:
        ctx.obj["config"] = load_config(config_path or Path.cwd() / CONFIG_FILENAME)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)


@main.command()
@click.argument("target", type=click.Path(path_type=Path), default=".", required=False)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit 1 on warnings as well as errors.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(sorted(ADR_FORMATS)),
    default=None,
    help="Output format (default: rich).",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the report to a file instead of stdout.",
)
@click.pass_context
def adr(
    ctx: click.Context,
    target: Path,
    *,
    strict: bool,
    fmt: str | None,
    output: Path | None,
) -> None:
    """Validate architecture decision records.

    TARGET is an ADR Markdown file or a directory of them (default: current
    directory).  Exit codes: 0 = no errors, 1 = errors found (or warnings
    with --strict) or TARGET missing, 2 = configuration error.
    """
    from archlint.adr.reporters import format_json, format_junit, format_rich
    from archlint.adr.validator import should_fail, validate_files
    from archlint.discovery import TargetNotFoundError, collect_adr_files

    settings = ctx.obj["config"].adr
    quiet: bool = ctx.obj["quiet"]
    strict = strict or settings.strict
    fmt = fmt or settings.format or "rich"

    try:
        files = collect_adr_files(target)
    except TargetNotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if not files:
        if not quiet:
            click.echo(f"No .md files found in: {target}", err=True)
        return

    logger.debug("Validating %d ADR file(s) from %s", len(files), target)
    try:
        results = validate_files(files)
    except OSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if fmt == "json":
        report = format_json(results)
    elif fmt == "junit":
        report = format_junit(results)
    else:
        report = format_rich(results, color=output is None and sys.stdout.isatty())
    _write_output(report, output, quiet=quiet)

    if should_fail(results, strict=strict):
        sys.exit(1)


@main.command()
@click.option(
    "--task",
    type=click.Path(path_type=Path),
    default=None,
    help="Validate a single file (or a directory, see --recursive).",
)
@click.option(
    "--dir",
    "directory",
    type=click.Path(path_type=Path),
    default=None,
    help="Validate all supported files in a directory tree.",
)
@click.option(
    "--max-lines",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum effective lines per file (default: 50).",
)
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    default=False,
    help="Descend into subdirectories of a --task directory.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(sorted(MICROTASK_FORMATS)),
    default=None,
    help="Output format (default: rich).",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the report to a file instead of stdout.",
)
@click.pass_context
def microtask(
    ctx: click.Context,
    *,
    task: Path | None,
    directory: Path | None,
    max_lines: int | None,
    recursive: bool,
    fmt: str | None,
    output: Path | None,
) -> None:
    """Check that source files stay within the effective line limit.

    Effective lines exclude blank, comment, and import lines.  Supported
    languages: TypeScript (.ts, .tsx), JavaScript (.js, .mjs, .cjs), Python
    (.py).  Exit codes: 0 = all files within the limit, 1 = a file exceeds
    the limit or the target is missing, 2 = configuration error.
    """
    from archlint.discovery import TargetNotFoundError, collect_source_files
    from archlint.microtask.linter import has_violations, lint_files
    from archlint.microtask.reporters import format_json, format_rich

    settings = ctx.obj["config"].microtask
    quiet: bool = ctx.obj["quiet"]

    target = task if task is not None else directory
    if target is None:
        click.echo("Error: provide --task <file> or --dir <directory>", err=True)
        sys.exit(1)

    limit = max_lines if max_lines is not None else settings.max_lines
    recursive = recursive or settings.recursive
    fmt = fmt or settings.format or "rich"

    try:
        files = collect_source_files(target, recursive=recursive or directory is not None)
    except TargetNotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if not files:
        if not quiet:
            click.echo(f"No supported files found in: {target}", err=True)
        return

    logger.debug("Linting %d file(s) from %s, max %d lines", len(files), target, limit)
    try:
        results = lint_files(files, max_lines=limit)
    except OSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if fmt == "json":
        report = format_json(results, limit)
    else:
        report = format_rich(results, limit, color=output is None and sys.stdout.isatty())
    _write_output(report, output, quiet=quiet)

    if has_violations(results):
        sys.exit(1)
