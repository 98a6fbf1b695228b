#!/usr/bin/env python3
"""
bdown: CLI for bracketdown

Usage:
    bdown render page.txt          # Render markup to Markdown/HTML
    bdown render - < page.txt      # Same, from stdin
    bdown links page.txt           # List page links and hashtags
    bdown convert pages/ out/      # Convert pages to .md with frontmatter
"""

from __future__ import annotations

import dataclasses
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, NoReturn

import click
from click.exceptions import ClickException

from . import __version__ as BRACKETDOWN_VERSION
from .config import LinkStyle


def output(data, as_json: bool = False):
    """Output data as JSON or formatted text."""
    if as_json:
        click.echo(json.dumps(data, indent=2, default=str))
    else:
        click.echo(data)


def format_table(rows: list[dict], columns: list[str], max_widths: dict | None = None) -> str:
    """Format rows as a simple table."""
    if not rows:
        return ""

    max_widths = max_widths or {}
    widths = {col: len(col) for col in columns}

    def cell(row: dict, col: str) -> str:
        val = str(row.get(col, ""))
        limit = max_widths.get(col, 50)
        if len(val) > limit:
            val = val[: limit - 3] + "..."
        return val

    for row in rows:
        for col in columns:
            widths[col] = max(widths[col], len(cell(row, col)))

    header = "  ".join(col.upper().ljust(widths[col]) for col in columns)
    separator = "  ".join("-" * widths[col] for col in columns)

    lines = [header, separator]
    for row in rows:
        lines.append("  ".join(cell(row, col).ljust(widths[col]) for col in columns).rstrip())

    return "\n".join(lines)


def _handle_error(ctx: click.Context, error: Exception, exit_code: int = 1) -> NoReturn:
    """Handle an error with optional JSON output.

    If --json-errors is enabled, outputs structured JSON error.
    Otherwise, outputs human-readable error message.
    """
    from .errors import BracketdownError, ErrorCode, format_error_json

    json_errors = ctx.obj.get("json_errors", False) if ctx.obj else False

    if isinstance(error, BracketdownError):
        if json_errors:
            click.echo(error.to_json(), err=True)
        else:
            click.echo(f"Error: {error.message}", err=True)
    else:
        if json_errors:
            click.echo(format_error_json(ErrorCode.INTERNAL_ERROR, str(error)), err=True)
        else:
            click.echo(f"Error: {error}", err=True)

    sys.exit(exit_code)


def _resolve_style(ctx: click.Context, prefix: str | None, suffix: str | None) -> LinkStyle:
    """Link style from config, with command-line overrides applied."""
    from .config import get_link_style
    from .errors import ConfigurationError

    try:
        style = get_link_style()
    except ConfigurationError as e:
        _handle_error(ctx, e)

    if prefix is not None:
        style = dataclasses.replace(style, prefix=prefix)
    if suffix is not None:
        style = dataclasses.replace(style, suffix=suffix)
    return style


def _link_style_options(f):
    f = click.option("--suffix", default=None, help="Suffix for page link targets (default: .md)")(f)
    f = click.option("--prefix", default=None, help="Prefix for page link targets (default: ./)")(f)
    return f


class JsonErrorGroup(click.Group):
    """Click group that reports usage errors as JSON when --json-errors is set."""

    def main(
        self,
        args: Sequence[str] | None = None,
        prog_name: str | None = None,
        complete_var: str | None = None,
        standalone_mode: bool = True,
        **extra: Any,
    ) -> Any:
        from .errors import ErrorCode, format_error_json

        argv = list(args) if args is not None else list(sys.argv[1:])
        if "--json-errors" not in argv:
            return super().main(argv, prog_name, complete_var, standalone_mode, **extra)

        # Normalize misplaced --json-errors to be a true global flag.
        argv = ["--json-errors"] + [a for a in argv if a != "--json-errors"]

        try:
            return super().main(argv, prog_name, complete_var, standalone_mode=False, **extra)
        except ClickException as e:
            click.echo(format_error_json(ErrorCode.INVALID_ARGUMENT, e.format_message()), err=True)
            raise SystemExit(1)


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI Group
# ─────────────────────────────────────────────────────────────────────────────


@click.group(cls=JsonErrorGroup)
@click.version_option(version=BRACKETDOWN_VERSION, prog_name="bdown")
@click.option(
    "--json-errors",
    "json_errors",
    is_flag=True,
    help="Output errors as JSON (for programmatic use)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    envvar="BRACKETDOWN_QUIET",
    help="Suppress warnings, show only errors and essential output",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, json_errors: bool, quiet: bool, verbose: bool):
    """bdown: render bracket wiki markup as Markdown/HTML.

    \b
    Markup:
      [page name]        link to ./page%20name.md
      [* bold]           bold, [** bigger], [*** bigger still]
      [[bold]]           bold
      [- strike]         strike-through
      [_ underline]      underline
      #tag               link to ./tag.md

    \b
    Link targets:
      BRACKETDOWN_LINK_PREFIX / BRACKETDOWN_LINK_SUFFIX, or
      link_prefix / link_suffix in .bracketdown.yaml
    """
    from ._logging import configure_logging, set_quiet_mode

    ctx.ensure_object(dict)
    ctx.obj["json_errors"] = json_errors

    configure_logging(logging.DEBUG if verbose else None)
    set_quiet_mode(quiet)


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Output one JSON object per line")
@_link_style_options
@click.pass_context
def render(ctx: click.Context, source, as_json: bool, prefix: str | None, suffix: str | None):
    """Render markup from SOURCE (file or - for stdin).

    \b
    Examples:
      bdown render notes.txt
      echo '[* hello] [world]' | bdown render
    """
    from .renderer import describe_line, render_text

    style = _resolve_style(ctx, prefix, suffix)
    text = source.read()

    if as_json:
        output([describe_line(line, style).model_dump() for line in text.splitlines()], as_json=True)
        return

    click.echo(render_text(text, style))


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_link_style_options
@click.pass_context
def links(ctx: click.Context, source, as_json: bool, prefix: str | None, suffix: str | None):
    """List page links and hashtags in SOURCE.

    \b
    Examples:
      bdown links notes.txt
      bdown links --json notes.txt
    """
    from .parser import extract_hashtags, extract_links, page_target, parse_line

    style = _resolve_style(ctx, prefix, suffix)

    found_links: list[str] = []
    found_tags: list[str] = []
    for line in source.read().splitlines():
        symbols = parse_line(line)
        found_links.extend(link for link in extract_links(symbols) if link not in found_links)
        found_tags.extend(tag for tag in extract_hashtags(symbols) if tag not in found_tags)

    if as_json:
        output({"links": found_links, "hashtags": found_tags}, as_json=True)
        return

    rows = [{"type": "link", "name": name, "target": page_target(name, style)} for name in found_links]
    rows += [{"type": "hashtag", "name": f"#{tag}", "target": page_target(tag, style)} for tag in found_tags]
    if not rows:
        click.echo("No links found.")
        return
    click.echo(format_table(rows, ["type", "name", "target"]))


@cli.command()
@click.argument("src", type=click.Path(exists=True, path_type=Path))
@click.argument("dest", type=click.Path(file_okay=False, path_type=Path))
@click.option("--pattern", default="*.txt", show_default=True, help="Glob for page files when SRC is a directory")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_link_style_options
@click.pass_context
def convert(
    ctx: click.Context,
    src: Path,
    dest: Path,
    pattern: str,
    as_json: bool,
    prefix: str | None,
    suffix: str | None,
):
    """Convert page SRC (file or directory) into Markdown files under DEST.

    The first non-blank line of each page is its title; hashtags and
    page links are recorded in YAML frontmatter.

    \b
    Examples:
      bdown convert page.txt out/
      bdown convert pages/ out/ --pattern "*.sb"
    """
    from .converter import convert_file, convert_tree
    from .errors import BracketdownError

    style = _resolve_style(ctx, prefix, suffix)

    try:
        if src.is_dir():
            outcome = convert_tree(src, dest, pattern=pattern, style=style)
            converted, failed = outcome.converted, outcome.failed
        else:
            converted, failed = [convert_file(src, dest, style)], []
    except BracketdownError as e:
        _handle_error(ctx, e)

    if as_json:
        output(
            {
                "converted": [result.model_dump() for result in converted],
                "failed": failed,
            },
            as_json=True,
        )
    else:
        for result in converted:
            click.echo(f"{result.source} -> {result.output}")
        for failure in failed:
            click.echo(f"Failed: {failure['source']}: {failure['error']}", err=True)
        click.echo(f"Converted {len(converted)} page(s) to {dest}")

    if failed:
        sys.exit(1)


def main():
    """Entry point for bdown CLI."""
    cli()


if __name__ == "__main__":
    main()
