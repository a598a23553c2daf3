"""CLI entry point for toml-core.

Invoked as::

    toml-core [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m tomlcore.cli.main

Commands
--------
check       Parse a TOML file and report the first error
parse       Dump the parsed value tree to JSON or YAML
value       Parse a single snippet with one grammar rule
grammar     Print the ABNF reference grammar
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from tomlcore.ast.nodes import Document
    from tomlcore.parser.errors import ParseError

console = Console()
err_console = Console(stderr=True)


def _read_source(path: str) -> str:
    """Read a TOML source file, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _error_panel(error: "ParseError", source: str, title: str) -> Panel:
    """Render the line holding ``error`` with a caret under the failing column."""
    lines = source.splitlines() or [""]
    line_no = min(max(error.span.line, 1), len(lines))
    line_text = lines[line_no - 1]
    gutter = f"{line_no} | "

    body = Text()
    body.append(f"{error.category.name.lower()} error: ", style="bold red")
    body.append(f"{error.message}\n\n")
    body.append(gutter, style="dim")
    body.append(f"{line_text}\n")
    body.append(" " * (len(gutter) + max(error.span.col - 1, 0)))
    body.append("^", style="bold red")
    return Panel(body, title=title, border_style="red", expand=False)


def _parse_or_exit(source: str, path: str) -> "Document":
    """Parse a TOML document, printing the error panel and exiting on failure."""
    from tomlcore import ParseError, parse_document

    try:
        return parse_document(source)
    except ParseError as exc:
        err_console.print(_error_panel(exc, source, f"{path}:{exc.span.line}:{exc.span.col}"))
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="toml-core")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """TOML value parser: check, dump, and explore TOML documents."""
    if verbose:
        _enable_debug_logging()


def _enable_debug_logging() -> None:
    """Send the package's DEBUG records to stderr through rich."""
    package_logger = logging.getLogger("tomlcore")
    package_logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(console=err_console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        package_logger.addHandler(handler)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from tomlcore import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]toml-core[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# grammar command
# ---------------------------------------------------------------------------


@cli.command(name="grammar")
def grammar_command() -> None:
    """Print the ABNF grammar the parser implements."""
    from tomlcore.grammar import FULL_GRAMMAR

    console.print(FULL_GRAMMAR, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("file", type=click.Path(exists=False))
def check_command(file: str) -> None:
    """Parse a TOML file and report the first error, if any.

    FILE is the path to the .toml file to check.
    """
    source = _read_source(file)
    document = _parse_or_exit(source, file)
    console.print(
        f"[green]OK[/green] {len(document.keyvals)} key(s), "
        f"{len(document.comments)} comment(s) in {file}"
    )


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Tree output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def parse_command(file: str, output_format: str, output: str | None) -> None:
    """Parse a TOML file and dump the value tree.

    FILE is the path to the .toml file to parse.
    """
    from tomlcore.ast import AstSerializer

    source = _read_source(file)
    document = _parse_or_exit(source, file)

    serializer = AstSerializer()

    if output_format.lower() == "json":
        text = serializer.to_json(document, indent=2)
        lang = "json"
    else:
        text = serializer.to_yaml(document)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Tree written to[/green] {output}")
    else:
        syntax = Syntax(text, lang, line_numbers=False)
        console.print(syntax)


# ---------------------------------------------------------------------------
# value command
# ---------------------------------------------------------------------------


def _rule_names() -> list[str]:
    from tomlcore.parser.parser import Rule

    return [rule.value for rule in Rule]


@cli.command(name="value")
@click.argument("text")
@click.option(
    "--rule",
    "-r",
    "rule_name",
    type=click.Choice(_rule_names()),
    default="value",
    help="Grammar rule to parse TEXT with (default: value).",
)
@click.option(
    "--partial",
    is_flag=True,
    default=False,
    help="Accept a match of a prefix of TEXT.",
)
def value_command(text: str, rule_name: str, partial: bool) -> None:
    """Parse a single snippet with one grammar rule and print the result.

    TEXT is the snippet to parse.

    Examples:

    \b
        toml-core value '0xDEAD_BEEF'
        toml-core value 'a."b.c" = [1, 2]' --rule keyval
        toml-core value 'site."google.com"' --rule key
    """
    from tomlcore import ParseError, Rule, parse
    from tomlcore.ast import AstSerializer, format_key

    try:
        result = parse(Rule(rule_name), text, partial=partial)
    except ParseError as exc:
        err_console.print(_error_panel(exc, text, f"<{rule_name}>:{exc.span.line}:{exc.span.col}"))
        sys.exit(1)

    if isinstance(result, tuple):
        console.print(format_key(result), markup=False, highlight=False)
        return

    syntax = Syntax(AstSerializer().to_json(result, indent=2), "json", line_numbers=False)
    console.print(syntax)


if __name__ == "__main__":
    cli()
