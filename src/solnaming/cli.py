"""Solnaming CLI entry point."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

import click

from solnaming import __version__

if TYPE_CHECKING:
    from solnaming.linter import LintResult


@click.group()
@click.version_option(version=__version__, prog_name="solnaming")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option(
    "--quiet", "-q", is_flag=True, help="Minimal output (errors only, nothing when clean)."
)
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """Solnaming - underscore naming conventions for Solidity ASTs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _print_result(result: LintResult, fmt: str) -> None:
    from solnaming.linter import format_json, format_porcelain, format_text, render_rich

    if fmt == "rich":
        from rich.console import Console

        render_rich(result, Console())
        return

    formatters = {
        "text": format_text,
        "json": format_json,
        "porcelain": format_porcelain,
    }
    output = formatters[fmt](result)
    if output:
        click.echo(output)


@main.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "text", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich on a TTY, porcelain otherwise).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Rule configuration (default: ./.solnaming.yml when present).",
)
@click.option("--strict", is_flag=True, help="Exit 1 when errors are found.")
@click.option("--fail-on-warn", is_flag=True, help="Exit 1 when warnings are found.")
@click.pass_context
def lint(
    ctx: click.Context,
    *,
    paths: tuple[Path, ...],
    fmt: str | None,
    config_path: Path | None,
    strict: bool,
    fail_on_warn: bool,
) -> None:
    """Check JSON ASTs (solidity-parser output) against the naming rules.

    Exit codes: 0 = clean or findings without --strict/--fail-on-warn,
    1 = errors with --strict or warnings with --fail-on-warn,
    2 = configuration or input error.
    """
    from solnaming.config import DEFAULT_CONFIG_NAME
    from solnaming.linter import LintError
    from solnaming.linter import lint as run_lint

    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME

    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        result = run_lint(paths, config_path=config_path)
    except LintError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    if not quiet:
        _print_result(result, fmt)
    elif result.errors:
        _print_result(replace(result, findings=result.errors), fmt)

    if strict and result.errors:
        sys.exit(1)
    if fail_on_warn and result.warnings:
        sys.exit(1)


@main.command("rules")
def rules_cmd() -> None:
    """List the available rules and the node events they subscribe to."""
    from solnaming.naming.dispatch import DispatchTable
    from solnaming.naming.reporter import CollectingReporter
    from solnaming.naming.rules import ALL_RULES

    reporter = CollectingReporter()
    for cls in ALL_RULES:
        table = DispatchTable()
        rule = cls(reporter)  # type: ignore[call-arg]
        rule.register(table)
        events = ", ".join(str(key) for key in table.events())
        click.echo(f"{rule.rule_id}")
        click.echo(f"  {events}")
