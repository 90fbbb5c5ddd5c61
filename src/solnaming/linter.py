"""Linter orchestrator: load ASTs, run the naming rules, format results."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from solnaming.config import LintConfig, load_config
from solnaming.naming.base import ConfigurationError
from solnaming.naming.dispatch import DispatchTable, walk
from solnaming.naming.reporter import CollectingReporter, Diagnostic
from solnaming.naming.rules import create_rules

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from rich.console import Console

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class LintError(Exception):
    """Raised when lint cannot read its input or configuration."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LintFinding:
    """A diagnostic together with the AST file it came from."""

    file_path: str
    diagnostic: Diagnostic


@dataclass
class LintResult:
    """Result of a lint run."""

    findings: list[LintFinding] = field(default_factory=list)
    rules_evaluated: int = 0
    files_scanned: int = 0
    elapsed_ms: float = 0.0

    @property
    def errors(self) -> list[LintFinding]:
        return [f for f in self.findings if f.diagnostic.severity == "error"]

    @property
    def warnings(self) -> list[LintFinding]:
        return [f for f in self.findings if f.diagnostic.severity == "warn"]


# ---------------------------------------------------------------------------
# Running rules
# ---------------------------------------------------------------------------


def load_ast(path: Path) -> Mapping[str, Any]:
    """Read a solidity-parser JSON AST from *path*.

    Raises ``LintError`` when the file is unreadable, not JSON, or not an AST.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read {path}: {exc}"
        raise LintError(msg) from exc
    try:
        tree = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"{path}: invalid JSON: {exc}"
        raise LintError(msg) from exc
    if not isinstance(tree, Mapping) or not isinstance(tree.get("type"), str):
        msg = f"{path}: expected a JSON object with a 'type' field at the top level"
        raise LintError(msg)
    if "loc" not in tree:
        logger.warning("%s has no location info; diagnostics will lack line numbers", path)
    return tree


def lint_tree(tree: Mapping[str, Any], config: LintConfig | None = None) -> list[Diagnostic]:
    """Run every enabled rule over one AST and return its diagnostics in report order.

    Rules are constructed fresh for each call, so no scope state leaks
    between trees.
    """
    config = config or LintConfig.default()
    reporter = CollectingReporter(config.severity_overrides)
    table = DispatchTable()
    table.register(*create_rules(reporter, enabled=config.enabled_rules))
    visited = walk(tree, table)
    logger.debug("Visited %d nodes, %d diagnostics", visited, len(reporter.diagnostics))
    return reporter.diagnostics


def lint(
    paths: Iterable[Path],
    *,
    config: LintConfig | None = None,
    config_path: Path | None = None,
) -> LintResult:
    """Lint every JSON AST in *paths*.

    Parameters
    ----------
    paths:
        AST files produced by ``solidity-parser`` (``parse(src, {loc: true})``).
    config:
        Explicit configuration.  Takes precedence over *config_path*.
    config_path:
        Path to a ``.solnaming.yml``.  Ignored when *config* is given; when
        both are *None* every rule runs at its native severity.

    Raises
    ------
    LintError
        When an input file or the configuration is invalid.
    """
    start = time.monotonic()

    if config is None:
        try:
            config = load_config(config_path) if config_path is not None else LintConfig.default()
        except ConfigurationError as exc:
            msg = f"Invalid configuration: {exc}"
            raise LintError(msg) from exc

    findings: list[LintFinding] = []
    files_scanned = 0
    for path in paths:
        tree = load_ast(path)
        try:
            diagnostics = lint_tree(tree, config)
        except ConfigurationError as exc:
            msg = f"Invalid configuration: {exc}"
            raise LintError(msg) from exc
        logger.debug("%s: %d diagnostics", path, len(diagnostics))
        findings.extend(LintFinding(str(path), d) for d in diagnostics)
        files_scanned += 1

    elapsed = (time.monotonic() - start) * 1000
    return LintResult(
        findings=findings,
        rules_evaluated=len(config.enabled_rules),
        files_scanned=files_scanned,
        elapsed_ms=elapsed,
    )


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def _location(finding: LintFinding) -> str:
    loc = finding.file_path
    d = finding.diagnostic
    if d.line is not None:
        loc += f":{d.line}"
        if d.column is not None:
            loc += f":{d.column}"
    return loc


def format_text(result: LintResult) -> str:
    """Format a LintResult as human-readable text.

    Example output::

        Rules: 4 enabled
        Files: 1 scanned

        ✗ Token.json:12:4  'amount' should end with _  [func-param-name-trailing-underscore]
        ⚠ Token.json:20:8  'i' should start with _  [scoped-vars-leading-underscore]

        2 problems (1 errors, 1 warnings) in 1 files (0.0s)
    """
    lines: list[str] = [
        f"Rules: {result.rules_evaluated} enabled",
        f"Files: {result.files_scanned} scanned",
        "",
    ]
    elapsed_str = f"{result.elapsed_ms / 1000:.1f}s"

    if not result.findings:
        lines.append(f"✓ No problems found ({result.files_scanned} files, {elapsed_str})")
        return "\n".join(lines)

    for f in result.findings:
        marker = "✗" if f.diagnostic.severity == "error" else "⚠"
        lines.append(
            f"{marker} {_location(f)}  {f.diagnostic.message}  [{f.diagnostic.rule_id}]"
        )
    lines.append("")
    lines.append(
        f"{len(result.findings)} problems ({len(result.errors)} errors, "
        f"{len(result.warnings)} warnings) in {result.files_scanned} files ({elapsed_str})"
    )
    return "\n".join(lines)


def render_rich(result: LintResult, console: Console) -> None:
    """Render a LintResult as a Rich table.

    Parameters
    ----------
    result:
        The lint result.
    console:
        Rich Console instance for output.
    """
    from rich.table import Table

    console.print(
        f"Rules: [bold]{result.rules_evaluated}[/] enabled   "
        f"Files: [bold]{result.files_scanned}[/] scanned"
    )
    console.print()

    if not result.findings:
        console.print("[green]✓ No problems found[/]")
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 1))
    table.add_column("location", style="cyan")
    table.add_column("severity")
    table.add_column("message")
    table.add_column("rule", style="dim")
    for f in result.findings:
        d = f.diagnostic
        severity = "[red]error[/]" if d.severity == "error" else "[yellow]warn[/]"
        table.add_row(_location(f), severity, d.message, d.rule_id)
    console.print(table)
    console.print()
    console.print(
        f"[bold]{len(result.findings)}[/] problems "
        f"([red]{len(result.errors)} errors[/], [yellow]{len(result.warnings)} warnings[/])"
    )


def format_json(result: LintResult) -> str:
    """Format a LintResult as structured JSON.

    Returns a JSON string with ``findings`` array and ``summary`` object.
    """
    findings_list: list[dict[str, object]] = [
        {
            "file_path": f.file_path,
            "line": f.diagnostic.line,
            "column": f.diagnostic.column,
            "severity": f.diagnostic.severity,
            "rule_id": f.diagnostic.rule_id,
            "message": f.diagnostic.message,
        }
        for f in result.findings
    ]
    output: dict[str, object] = {
        "findings": findings_list,
        "summary": {
            "rules_evaluated": result.rules_evaluated,
            "files_scanned": result.files_scanned,
            "errors_count": len(result.errors),
            "warnings_count": len(result.warnings),
            "elapsed_ms": result.elapsed_ms,
        },
    }
    return json.dumps(output, indent=2)


def format_porcelain(result: LintResult) -> str:
    """Format a LintResult as one line per finding.

    Format: ``rule_id:severity:file_path:line:column:message``

    Missing line/column are empty strings.  The message comes last because it
    may itself contain colons.  Returns empty string when there
    are no findings.
    """
    lines: list[str] = []
    for f in result.findings:
        d = f.diagnostic
        line = str(d.line) if d.line is not None else ""
        column = str(d.column) if d.column is not None else ""
        lines.append(f"{d.rule_id}:{d.severity}:{f.file_path}:{line}:{column}:{d.message}")
    return "\n".join(lines)
