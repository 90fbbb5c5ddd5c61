"""Diagnostics and the in-memory reporter used by the linter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from solnaming.naming.dispatch import node_location

if TYPE_CHECKING:
    from collections.abc import Mapping

VALID_SEVERITIES: frozenset[str] = frozenset({"error", "warn"})


@dataclass(frozen=True)
class Diagnostic:
    """A single naming-convention finding."""

    severity: str  # "error" | "warn"
    rule_id: str
    message: str
    line: int | None
    column: int | None
    node: Any = field(default=None, compare=False, repr=False)


class CollectingReporter:
    """Reporter that keeps diagnostics in arrival order.

    *severity_overrides* maps a rule id to the severity its findings are
    recorded at, whatever the rule asked for.
    """

    def __init__(self, severity_overrides: Mapping[str, str] | None = None) -> None:
        self.severity_overrides: dict[str, str] = dict(severity_overrides or {})
        self.diagnostics: list[Diagnostic] = []

    def error(self, node: Any, rule_id: str, message: str) -> None:
        self._add("error", node, rule_id, message)

    def warn(self, node: Any, rule_id: str, message: str) -> None:
        self._add("warn", node, rule_id, message)

    def _add(self, severity: str, node: Any, rule_id: str, message: str) -> None:
        line, column = node_location(node)
        self.diagnostics.append(
            Diagnostic(
                severity=self.severity_overrides.get(rule_id, severity),
                rule_id=rule_id,
                message=message,
                line=line,
                column=column,
                node=node,
            )
        )

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "error"]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "warn"]
