"""Rule base contract: identity, reporter binding, and reporting primitives."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from solnaming.naming.dispatch import DispatchTable

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class NamingError(Exception):
    """Base class for errors raised by the naming engine."""


class ConfigurationError(NamingError):
    """Raised when a rule or rule set cannot be constructed as configured."""


class InvariantViolation(NamingError):
    """Raised when the traversal driver or a collaborator breaks a precondition.

    Examples: an exit event for a node that was never entered, or a rule
    constructed without a reporter.
    """


# ---------------------------------------------------------------------------
# Reporter capability
# ---------------------------------------------------------------------------


class Reporter(Protocol):
    """Sink for diagnostics.  Return values are ignored."""

    def error(self, node: Any, rule_id: str, message: str) -> None: ...

    def warn(self, node: Any, rule_id: str, message: str) -> None: ...


# ---------------------------------------------------------------------------
# Rule base
# ---------------------------------------------------------------------------


class Rule(abc.ABC):
    """Shared shape of every naming rule.

    A rule is bound to exactly one reporter for the lifetime of one
    analysis run.  *config* is kept as given; the base class never
    interprets it.
    """

    def __init__(self, rule_id: str, reporter: Reporter, config: object | None = None) -> None:
        if not isinstance(rule_id, str) or not rule_id.strip():
            msg = f"{type(self).__name__}: rule id must be a non-empty string, got {rule_id!r}"
            raise ConfigurationError(msg)
        if reporter is None:
            msg = f"Rule '{rule_id}': a reporter is required"
            raise InvariantViolation(msg)
        self.rule_id = rule_id
        self.reporter = reporter
        self.config = config

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule_id={self.rule_id!r})"

    def error(self, node: Any, message: str) -> None:
        self.reporter.error(node, self.rule_id, message)

    def warn(self, node: Any, message: str) -> None:
        self.reporter.warn(node, self.rule_id, message)

    @abc.abstractmethod
    def register(self, table: DispatchTable) -> None:
        """Subscribe this rule's handlers on *table*."""
