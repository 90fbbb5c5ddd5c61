"""Naming engine: predicates, rule base, dispatch, scope tracking, rules, reporter."""

from solnaming.naming.base import (
    ConfigurationError,
    InvariantViolation,
    NamingError,
    Reporter,
    Rule,
)
from solnaming.naming.dispatch import DispatchTable, EventKey, Phase, walk
from solnaming.naming.identifiers import MARKER, has_leading_marker, has_trailing_marker
from solnaming.naming.reporter import CollectingReporter, Diagnostic
from solnaming.naming.rules import (
    ALL_RULES,
    RULES_BY_ID,
    FuncParamNameTrailingUnderscore,
    FuncReturnParamNameTrailingUnderscore,
    PrivateVarsLeadingUnderscoreLib,
    ScopedVarsLeadingUnderscore,
    create_rules,
)
from solnaming.naming.scope import ScopeTracker

__all__ = [
    "ALL_RULES",
    "MARKER",
    "RULES_BY_ID",
    "CollectingReporter",
    "ConfigurationError",
    "Diagnostic",
    "DispatchTable",
    "EventKey",
    "FuncParamNameTrailingUnderscore",
    "FuncReturnParamNameTrailingUnderscore",
    "InvariantViolation",
    "NamingError",
    "Phase",
    "PrivateVarsLeadingUnderscoreLib",
    "Reporter",
    "Rule",
    "ScopeTracker",
    "ScopedVarsLeadingUnderscore",
    "create_rules",
    "has_leading_marker",
    "has_trailing_marker",
    "walk",
]
