"""The underscore naming rules and the rule registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from solnaming.naming.base import ConfigurationError, Rule
from solnaming.naming.dispatch import Phase, body_statements, node_attr, node_name
from solnaming.naming.identifiers import MARKER, has_leading_marker, has_trailing_marker
from solnaming.naming.scope import ScopeTracker

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from solnaming.naming.base import Reporter
    from solnaming.naming.dispatch import DispatchTable

# Visibilities whose members must carry the leading marker inside a library.
# "default" is what the parser records when no visibility is written.
HIDDEN_VISIBILITIES: frozenset[str] = frozenset({"private", "internal", "default"})

LOOP_KINDS: tuple[str, ...] = ("ForStatement", "WhileStatement", "DoWhileStatement")


def _params(node: Any, attr: str) -> list[Any]:
    params = node_attr(node, attr)
    if not isinstance(params, list):
        return []
    return [p for p in params if p is not None]


class PrivateVarsLeadingUnderscoreLib(Rule):
    """Library members start with ``_`` exactly when they are not externally visible."""

    RULE_ID = "private-vars-leading-underscore-lib"

    def __init__(self, reporter: Reporter, config: object | None = None) -> None:
        super().__init__(self.RULE_ID, reporter, config)
        self.library = ScopeTracker(f"{self.RULE_ID} library scope")
        self.local_declaration = ScopeTracker(f"{self.RULE_ID} local declaration scope")

    def register(self, table: DispatchTable) -> None:
        table.on("ContractDefinition", self.enter_contract)
        table.on("ContractDefinition", self.library.exit, Phase.EXIT)
        table.on("VariableDeclarationStatement", self.local_declaration.enter)
        table.on("VariableDeclarationStatement", self.local_declaration.exit, Phase.EXIT)
        table.on("FunctionDefinition", self.check_member)
        table.on("VariableDeclaration", self.check_variable)

    def enter_contract(self, node: Any) -> None:
        self.library.enter(node, qualifies=node_attr(node, "kind") == "library")

    def check_variable(self, node: Any) -> None:
        # Locals are covered by scoped-vars-leading-underscore.
        if self.local_declaration.inside:
            return
        self.check_member(node)

    def check_member(self, node: Any) -> None:
        if not self.library.inside:
            return
        name = node_name(node)
        if name is None:
            return
        should_have_marker = node_attr(node, "visibility") in HIDDEN_VISIBILITIES
        if has_leading_marker(name) != should_have_marker:
            polarity = "should" if should_have_marker else "should not"
            self.error(node, f"'{name}' {polarity} start with {MARKER}")


class _TrailingMarkerParams(Rule):
    """Named parameters in *PARAMS_ATTR* end with ``_`` and do not start with it."""

    RULE_ID = ""
    PARAMS_ATTR = "parameters"
    NODE_KINDS: tuple[str, ...] = ()

    def __init__(self, reporter: Reporter, config: object | None = None) -> None:
        super().__init__(self.RULE_ID, reporter, config)

    def register(self, table: DispatchTable) -> None:
        for kind in self.NODE_KINDS:
            table.on(kind, self.check_parameters)

    def check_parameters(self, node: Any) -> None:
        for param in _params(node, self.PARAMS_ATTR):
            name = node_name(param)
            if name is None:
                continue
            if not has_trailing_marker(name):
                self.error(param, f"'{name}' should end with {MARKER}")
            if has_leading_marker(name):
                self.error(param, f"'{name}' should not start with {MARKER}")


class FuncParamNameTrailingUnderscore(_TrailingMarkerParams):
    RULE_ID = "func-param-name-trailing-underscore"
    PARAMS_ATTR = "parameters"
    NODE_KINDS = (
        "FunctionDefinition",
        "ModifierDefinition",
        "CustomErrorDefinition",
        "EventDefinition",
    )


class FuncReturnParamNameTrailingUnderscore(_TrailingMarkerParams):
    RULE_ID = "func-return-param-name-trailing-underscore"
    PARAMS_ATTR = "returnParameters"
    NODE_KINDS = ("FunctionDefinition",)


class ScopedVarsLeadingUnderscore(Rule):
    """Locals declared directly in a loop or function body start with ``_`` and do not end with it.

    Only the statements of the body block itself are inspected; nested
    blocks are reached when the walker visits their own loop or function.
    """

    RULE_ID = "scoped-vars-leading-underscore"

    def __init__(self, reporter: Reporter, config: object | None = None) -> None:
        super().__init__(self.RULE_ID, reporter, config)

    def register(self, table: DispatchTable) -> None:
        for kind in (*LOOP_KINDS, "FunctionDefinition"):
            table.on(kind, self.check_body)

    def check_body(self, node: Any) -> None:
        for statement in body_statements(node):
            if node_attr(statement, "type") != "VariableDeclarationStatement":
                continue
            for variable in _params(statement, "variables"):
                name = node_name(variable)
                if name is None:
                    continue
                if not has_leading_marker(name):
                    self.error(variable, f"'{name}' should start with {MARKER}")
                if has_trailing_marker(name):
                    self.error(variable, f"'{name}' should not end with {MARKER}")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

ALL_RULES: tuple[type[Rule], ...] = (
    PrivateVarsLeadingUnderscoreLib,
    FuncParamNameTrailingUnderscore,
    FuncReturnParamNameTrailingUnderscore,
    ScopedVarsLeadingUnderscore,
)

RULES_BY_ID: dict[str, type[Rule]] = {cls.RULE_ID: cls for cls in ALL_RULES}  # type: ignore[attr-defined]


def create_rules(
    reporter: Reporter,
    *,
    enabled: Iterable[str] | None = None,
    configs: Mapping[str, object] | None = None,
) -> list[Rule]:
    """Build one fresh instance of each enabled rule, bound to *reporter*.

    Rules keep the order of :data:`ALL_RULES` regardless of the order of
    *enabled*, so diagnostic order only depends on the tree.
    """
    wanted = set(RULES_BY_ID) if enabled is None else set(enabled)
    unknown = wanted - set(RULES_BY_ID)
    if unknown:
        msg = f"Unknown rule id(s): {', '.join(sorted(unknown))}"
        raise ConfigurationError(msg)
    configs = configs or {}
    return [
        cls(reporter, configs.get(rule_id))  # type: ignore[call-arg]
        for rule_id, cls in RULES_BY_ID.items()
        if rule_id in wanted
    ]
