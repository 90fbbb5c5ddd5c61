"""Event dispatch: explicit (node kind, phase) tables and the JSON AST walker.

Rules never look up handlers by method name.  Each rule calls
:meth:`DispatchTable.on` for every event it wants, and the traversal
driver calls :meth:`DispatchTable.dispatch` for every node it enters or
leaves.  :func:`walk` is the driver used for solidity-parser JSON output;
any other driver only has to honour the same enter/exit ordering.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from solnaming.naming.base import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from solnaming.naming.base import Rule

    Handler = Callable[[Any], None]

logger = logging.getLogger(__name__)

EXIT_SUFFIX = ":exit"

# Keys holding source positions rather than child nodes.
_POSITION_KEYS: frozenset[str] = frozenset({"loc", "range"})


class Phase(enum.Enum):
    """Whether an event fires when a node is entered or left."""

    ENTER = "enter"
    EXIT = "exit"


@dataclass(frozen=True)
class EventKey:
    """A node kind paired with the phase a handler listens on."""

    kind: str
    phase: Phase = Phase.ENTER

    @classmethod
    def parse(cls, text: str) -> EventKey:
        """Parse the ``"NodeKind"`` / ``"NodeKind:exit"`` string convention."""
        kind, sep, suffix = text.partition(":")
        if not kind:
            msg = f"Invalid event name {text!r}: missing node kind"
            raise ConfigurationError(msg)
        if not sep:
            return cls(kind)
        if suffix != EXIT_SUFFIX[1:]:
            msg = f"Invalid event name {text!r}: only the ':exit' suffix is supported"
            raise ConfigurationError(msg)
        return cls(kind, Phase.EXIT)

    def __str__(self) -> str:
        if self.phase is Phase.EXIT:
            return f"{self.kind}{EXIT_SUFFIX}"
        return self.kind


class DispatchTable:
    """Maps ``(kind, phase)`` to the handlers registered for it, in order."""

    def __init__(self) -> None:
        self._handlers: dict[EventKey, list[Handler]] = {}

    def on(self, kind: str, handler: Handler, phase: Phase = Phase.ENTER) -> None:
        self._handlers.setdefault(EventKey(kind, phase), []).append(handler)

    def subscribe(self, event: str, handler: Handler) -> None:
        """Register *handler* under a string event name such as ``"ForStatement:exit"``."""
        key = EventKey.parse(event)
        self.on(key.kind, handler, key.phase)

    def register(self, *rules: Rule) -> None:
        for rule in rules:
            rule.register(self)
            logger.debug("Registered rule %s", rule.rule_id)

    def handlers(self, kind: str, phase: Phase = Phase.ENTER) -> tuple[Handler, ...]:
        return tuple(self._handlers.get(EventKey(kind, phase), ()))

    def wants(self, kind: str, phase: Phase = Phase.ENTER) -> bool:
        return EventKey(kind, phase) in self._handlers

    def events(self) -> list[EventKey]:
        """All subscribed events, sorted by kind then phase."""
        return sorted(self._handlers, key=lambda k: (k.kind, k.phase is Phase.EXIT))

    def dispatch(self, phase: Phase, node: Any) -> None:
        kind = node_kind(node)
        if kind is None:
            return
        for handler in self._handlers.get(EventKey(kind, phase), ()):
            handler(node)


# ---------------------------------------------------------------------------
# Node accessors
# ---------------------------------------------------------------------------


def node_attr(node: Any, name: str, default: Any = None) -> Any:
    """Read attribute *name* from a mapping node or an object node."""
    if node is None:
        return default
    if isinstance(node, Mapping):
        return node.get(name, default)
    return getattr(node, name, default)


def node_kind(node: Any) -> str | None:
    kind = node_attr(node, "type")
    return kind if isinstance(kind, str) else None


def node_name(node: Any) -> str | None:
    name = node_attr(node, "name")
    return name if isinstance(name, str) and name else None


def body_statements(node: Any) -> list[Any]:
    """Return the statements directly inside *node*'s body block.

    A body that is absent (interface functions) or is a single statement
    rather than a block yields an empty list.
    """
    body = node_attr(node, "body")
    statements = node_attr(body, "statements")
    if not isinstance(statements, list):
        return []
    return [s for s in statements if s is not None]


def node_location(node: Any) -> tuple[int | None, int | None]:
    """Return ``(line, column)`` of the node start, when the parser recorded it."""
    loc = node_attr(node, "loc")
    start = node_attr(loc, "start")
    line = node_attr(start, "line")
    column = node_attr(start, "column")
    return (
        line if isinstance(line, int) else None,
        column if isinstance(column, int) else None,
    )


# ---------------------------------------------------------------------------
# Traversal driver
# ---------------------------------------------------------------------------


def _children(node: Mapping[str, Any]) -> Iterator[Any]:
    for key, value in node.items():
        if key in _POSITION_KEYS:
            continue
        if isinstance(value, Mapping):
            yield value
        elif isinstance(value, list):
            yield from (item for item in value if item is not None)


def walk(tree: Mapping[str, Any], table: DispatchTable) -> int:
    """Drive *table* over a JSON AST in document order.

    Every mapping with a string ``type`` is a node: its enter event fires
    before its children are visited and its exit event after.  Exit events
    are only dispatched for kinds that have exit subscribers.

    Returns the number of nodes visited.
    """
    visited = 0
    # Explicit stack; solidity ASTs nest deeply enough to make recursion risky.
    stack: list[tuple[Mapping[str, Any], bool]] = [(tree, False)]
    while stack:
        current, leaving = stack.pop()
        kind = node_kind(current)
        if leaving:
            if kind is not None and table.wants(kind, Phase.EXIT):
                table.dispatch(Phase.EXIT, current)
            continue
        if kind is not None:
            visited += 1
            table.dispatch(Phase.ENTER, current)
        stack.append((current, True))
        children = [c for c in _children(current) if isinstance(c, Mapping)]
        stack.extend((child, False) for child in reversed(children))
    return visited
