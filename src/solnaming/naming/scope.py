"""Enter/exit scope tracking for context-sensitive rules."""

from __future__ import annotations

from typing import Any

from solnaming.naming.base import InvariantViolation
from solnaming.naming.dispatch import node_kind


class ScopeTracker:
    """Two-state machine: *outside* or *inside* a qualifying node.

    Every entered node pushes a frame, qualifying or not, so that the
    matching exit can be checked against it.  ``inside`` holds while any
    open frame qualifies.  An exit that does not close the most recently
    entered node raises :class:`InvariantViolation`.
    """

    def __init__(self, label: str) -> None:
        self.label = label
        self._frames: list[tuple[Any, bool]] = []

    @property
    def inside(self) -> bool:
        return any(qualifies for _, qualifies in self._frames)

    @property
    def depth(self) -> int:
        return len(self._frames)

    def enter(self, node: Any, *, qualifies: bool = True) -> None:
        self._frames.append((node, qualifies))

    def exit(self, node: Any) -> None:
        if not self._frames:
            msg = f"{self.label}: exit from {node_kind(node) or 'node'} that was never entered"
            raise InvariantViolation(msg)
        innermost, _ = self._frames[-1]
        if innermost is not node:
            msg = (
                f"{self.label}: exit from {node_kind(node) or 'node'} does not match "
                f"the innermost entered node"
            )
            raise InvariantViolation(msg)
        self._frames.pop()

    def reset(self) -> None:
        self._frames.clear()
