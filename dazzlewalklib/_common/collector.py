"""Collecting listeners for DazzleWalkLib.

Collectors are listeners that accumulate what a walker reports, so the
same walk can be used to record a raw event log or to rebuild a nested
tree from begin/end events.
"""

from enum import Enum
from typing import Any, List, NamedTuple, Optional

from .listener import WalkerListener


class WalkEventKind(Enum):
    BEGIN = "begin"
    END = "end"
    TRANSITION = "transition"


class WalkEvent(NamedTuple):
    """One notification received from a walker.

    For BEGIN/END events ``node`` is the (de)activated node; for
    TRANSITION events ``previous`` and ``next`` describe the move.
    """
    kind: WalkEventKind
    parent: Any
    node: Any = None
    previous: Any = None
    next: Any = None


class EventCollector(WalkerListener):
    """Records every walker event in order.

    Example:
        collector = EventCollector(include_transitions=False)
        builder = TreeBuilder(collector)
        builder.align(["a", "b"])
        collector.kinds()  # [BEGIN, BEGIN]
    """

    def __init__(self, include_transitions: bool = True):
        self.include_transitions = include_transitions
        self.events: List[WalkEvent] = []

    def on_begin(self, parent: Any, node: Any) -> None:
        self.events.append(WalkEvent(WalkEventKind.BEGIN, parent, node))

    def on_end(self, parent: Any, node: Any) -> None:
        self.events.append(WalkEvent(WalkEventKind.END, parent, node))

    def on_transition(self, parent: Any, prev: Any, next: Any) -> None:
        if self.include_transitions:
            self.events.append(
                WalkEvent(WalkEventKind.TRANSITION, parent, previous=prev, next=next)
            )

    def kinds(self) -> List[WalkEventKind]:
        return [event.kind for event in self.events]

    def begun(self) -> List[Any]:
        """Nodes in the order they were activated."""
        return [e.node for e in self.events if e.kind is WalkEventKind.BEGIN]

    def ended(self) -> List[Any]:
        """Nodes in the order they were deactivated."""
        return [e.node for e in self.events if e.kind is WalkEventKind.END]

    def clear(self) -> None:
        self.events = []


class TreeEntry:
    """A node together with the entries opened beneath it."""

    __slots__ = ('node', 'children')

    def __init__(self, node: Any, children: Optional[List['TreeEntry']] = None):
        self.node = node
        self.children: List['TreeEntry'] = children if children is not None else []

    def to_tuple(self) -> tuple:
        """Return ``(node, [child tuples...])`` for easy comparison."""
        return (self.node, [child.to_tuple() for child in self.children])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return self.node == other.node and self.children == other.children

    def __repr__(self) -> str:
        return f"TreeEntry({self.node!r}, {self.children!r})"


class NestedTreeCollector(WalkerListener):
    """Rebuilds the activation structure as a forest of TreeEntry objects.

    Every ``on_begin`` opens an entry under the currently open one, every
    ``on_end`` closes it. Re-activating an equal node after it ended
    produces a new sibling entry, which is exactly what a tree builder
    reports when it closes and reopens a path segment.
    """

    def __init__(self):
        self.roots: List[TreeEntry] = []
        self._open: List[TreeEntry] = []

    def on_begin(self, parent: Any, node: Any) -> None:
        entry = TreeEntry(node)
        if self._open:
            self._open[-1].children.append(entry)
        else:
            self.roots.append(entry)
        self._open.append(entry)

    def on_end(self, parent: Any, node: Any) -> None:
        if self._open:
            self._open.pop()

    @property
    def is_complete(self) -> bool:
        """True when every opened entry has been closed."""
        return not self._open

    def to_tuples(self) -> List[tuple]:
        return [root.to_tuple() for root in self.roots]
