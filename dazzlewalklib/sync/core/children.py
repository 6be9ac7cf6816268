"""Child enumeration from per-node iterators.

Most tree sources can list a node's children but cannot answer "which
sibling follows this one?". ChildIteratorStack bridges the two: it keeps
an explicit stack of in-flight child iterators (one per active node) and
answers ``next_node(parent, previous)`` by pulling from the iterator at
the top.
"""

from typing import Any, Callable, Iterable, Iterator, List, Optional

from ..._common.config import IterationMode, ModeLike
from ..._common.listener import WalkerListener
from ..._common.walker import Walker
from .iterator import GraphIterator


ChildrenFunc = Callable[[Any], Optional[Iterable[Any]]]

_EXHAUSTED = object()


class ChildIteratorStack:
    """Implements ``next_node`` over a ``children(node)`` function.

    When the walker has just entered ``parent`` (``previous`` is None) a
    new iterator over ``children(parent)`` is pushed. When it has just
    left a child, the child's own (exhausted) iterator is popped and
    disposed, and the next sibling is drawn from the parent's iterator.
    The stack therefore always mirrors the walker's activation stack.

    ``children`` may return None for nodes that cannot have children.
    """

    def __init__(self, children: ChildrenFunc):
        self._children = children
        self._iterators: List[Optional[Iterator[Any]]] = []

    def __call__(self, parent: Any, previous: Any) -> Any:
        return self.load_next_node(parent, previous)

    @property
    def iterators(self) -> List[Optional[Iterator[Any]]]:
        """The live stack of child iterators, outermost first."""
        return self._iterators

    @property
    def depth(self) -> int:
        return len(self._iterators)

    def new_iterator(self, node: Any) -> Optional[Iterator[Any]]:
        """Return an iterator over the direct children of ``node``."""
        children = self._children(node)
        return iter(children) if children is not None else None

    def delete_iterator(self, iterator: Optional[Iterator[Any]]) -> None:
        """Dispose of an iterator that is no longer needed.

        Generators are closed so their ``finally`` blocks run.
        """
        close = getattr(iterator, 'close', None)
        if close is not None:
            close()

    def load_next_node(self, parent: Any, previous: Any) -> Any:
        if previous is None:
            iterator = self.new_iterator(parent) if parent is not None else None
            self._iterators.append(iterator)
        elif self._iterators:
            self.delete_iterator(self._iterators.pop())
        return self._load_next()

    def _load_next(self) -> Any:
        iterator = self._iterators[-1] if self._iterators else None
        if iterator is None:
            return None
        node = next(iterator, _EXHAUSTED)
        return None if node is _EXHAUSTED else node

    def close(self) -> None:
        """Dispose of every iterator still on the stack, innermost first."""
        while self._iterators:
            self.delete_iterator(self._iterators.pop())


class IteratorBasedGraphIterator(GraphIterator):
    """GraphIterator whose children come from a ``children(node)`` function.

    Example:
        tree = {"X": ["a", "b"], "a": ["a1", "a2"], "b": ["b1", "b2"]}
        with IteratorBasedGraphIterator(tree.get, "X") as iterator:
            print(list(iterator))  # X, a, a1, a2, b, b1, b2
    """

    def __init__(self,
                 children: ChildrenFunc,
                 top: Any = None,
                 mode: ModeLike = IterationMode.DEFAULT,
                 listener: Optional[WalkerListener] = None,
                 walker: Optional[Walker] = None):
        self._child_stack = ChildIteratorStack(children)
        super().__init__(self._child_stack, top, mode=mode,
                         listener=listener, walker=walker)

    @property
    def child_stack(self) -> ChildIteratorStack:
        return self._child_stack

    def _shift(self, keep: bool) -> Any:
        node = super()._shift(keep)
        if node is None:
            # The root's iterator outlives the walk
            self._child_stack.close()
        return node

    def close(self) -> None:
        """Release the child iterators of an abandoned iteration."""
        self._child_stack.close()

    def __enter__(self) -> 'IteratorBasedGraphIterator':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
