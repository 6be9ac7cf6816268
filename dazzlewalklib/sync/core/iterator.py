"""Graph iteration on top of a Walker.

The GraphIterator is a lazy, forward-only external iterator. It asks a
caller-supplied ``next_node(parent, previous)`` function for one child
at a time and feeds the answers to its walker, handing control back to
the caller only in the states selected by the iteration mode.
"""

from typing import Any, Callable, Iterator, Optional

from ..._common.config import IterationMode, ModeLike, classify_step
from ..._common.listener import WalkerListener
from ..._common.walker import Walker


NextNodeFunc = Callable[[Any, Any], Any]


class GraphIterator:
    """Iterates over a graph given a child-enumeration function.

    ``next_node(parent, previous)`` must return the first child of
    ``parent`` when ``previous`` is None, the sibling following
    ``previous`` otherwise, and None when there is no such node. Children
    are visited exactly in that order; nothing is buffered or sorted, and
    an exhausted iterator cannot be restarted.

    Example:
        def next_node(parent, previous):
            kids = tree.get(parent, [])
            if previous is None:
                return kids[0] if kids else None
            i = kids.index(previous) + 1
            return kids[i] if i < len(kids) else None

        for node in GraphIterator(next_node, "X", mode=IterationMode.EXIT):
            print(node)
    """

    def __init__(self,
                 next_node: NextNodeFunc,
                 top: Any = None,
                 mode: ModeLike = IterationMode.DEFAULT,
                 listener: Optional[WalkerListener] = None,
                 walker: Optional[Walker] = None):
        """Initialize the iterator.

        Args:
            next_node: Child-enumeration function ``(parent, previous) -> next``
            top: The topmost node; may also be set later with :meth:`begin`
            mode: Iteration mode (any combination of IterationMode flags)
            listener: Observer for the internal walker (ignored if ``walker``
                is given)
            walker: A ready walker to drive instead of creating one
        """
        self._next_node = next_node
        self._walker = walker if walker is not None else Walker(listener)
        self._mode = int(mode)
        self._status = IterationMode.NONE
        self._pending: Any = None
        self._done = False
        if top is not None:
            self.begin(top)

    def begin(self, top: Any) -> None:
        """Set the node the iteration starts from."""
        self._pending = top

    @property
    def mode(self) -> int:
        return self._mode

    @mode.setter
    def mode(self, mode: ModeLike) -> None:
        self._mode = int(mode)

    @property
    def status(self) -> IterationMode:
        """The status computed by the last step (NONE before the first)."""
        return self._status

    @property
    def walker(self) -> Walker:
        return self._walker

    @property
    def current(self) -> Any:
        return self._walker.current

    @property
    def previous(self) -> Any:
        return self._walker.previous

    def load_next_node(self, parent: Any, previous: Any) -> Any:
        return self._next_node(parent, previous)

    def _prepare_next_node(self) -> Any:
        walker = self._walker
        previous = walker.previous
        candidate = self.load_next_node(walker.current, previous)
        self._status = classify_step(previous, candidate)
        self._pending = candidate
        return candidate

    def _shift(self, keep: bool) -> Any:
        """Advance to the next yield point unless already there.

        Args:
            keep: True to keep the position so the next call returns
                the same node without advancing (used by has_next)

        Returns:
            The current node, or None when the iteration is over
        """
        if not self._done:
            walker = self._walker
            while True:
                pending, self._pending = self._pending, None
                if not walker.update(pending):
                    break
                if walker.current is None:
                    break
                self._prepare_next_node()
                if int(self._status) & self._mode:
                    break
        self._done = keep
        return self._walker.current

    def has_next(self) -> bool:
        """Check for a next node without consuming it."""
        return self._shift(True) is not None

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        node = self._shift(False)
        if node is None:
            raise StopIteration
        return node

    def remove(self) -> None:
        raise NotImplementedError(f"{self.__class__.__name__} does not support removal")
