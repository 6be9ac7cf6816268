"""Rebuilding trees from paths.

The TreeBuilder turns a stream of root-to-leaf paths into begin/end
notifications by diffing each path against the walker's activation
stack. Given the paths ``a/b/c`` and ``a/x/y`` it reports::

    <a><b><c>            (first path)
    </c></b><x><y>       (second path: the shared "a" stays open)
    </y></x></a>         (close)

A second mode, :meth:`TreeBuilder.align_node`, builds a tree from a flat
sequence of nodes and a relative ordering, e.g. document headings.
"""

from typing import Any, Callable, Iterable, Optional, Tuple

from .listener import WalkerListener
from .walker import Walker


EqualsFunc = Callable[[Any, Any], bool]
CompareFunc = Callable[[Any, Any], int]


def default_equals(a: Any, b: Any) -> bool:
    """None equals only None; everything else compares with ``==``."""
    if a is None or b is None:
        return a is b
    return a == b


class TreeBuilder:
    """Re-creates a tree structure from individual paths.

    Example:
        builder = TreeBuilder(PrintListener())
        builder.align("a/b/c".split("/"))
        builder.align("a/x/y".split("/"))
        builder.close()
    """

    def __init__(self,
                 listener: Optional[WalkerListener] = None,
                 walker: Optional[Walker] = None,
                 equals: Optional[EqualsFunc] = None):
        """Initialize the builder.

        Args:
            listener: Observer notified about opened and closed nodes
                (ignored if ``walker`` is given)
            walker: A ready walker to drive instead of creating one
            equals: Path segment comparison (defaults to :func:`default_equals`)
        """
        self._walker = walker if walker is not None else Walker(listener)
        self._equals = equals if equals is not None else default_equals

    @property
    def walker(self) -> Walker:
        return self._walker

    @property
    def path(self) -> Tuple[Any, ...]:
        """The currently open path, root first."""
        return self._walker.path

    def common_prefix(self, path: Tuple[Any, ...]) -> int:
        """Length of the prefix shared by the open path and ``path``."""
        stack = self._walker.stack
        length = min(len(stack), len(path))
        i = 0
        while i < length and self._equals(stack[i], path[i]):
            i += 1
        return i

    def align(self, path: Iterable[Any]) -> None:
        """Align the open path with ``path``, reporting the difference.

        Nodes below the common prefix are closed (innermost first) and the
        rest of ``path`` is opened. If ``path`` is entirely a prefix of the
        open path, its last node is still closed and reopened: every
        aligned path ends in a fresh activation.

        Args:
            path: The next root-to-leaf path
        """
        path = tuple(path)
        walker = self._walker
        i = self.common_prefix(path)
        if i == len(path):
            i -= 1
        keep = max(i, 0)
        while walker.depth > keep:
            walker.end()
        for node in path[keep:]:
            walker.begin(node)

    def align_node(self, node: Any, compare: CompareFunc) -> None:
        """Open ``node`` under the nearest open node that outranks it.

        Open nodes are closed from the top for as long as
        ``compare(node, open_node) < 0`` is false, then ``node`` is opened
        as a child of whatever remains. With headings ranked so that
        ``compare(h2, h1) < 0``, the sequence h1, h2, h2 becomes
        ``h1{h2, h2}``.

        Args:
            node: The next node of the flat sequence
            compare: cmp-style function; negative means the second
                argument outranks the first
        """
        walker = self._walker
        while not walker.is_finished and not compare(node, walker.current) < 0:
            walker.end()
        walker.begin(node)

    def close(self) -> None:
        """Close every open node, finishing the build session."""
        walker = self._walker
        while walker.end():
            pass

    def __enter__(self) -> 'TreeBuilder':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.close()
