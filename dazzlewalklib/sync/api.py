"""High-level API for DazzleWalkLib.

This module provides simple, functional interfaces for common walks and
tree-building jobs. These functions wrap the object-oriented API
(GraphIterator, IteratorBasedGraphIterator, TreeBuilder) for ease of
use in simple cases.
"""

import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from .._common.collector import NestedTreeCollector, TreeEntry
from .._common.config import IterationMode, WalkConfig
from .._common.listener import CompositeWalkerListener, WalkerListener
from .._common.walker import Walker
from .._common.builder import EqualsFunc, TreeBuilder
from .core.children import ChildrenFunc, IteratorBasedGraphIterator
from .core.iterator import GraphIterator, NextNodeFunc

logger = logging.getLogger(__name__)


def walk(
    root: Any,
    next_node: NextNodeFunc,
    config: Optional[WalkConfig] = None,
    **kwargs
) -> Iterator[Any]:
    """Walk a graph described by a ``next_node(parent, previous)`` function.

    Args:
        root: Starting node
        next_node: Returns the first child (previous=None) or next sibling
        config: Base configuration
        **kwargs: Overrides for ``config`` (mode, max_depth, include_filter,
            listener)

    Yields:
        Nodes at the yield points selected by the mode

    Example:
        >>> list(walk("X", next_node, mode=IterationMode.EXIT))
        ['a1', 'a2', 'a', 'b1', 'b2', 'b', 'X']
    """
    config = WalkConfig.from_kwargs(config, **kwargs)
    walker = Walker(config.listener)

    def limited(parent: Any, previous: Any) -> Any:
        candidate = next_node(parent, previous)
        while candidate is not None and not config.should_include(candidate):
            candidate = next_node(parent, candidate)
        if candidate is not None and not config.allows_depth(walker.depth):
            return None
        return candidate

    yield from GraphIterator(limited, root, mode=config.mode, walker=walker)


def walk_children(
    root: Any,
    children: ChildrenFunc,
    config: Optional[WalkConfig] = None,
    **kwargs
) -> Iterator[Any]:
    """Walk a tree described by a ``children(node)`` function.

    Child iterators still open when the generator is abandoned are closed.

    Args:
        root: Starting node
        children: Returns an iterable of children, or None
        config: Base configuration
        **kwargs: Overrides for ``config`` (see :func:`walk`)

    Yields:
        Nodes at the yield points selected by the mode

    Example:
        >>> tree = {"X": ["a", "b"], "a": ["a1"]}
        >>> list(walk_children("X", tree.get))
        ['X', 'a', 'a1', 'b']
    """
    config = WalkConfig.from_kwargs(config, **kwargs)
    with _children_iterator(root, children, config) as iterator:
        yield from iterator


def _children_iterator(root: Any,
                       children: ChildrenFunc,
                       config: WalkConfig) -> IteratorBasedGraphIterator:
    walker = Walker(config.listener)

    def filtered(node: Any) -> Optional[Iterable[Any]]:
        if not config.allows_depth(walker.depth):
            return None
        items = children(node)
        if items is None or config.include_filter is None:
            return items
        return (item for item in items if config.should_include(item))

    return IteratorBasedGraphIterator(filtered, root, mode=config.mode, walker=walker)


def get_leaf_nodes(root: Any, children: ChildrenFunc, **kwargs) -> List[Any]:
    """Return all nodes without children, in walk order."""
    kwargs['mode'] = IterationMode.LEAF
    return list(walk_children(root, children, **kwargs))


def get_tree_paths(root: Any, children: ChildrenFunc, **kwargs) -> Iterator[Tuple[Any, ...]]:
    """Yield every root-to-leaf path of the tree.

    The paths are exactly what :func:`build_tree` needs to rebuild it.

    Yields:
        Tuples of nodes, root first
    """
    config = WalkConfig.from_kwargs(**kwargs)
    config.mode = IterationMode.LEAF
    with _children_iterator(root, children, config) as iterator:
        for _ in iterator:
            yield iterator.walker.path


def count_nodes(root: Any, children: ChildrenFunc, **kwargs) -> int:
    """Count the nodes of a tree (each node once)."""
    kwargs['mode'] = IterationMode.DEFAULT
    return sum(1 for _ in walk_children(root, children, **kwargs))


def build_tree(
    paths: Iterable[Iterable[Any]],
    listener: Optional[WalkerListener] = None,
    equals: Optional[EqualsFunc] = None
) -> List[TreeEntry]:
    """Rebuild a tree from root-to-leaf paths.

    Args:
        paths: Paths to align, in order
        listener: Extra observer for the begin/end events
        equals: Path segment comparison

    Returns:
        The rebuilt forest

    Example:
        >>> [e.to_tuple() for e in build_tree([["a", "b"], ["a", "c"]])]
        [('a', [('b', []), ('c', [])])]
    """
    collector = NestedTreeCollector()
    builder = TreeBuilder(_with_collector(collector, listener), equals=equals)
    count = 0
    for path in paths:
        builder.align(path)
        count += 1
    builder.close()
    logger.debug("Rebuilt %d root(s) from %d path(s)", len(collector.roots), count)
    return collector.roots


def build_outline(
    items: Iterable[Any],
    level: Callable[[Any], Any],
    listener: Optional[WalkerListener] = None
) -> List[TreeEntry]:
    """Nest a flat sequence by rank, like headings in a document.

    An item becomes a child of the nearest preceding open item with a
    strictly lower level; items of equal level are siblings.

    Args:
        items: The flat sequence
        level: Returns the rank of an item (lower ranks enclose higher)
        listener: Extra observer for the begin/end events

    Returns:
        The outline as a forest

    Example:
        >>> outline = build_outline(["h1", "h2", "h2"], level=lambda h: int(h[1:]))
        >>> [e.to_tuple() for e in outline]
        [('h1', [('h2', []), ('h2', [])])]
    """
    collector = NestedTreeCollector()
    builder = TreeBuilder(_with_collector(collector, listener))

    def compare(node: Any, open_node: Any) -> int:
        a, b = level(open_node), level(node)
        return (a > b) - (a < b)

    for item in items:
        builder.align_node(item, compare)
    builder.close()
    return collector.roots


def _with_collector(collector: NestedTreeCollector,
                    listener: Optional[WalkerListener]) -> WalkerListener:
    if listener is None:
        return collector
    return CompositeWalkerListener([collector, listener])
