"""High-level async API for DazzleWalkLib.

Async counterparts of the functions in ``dazzlewalklib.sync.api``. The
child-enumeration functions may be coroutines; listeners are the same
synchronous listeners used by the sync API.
"""

import inspect
import logging
from typing import Any, AsyncIterator, Callable, List, Optional, Tuple

from .._common.builder import TreeBuilder
from .._common.collector import NestedTreeCollector, TreeEntry
from .._common.config import IterationMode, WalkConfig
from .._common.listener import CompositeWalkerListener, WalkerListener
from .._common.walker import Walker
from .core.children import AsyncChildrenFunc, AsyncIteratorBasedGraphIterator
from .core.iterator import AsyncGraphIterator, AsyncNextNodeFunc

logger = logging.getLogger(__name__)


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def walk_async(
    root: Any,
    next_node: AsyncNextNodeFunc,
    config: Optional[WalkConfig] = None,
    **kwargs
) -> AsyncIterator[Any]:
    """Walk a graph described by an async ``next_node(parent, previous)``.

    Args:
        root: Starting node
        next_node: Returns (or resolves to) the first child or next sibling
        config: Base configuration
        **kwargs: Overrides for ``config`` (mode, max_depth, include_filter,
            listener)

    Yields:
        Nodes at the yield points selected by the mode
    """
    config = WalkConfig.from_kwargs(config, **kwargs)
    walker = Walker(config.listener)

    async def limited(parent: Any, previous: Any) -> Any:
        candidate = await _resolve(next_node(parent, previous))
        while candidate is not None and not config.should_include(candidate):
            candidate = await _resolve(next_node(parent, candidate))
        if candidate is not None and not config.allows_depth(walker.depth):
            return None
        return candidate

    async for node in AsyncGraphIterator(limited, root, mode=config.mode, walker=walker):
        yield node


def _children_iterator(root: Any,
                       children: AsyncChildrenFunc,
                       config: WalkConfig) -> AsyncIteratorBasedGraphIterator:
    walker = Walker(config.listener)

    async def filtered(node: Any) -> Any:
        if not config.allows_depth(walker.depth):
            return None
        items = await _resolve(children(node))
        if items is None or config.include_filter is None:
            return items
        return _filter_children(items, config)

    return AsyncIteratorBasedGraphIterator(filtered, root, mode=config.mode, walker=walker)


async def _filter_children(items: Any, config: WalkConfig) -> AsyncIterator[Any]:
    if hasattr(items, '__aiter__'):
        async for item in items:
            if config.should_include(item):
                yield item
    else:
        for item in items:
            if config.should_include(item):
                yield item


async def walk_children_async(
    root: Any,
    children: AsyncChildrenFunc,
    config: Optional[WalkConfig] = None,
    **kwargs
) -> AsyncIterator[Any]:
    """Walk a tree described by an async ``children(node)`` function.

    Example:
        >>> async for path in walk_children_async(root, AsyncFileSystemChildren()):
        ...     print(path)
    """
    config = WalkConfig.from_kwargs(config, **kwargs)
    async with _children_iterator(root, children, config) as iterator:
        async for node in iterator:
            yield node


async def get_leaf_nodes_async(root: Any, children: AsyncChildrenFunc, **kwargs) -> List[Any]:
    """Return all nodes without children, in walk order."""
    kwargs['mode'] = IterationMode.LEAF
    return [node async for node in walk_children_async(root, children, **kwargs)]


async def get_tree_paths_async(
    root: Any,
    children: AsyncChildrenFunc,
    **kwargs
) -> AsyncIterator[Tuple[Any, ...]]:
    """Yield every root-to-leaf path of the tree."""
    config = WalkConfig.from_kwargs(**kwargs)
    config.mode = IterationMode.LEAF
    async with _children_iterator(root, children, config) as iterator:
        async for _ in iterator:
            yield iterator.walker.path


async def count_nodes_async(root: Any, children: AsyncChildrenFunc, **kwargs) -> int:
    """Count the nodes of a tree (each node once)."""
    kwargs['mode'] = IterationMode.DEFAULT
    count = 0
    async for _ in walk_children_async(root, children, **kwargs):
        count += 1
    return count


async def build_tree_async(
    paths: Any,
    listener: Optional[WalkerListener] = None,
    equals: Optional[Callable[[Any, Any], bool]] = None
) -> List[TreeEntry]:
    """Rebuild a tree from an async (or plain) iterable of paths.

    Args:
        paths: Paths to align, in order
        listener: Extra observer for the begin/end events
        equals: Path segment comparison

    Returns:
        The rebuilt forest
    """
    collector = NestedTreeCollector()
    target = collector if listener is None else CompositeWalkerListener([collector, listener])
    builder = TreeBuilder(target, equals=equals)
    if hasattr(paths, '__aiter__'):
        async for path in paths:
            builder.align(path)
    else:
        for path in paths:
            builder.align(path)
    builder.close()
    logger.debug("Rebuilt %d root(s) from async paths", len(collector.roots))
    return collector.roots
