"""Async child enumeration from per-node iterators.

The async counterpart of ChildIteratorStack. ``children(node)`` may
return an async iterable (e.g. an async generator), an awaitable that
resolves to an iterable, a plain iterable, or None.
"""

import inspect
from typing import Any, Callable, List, Optional

from ..._common.config import IterationMode, ModeLike
from ..._common.listener import WalkerListener
from ..._common.walker import Walker
from .iterator import AsyncGraphIterator


AsyncChildrenFunc = Callable[[Any], Any]

_EXHAUSTED = object()


class AsyncChildIteratorStack:
    """Implements an async ``next_node`` over a ``children(node)`` function.

    Keeps one child iterator per active node, exactly like the
    synchronous version; iterators may be sync or async.
    """

    def __init__(self, children: AsyncChildrenFunc):
        self._children = children
        self._iterators: List[Any] = []

    async def __call__(self, parent: Any, previous: Any) -> Any:
        return await self.load_next_node(parent, previous)

    @property
    def iterators(self) -> List[Any]:
        return self._iterators

    @property
    def depth(self) -> int:
        return len(self._iterators)

    async def new_iterator(self, node: Any) -> Any:
        """Return a sync or async iterator over the children of ``node``."""
        children = self._children(node)
        if inspect.isawaitable(children):
            children = await children
        if children is None:
            return None
        if hasattr(children, '__aiter__'):
            return children.__aiter__()
        return iter(children)

    async def delete_iterator(self, iterator: Any) -> None:
        """Dispose of an iterator, awaiting ``aclose()`` for async generators."""
        aclose = getattr(iterator, 'aclose', None)
        if aclose is not None:
            await aclose()
            return
        close = getattr(iterator, 'close', None)
        if close is not None:
            close()

    async def load_next_node(self, parent: Any, previous: Any) -> Any:
        if previous is None:
            iterator = await self.new_iterator(parent) if parent is not None else None
            self._iterators.append(iterator)
        elif self._iterators:
            await self.delete_iterator(self._iterators.pop())
        return await self._load_next()

    async def _load_next(self) -> Any:
        iterator = self._iterators[-1] if self._iterators else None
        if iterator is None:
            return None
        if hasattr(iterator, '__anext__'):
            try:
                return await iterator.__anext__()
            except StopAsyncIteration:
                return None
        node = next(iterator, _EXHAUSTED)
        return None if node is _EXHAUSTED else node

    async def aclose(self) -> None:
        """Dispose of every iterator still on the stack, innermost first."""
        while self._iterators:
            await self.delete_iterator(self._iterators.pop())


class AsyncIteratorBasedGraphIterator(AsyncGraphIterator):
    """AsyncGraphIterator whose children come from ``children(node)``.

    Example:
        async def children(path):
            for entry in await list_dir(path):
                yield entry

        async with AsyncIteratorBasedGraphIterator(children, root) as it:
            async for node in it:
                print(node)
    """

    def __init__(self,
                 children: AsyncChildrenFunc,
                 top: Any = None,
                 mode: ModeLike = IterationMode.DEFAULT,
                 listener: Optional[WalkerListener] = None,
                 walker: Optional[Walker] = None):
        self._child_stack = AsyncChildIteratorStack(children)
        super().__init__(self._child_stack, top, mode=mode,
                         listener=listener, walker=walker)

    @property
    def child_stack(self) -> AsyncChildIteratorStack:
        return self._child_stack

    async def _shift(self, keep: bool) -> Any:
        node = await super()._shift(keep)
        if node is None:
            await self._child_stack.aclose()
        return node

    async def aclose(self) -> None:
        """Release the child iterators of an abandoned iteration."""
        await self._child_stack.aclose()

    async def __aenter__(self) -> 'AsyncIteratorBasedGraphIterator':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
