"""Async graph iteration on top of a Walker.

Same state machine as the synchronous GraphIterator, but the
child-enumeration function may be a coroutine, so enumeration can wait
on I/O without blocking the event loop. Listeners stay synchronous and
fire inline with each walker update.
"""

import inspect
from typing import Any, AsyncIterator, Callable, Optional

from ..._common.config import IterationMode, ModeLike, classify_step
from ..._common.listener import WalkerListener
from ..._common.walker import Walker


AsyncNextNodeFunc = Callable[[Any, Any], Any]


class AsyncGraphIterator:
    """Async iterator over a graph given a child-enumeration function.

    ``next_node(parent, previous)`` has the same contract as for
    GraphIterator; it may be a plain function or a coroutine function.

    Example:
        async def next_node(parent, previous):
            return await store.next_child(parent, previous)

        async for node in AsyncGraphIterator(next_node, root):
            print(node)
    """

    def __init__(self,
                 next_node: AsyncNextNodeFunc,
                 top: Any = None,
                 mode: ModeLike = IterationMode.DEFAULT,
                 listener: Optional[WalkerListener] = None,
                 walker: Optional[Walker] = None):
        self._next_node = next_node
        self._walker = walker if walker is not None else Walker(listener)
        self._mode = int(mode)
        self._status = IterationMode.NONE
        self._pending: Any = None
        self._done = False
        if top is not None:
            self.begin(top)

    def begin(self, top: Any) -> None:
        self._pending = top

    @property
    def mode(self) -> int:
        return self._mode

    @mode.setter
    def mode(self, mode: ModeLike) -> None:
        self._mode = int(mode)

    @property
    def status(self) -> IterationMode:
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

    async def load_next_node(self, parent: Any, previous: Any) -> Any:
        result = self._next_node(parent, previous)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _shift(self, keep: bool) -> Any:
        if not self._done:
            walker = self._walker
            while True:
                pending, self._pending = self._pending, None
                if not walker.update(pending):
                    break
                if walker.current is None:
                    break
                previous = walker.previous
                candidate = await self.load_next_node(walker.current, previous)
                self._status = classify_step(previous, candidate)
                self._pending = candidate
                if int(self._status) & self._mode:
                    break
        self._done = keep
        return self._walker.current

    async def has_next(self) -> bool:
        """Check for a next node without consuming it."""
        return await self._shift(True) is not None

    def __aiter__(self) -> AsyncIterator[Any]:
        return self

    async def __anext__(self) -> Any:
        node = await self._shift(False)
        if node is None:
            raise StopAsyncIteration
        return node

    def remove(self) -> None:
        raise NotImplementedError(f"{self.__class__.__name__} does not support removal")
