"""The Walker: an activation stack that drives listener notifications.

The walker is the engine under every iterator and builder in
DazzleWalkLib. It turns two primitive calls, "activate this node" and
"deactivate the top node", into ordered ``on_transition``/``on_begin``/
``on_end`` notifications while keeping the stack of currently active
nodes (root first).
"""

from typing import Any, Optional, Tuple

from .listener import WalkerListener


class WalkerStateError(RuntimeError):
    """Raised when a walker is driven from inside its own listener."""
    pass


class WalkerStack(list):
    """List-backed stack of active nodes.

    ``peek`` and ``pop`` return None instead of raising on an empty
    stack. Being a list, the stack stays indexable and inspectable.
    """

    def peek(self) -> Any:
        return self[-1] if self else None

    def pop(self, *args) -> Any:
        if not self:
            return None
        return super().pop(*args)

    def push(self, node: Any) -> None:
        self.append(node)


class Walker:
    """Translates begin/end calls into listener notifications.

    None is the "empty" marker: ``update(node)`` activates ``node`` and
    ``update(None)`` deactivates the top of the stack. Any other value,
    including falsy ones like ``0`` or ``""``, is a node.

    Example:
        walker = Walker(PrintListener(indent=False))
        walker.begin("a")      # <a>
        walker.empty("b")      # <b></b>
        walker.end()           # </a>
    """

    def __init__(self, listener: Optional[WalkerListener] = None):
        """Initialize the walker.

        Args:
            listener: Observer for walker events (no-op listener if None)
        """
        self._stack = self.new_stack()
        self._listener = listener if listener is not None else WalkerListener()
        self._previous: Any = None
        self._dispatching = False

    def new_stack(self) -> WalkerStack:
        """Create the stack used by this walker."""
        return WalkerStack()

    @property
    def listener(self) -> WalkerListener:
        return self._listener

    @listener.setter
    def listener(self, listener: Optional[WalkerListener]) -> None:
        self._listener = listener if listener is not None else WalkerListener()

    @property
    def stack(self) -> WalkerStack:
        """The live activation stack (root first). Do not mutate it."""
        return self._stack

    @property
    def path(self) -> Tuple[Any, ...]:
        """Snapshot of the activation stack, root first."""
        return tuple(self._stack)

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def current(self) -> Any:
        """The top of the stack, or None if nothing is active."""
        return self._stack.peek()

    @property
    def previous(self) -> Any:
        """The node deactivated by the last update, or None.

        Cleared by every activation.
        """
        return self._previous

    @property
    def is_finished(self) -> bool:
        return not self._stack

    @property
    def is_entered(self) -> bool:
        """True if the last update activated a node."""
        return self._previous is None and bool(self._stack)

    @property
    def is_exited(self) -> bool:
        """True if the last update deactivated a node."""
        return self._previous is not None

    def begin(self, node: Any) -> bool:
        """Activate ``node`` as a child of the current top."""
        return self.update(node)

    def end(self) -> bool:
        """Deactivate the current top."""
        return self.update(None)

    def empty(self, node: Any) -> bool:
        """Activate ``node`` and immediately deactivate it (a leaf)."""
        self.update(node)
        return self.update(None)

    def update(self, node: Any = None) -> bool:
        """Push ``node`` or, if it is None, pop the top of the stack.

        If the stack is not empty, ``on_transition(top, previous, node)``
        fires first. An activation then clears ``previous``, fires
        ``on_begin`` and pushes the node, so a failing ``on_begin`` leaves
        the node inactive. A deactivation pops the top into ``previous``
        and then fires ``on_end``.

        Args:
            node: The node to activate, or None to deactivate

        Returns:
            False if there was nothing to deactivate, True otherwise

        Raises:
            WalkerStateError: If called from one of this walker's callbacks
        """
        if self._dispatching:
            raise WalkerStateError(
                "Walker cannot be updated from inside its own listener"
            )
        if node is None and not self._stack:
            return False

        listener = self._listener
        self._dispatching = True
        try:
            if self._stack:
                listener.on_transition(self._stack.peek(), self._previous, node)
            if node is not None:
                self._previous = None
                listener.on_begin(self._stack.peek(), node)
                self._stack.push(node)
            else:
                self._previous = self._stack.pop()
                listener.on_end(self._stack.peek(), self._previous)
        finally:
            self._dispatching = False
        return True

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Walker):
            return NotImplemented
        return list(self._stack) == list(other._stack)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._stack)!r})"
