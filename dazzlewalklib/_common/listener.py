"""Walker listener contract for DazzleWalkLib.

A listener is the only way to observe what a :class:`Walker` does. Every
observer (trace printers, collectors, tree assemblers) implements the
three callbacks defined here. Listeners are purely observational: they
must never drive the walker that invoked them.
"""

import sys
from typing import Any, Callable, Iterable, Optional, TextIO, Tuple


class WalkerListener:
    """Listener notified when a walker activates or deactivates nodes.

    This base class implements every callback as a no-op, so it doubles
    as the default listener used when none is supplied. It holds no
    state; subclasses override only the callbacks they care about.
    """

    def on_begin(self, parent: Any, node: Any) -> None:
        """Called once when ``node`` is about to be pushed on the stack.

        Args:
            parent: The node directly below ``node`` (None for the root)
            node: The node being activated
        """
        pass

    def on_end(self, parent: Any, node: Any) -> None:
        """Called once after ``node`` was popped from the stack.

        Args:
            parent: The new top of the stack (None if it became empty)
            node: The node that was deactivated
        """
        pass

    def on_transition(self, parent: Any, prev: Any, next: Any) -> None:
        """Called right before every begin or end on a non-empty stack.

        ``prev`` is the node deactivated by the previous step (None if
        that step was an activation) and ``next`` is the node about to
        be activated (None if this step is a deactivation). Together
        they tell a sibling-to-sibling move from a plain enter or exit.

        Args:
            parent: The current top of the stack
            prev: The node just left, or None
            next: The node about to be entered, or None
        """
        pass


class CompositeWalkerListener(WalkerListener):
    """Dispatches every callback to several listeners in registration order.

    Registration is copy-on-write: adding or removing a listener while a
    dispatch is running replaces the tuple for later dispatches and leaves
    the running one untouched.

    Example:
        composite = CompositeWalkerListener()
        composite.add_listener(PrintListener())
        composite.add_listener(EventCollector())
        walker = Walker(composite)
    """

    def __init__(self, listeners: Iterable[WalkerListener] = ()):
        self._listeners: Tuple[WalkerListener, ...] = tuple(listeners)

    @property
    def listeners(self) -> Tuple[WalkerListener, ...]:
        return self._listeners

    def add_listener(self, listener: WalkerListener) -> None:
        self._listeners = self._listeners + (listener,)

    def remove_listener(self, listener: WalkerListener) -> None:
        """Remove the first registration of ``listener``, if any."""
        listeners = list(self._listeners)
        if listener in listeners:
            listeners.remove(listener)
        self._listeners = tuple(listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def on_begin(self, parent: Any, node: Any) -> None:
        for listener in self._listeners:
            listener.on_begin(parent, node)

    def on_end(self, parent: Any, node: Any) -> None:
        for listener in self._listeners:
            listener.on_end(parent, node)

    def on_transition(self, parent: Any, prev: Any, next: Any) -> None:
        for listener in self._listeners:
            listener.on_transition(parent, prev, next)


class CallbackWalkerListener(WalkerListener):
    """Listener built from plain callables.

    Any callback left as None is ignored.

    Example:
        listener = CallbackWalkerListener(
            on_begin=lambda parent, node: print("enter", node),
        )
    """

    def __init__(self,
                 on_begin: Optional[Callable[[Any, Any], None]] = None,
                 on_end: Optional[Callable[[Any, Any], None]] = None,
                 on_transition: Optional[Callable[[Any, Any, Any], None]] = None):
        self._on_begin = on_begin
        self._on_end = on_end
        self._on_transition = on_transition

    def on_begin(self, parent: Any, node: Any) -> None:
        if self._on_begin is not None:
            self._on_begin(parent, node)

    def on_end(self, parent: Any, node: Any) -> None:
        if self._on_end is not None:
            self._on_end(parent, node)

    def on_transition(self, parent: Any, prev: Any, next: Any) -> None:
        if self._on_transition is not None:
            self._on_transition(parent, prev, next)


class PrintListener(WalkerListener):
    """Writes XML-like traces of every node visited by a walker.

    Works with anything driven by a walker (graph iterators, tree
    builders). A walk over ``a{b}`` is rendered as::

        <a>
          <b>
          </b>
        </a>

    With ``indent=False`` the same walk becomes ``<a><b></b></a>``, which
    is convenient for assertions.
    """

    def __init__(self,
                 indent: bool = True,
                 print_nodes: bool = True,
                 print_transitions: bool = False,
                 stream: Optional[TextIO] = None):
        """Initialize the trace printer.

        Args:
            indent: Indent lines by depth and terminate each with a newline
            print_nodes: Emit ``<node>``/``</node>`` for begin/end events
            print_transitions: Emit ``<transition .../>`` elements
            stream: Text stream to write to (defaults to ``sys.stdout``)
        """
        self.indent = indent
        self.print_nodes = print_nodes
        self.print_transitions = print_transitions
        self.stream = stream
        self.depth = 0

    def get_name(self, node: Any) -> Optional[str]:
        """Return the label printed for ``node``."""
        return str(node) if node is not None else None

    def on_begin(self, parent: Any, node: Any) -> None:
        if self.print_nodes:
            self.println(f"<{self.get_name(node)}>")
        self.depth += 1

    def on_end(self, parent: Any, node: Any) -> None:
        self.depth -= 1
        if self.print_nodes:
            self.println(f"</{self.get_name(node)}>")

    def on_transition(self, parent: Any, prev: Any, next: Any) -> None:
        if self.print_transitions:
            self.println(
                f"<transition parent='{self.get_name(parent)}' "
                f"from='{self.get_name(prev)}' to='{self.get_name(next)}' />"
            )

    def print(self, text: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text)

    def println(self, text: str) -> None:
        """Write one trace line, indented by the current depth."""
        if self.indent:
            self.print("  " * self.depth)
        self.print(text)
        if self.indent:
            self.print("\n")
