"""DazzleWalkLib - Stack-driven tree walking and rebuilding.

DazzleWalkLib walks any tree or graph through an explicit activation
stack, independent of how nodes are represented. You describe the
structure (a children function or a stream of root-to-leaf paths) and
listeners are told when nodes are entered, left, and when control moves
between siblings.

Choose your implementation:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Synchronous:
    from dazzlewalklib.sync import walk_children, TreeBuilder

Asynchronous:
    from dazzlewalklib.aio import walk_children_async
━━━━━━━━━━━━━━━━━━━━━━━━━━

Both implementations share the same Walker and listeners. Pick the one
that fits your application.
"""

__version__ = "0.1.0"

# Re-export submodules for convenient access
from . import sync
from . import aio

# Users must explicitly choose their implementation
__all__ = [
    "__version__",
    "sync",
    "aio",
]
