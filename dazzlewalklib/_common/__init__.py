"""Common components shared between sync and aio implementations.

This internal package contains non-I/O code that is identical between
both implementations. It should NOT be imported directly by users.

Components here include:
- Configuration (IterationMode, WalkConfig)
- The Walker and its activation stack
- The TreeBuilder (pure stack diffing, no I/O)
- The listener contract and the stock listeners/collectors

Important: This package must NEVER import from sync or aio to avoid
circular dependencies.
"""

from .config import (
    IterationMode,
    WalkConfig,
    ConfigurationError,
)
from .listener import (
    WalkerListener,
    CompositeWalkerListener,
    CallbackWalkerListener,
    PrintListener,
)
from .walker import Walker, WalkerStack, WalkerStateError
from .builder import TreeBuilder, default_equals
from .collector import (
    WalkEvent,
    WalkEventKind,
    EventCollector,
    TreeEntry,
    NestedTreeCollector,
)

__all__ = [
    'IterationMode',
    'WalkConfig',
    'ConfigurationError',
    'WalkerListener',
    'CompositeWalkerListener',
    'CallbackWalkerListener',
    'PrintListener',
    'Walker',
    'WalkerStack',
    'WalkerStateError',
    'TreeBuilder',
    'default_equals',
    'WalkEvent',
    'WalkEventKind',
    'EventCollector',
    'TreeEntry',
    'NestedTreeCollector',
]
