"""Asynchronous implementation of DazzleWalkLib.

This package contains native async/await iterators for walks whose child
enumeration performs I/O. Listeners, the Walker and the TreeBuilder are
shared with the synchronous implementation.
"""

# Shared engine and listeners
from .._common.walker import Walker, WalkerStack, WalkerStateError
from .._common.builder import TreeBuilder
from .._common.listener import (
    WalkerListener,
    CompositeWalkerListener,
    CallbackWalkerListener,
    PrintListener,
)
from .._common.collector import (
    WalkEvent,
    WalkEventKind,
    EventCollector,
    TreeEntry,
    NestedTreeCollector,
)

# Core abstractions
from .core import (
    AsyncGraphIterator,
    AsyncChildIteratorStack,
    AsyncIteratorBasedGraphIterator,
)

# Adapters
from .adapters import (
    AsyncFileSystemChildren,
    AsyncCachingChildren,
)

# Configuration (re-exported from _common)
from .config import (
    IterationMode,
    WalkConfig,
    ConfigurationError,
)

# High-level API
from .api import (
    walk_async,
    walk_children_async,
    get_leaf_nodes_async,
    get_tree_paths_async,
    count_nodes_async,
    build_tree_async,
)

__all__ = [
    # Engine
    'Walker',
    'WalkerStack',
    'WalkerStateError',
    'TreeBuilder',
    # Listeners
    'WalkerListener',
    'CompositeWalkerListener',
    'CallbackWalkerListener',
    'PrintListener',
    'WalkEvent',
    'WalkEventKind',
    'EventCollector',
    'TreeEntry',
    'NestedTreeCollector',
    # Core abstractions
    'AsyncGraphIterator',
    'AsyncChildIteratorStack',
    'AsyncIteratorBasedGraphIterator',
    # Adapters
    'AsyncFileSystemChildren',
    'AsyncCachingChildren',
    # Configuration
    'IterationMode',
    'WalkConfig',
    'ConfigurationError',
    # High-level API
    'walk_async',
    'walk_children_async',
    'get_leaf_nodes_async',
    'get_tree_paths_async',
    'count_nodes_async',
    'build_tree_async',
]
