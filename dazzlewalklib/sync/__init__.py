"""Synchronous implementation of DazzleWalkLib.

This package contains the blocking walk engines: GraphIterator for lazy
iteration, TreeBuilder for rebuilding trees from paths, and the shared
Walker and listeners they report through.
"""

# Shared engine and listeners
from .._common.walker import Walker, WalkerStack, WalkerStateError
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

# Core components
from .core.iterator import GraphIterator
from .core.children import ChildIteratorStack, IteratorBasedGraphIterator
from .._common.builder import TreeBuilder

# Adapters
from .adapters.filesystem import FileSystemChildren
from .adapters.caching import CachingChildren

# Configuration
from .config import IterationMode, WalkConfig, ConfigurationError

# High-level API
from .api import (
    walk,
    walk_children,
    get_leaf_nodes,
    get_tree_paths,
    count_nodes,
    build_tree,
    build_outline,
)

__all__ = [
    # Engine
    'Walker',
    'WalkerStack',
    'WalkerStateError',
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
    # Core
    'GraphIterator',
    'ChildIteratorStack',
    'IteratorBasedGraphIterator',
    'TreeBuilder',
    # Adapters
    'FileSystemChildren',
    'CachingChildren',
    # Config
    'IterationMode',
    'WalkConfig',
    'ConfigurationError',
    # API
    'walk',
    'walk_children',
    'get_leaf_nodes',
    'get_tree_paths',
    'count_nodes',
    'build_tree',
    'build_outline',
]
