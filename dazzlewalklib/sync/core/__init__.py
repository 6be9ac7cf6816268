"""Core abstractions for DazzleWalkLib.

This module contains the synchronous engines built on the shared Walker:
the graph iterators and the tree builder.
"""

from .iterator import GraphIterator
from .children import ChildIteratorStack, IteratorBasedGraphIterator
from ..._common.builder import TreeBuilder, default_equals

__all__ = [
    "GraphIterator",
    "ChildIteratorStack",
    "IteratorBasedGraphIterator",
    "TreeBuilder",
    "default_equals",
]
