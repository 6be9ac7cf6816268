"""Core abstractions for async walks.

The async iterators drive the same Walker and listeners as the sync
implementation; only child enumeration is awaited.
"""

from .iterator import AsyncGraphIterator
from .children import AsyncChildIteratorStack, AsyncIteratorBasedGraphIterator

__all__ = [
    'AsyncGraphIterator',
    'AsyncChildIteratorStack',
    'AsyncIteratorBasedGraphIterator',
]
