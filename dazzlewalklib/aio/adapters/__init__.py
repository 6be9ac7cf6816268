"""Child-enumeration adapters for async walks."""

from .filesystem import AsyncFileSystemChildren
from .caching import AsyncCachingChildren

__all__ = [
    'AsyncFileSystemChildren',
    'AsyncCachingChildren',
]
