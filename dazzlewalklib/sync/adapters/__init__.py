"""Child-enumeration adapters for synchronous walks."""

from .filesystem import FileSystemChildren
from .caching import CachingChildren

__all__ = [
    'FileSystemChildren',
    'CachingChildren',
]
