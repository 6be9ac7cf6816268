"""Caching children for DazzleWalkLib.

Provides a transparent caching layer that can wrap any ``children``
function. Useful when the same nodes are enumerated repeatedly, either
by several walks over one tree or by a graph whose nodes are reachable
along more than one path.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)


class CachingChildren:
    """Memoises the materialised child list of each parent.

    Example:
        children = CachingChildren(FileSystemChildren(), max_size=50000)
        first = count_nodes(root, children)
        second = count_nodes(root, children)  # served from the cache
    """

    def __init__(self,
                 children: Callable[[Any], Optional[Iterable[Any]]],
                 max_size: int = 10000,
                 ttl: float = 300.0,  # 5 minutes
                 key: Optional[Callable[[Any], Any]] = None):
        """Initialize caching children.

        Args:
            children: The underlying ``children(node)`` function
            max_size: Maximum number of cached parents
            ttl: Time-to-live for cache entries in seconds
            key: Cache key for a node (defaults to the node itself)
        """
        self._children = children
        self._cache = TTLCache(maxsize=max_size, ttl=ttl)
        self._key = key

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0

    def get_cache_key(self, node: Any) -> Any:
        return self._key(node) if self._key is not None else node

    def __call__(self, node: Any) -> Optional[List[Any]]:
        cache_key = self.get_cache_key(node)

        try:
            cached = self._cache[cache_key]
        except KeyError:
            pass
        else:
            self.cache_hits += 1
            logger.debug("Children cache hit for %r", cache_key)
            return cached

        self.cache_misses += 1
        children = self._children(node)
        result = list(children) if children is not None else None
        self._cache[cache_key] = result
        return result

    def invalidate(self, node: Any = None) -> None:
        """Drop one cached parent, or everything if ``node`` is None."""
        if node is None:
            self._cache.clear()
        else:
            self._cache.pop(self.get_cache_key(node), None)

    def __len__(self) -> int:
        return len(self._cache)
