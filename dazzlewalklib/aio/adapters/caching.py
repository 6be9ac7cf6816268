"""
Caching children for async walks.

Provides a transparent caching layer that can wrap any async
``children`` function, with coordination so that concurrent walks
asking for the same parent share one enumeration.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)


class AsyncCachingChildren:
    """
    Optional caching layer for any async ``children`` function.

    Caches the materialised child list of each parent. Uses Future-based
    locking to prevent duplicate concurrent enumerations of the same
    parent.

    Example:
        children = AsyncCachingChildren(AsyncFileSystemChildren(), max_size=50000)

        async for path in walk_children_async(root, children):
            process(path)
    """

    def __init__(
        self,
        children: Callable[[Any], Any],
        max_size: int = 10000,
        ttl: float = 300.0,  # 5 minutes
        key: Optional[Callable[[Any], Any]] = None
    ):
        """
        Initialize caching children.

        Args:
            children: The underlying children function (sync or async; may
                return an async iterable, an iterable, or None)
            max_size: Maximum number of cached parents
            ttl: Time-to-live for cache entries in seconds
            key: Cache key for a node (defaults to the node itself)
        """
        self._children = children
        self._cache = TTLCache(maxsize=max_size, ttl=ttl)
        self._key = key
        self._scans_in_progress: Dict[Any, asyncio.Future] = {}

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0
        self.concurrent_waits = 0

    def get_cache_key(self, node: Any) -> Any:
        return self._key(node) if self._key is not None else node

    async def __call__(self, node: Any) -> Optional[List[Any]]:
        """
        Get children with caching and async coordination.

        1. Waits for an enumeration of the same parent already in flight
        2. Checks the cache for an existing result
        3. Enumerates and caches on a miss
        """
        cache_key = self.get_cache_key(node)

        # 1. Share a scan already in progress
        in_flight = self._scans_in_progress.get(cache_key)
        if in_flight is not None:
            self.concurrent_waits += 1
            return await asyncio.shield(in_flight)

        # 2. Check cache
        try:
            cached = self._cache[cache_key]
        except KeyError:
            pass
        else:
            self.cache_hits += 1
            logger.debug("Children cache hit for %r", cache_key)
            return cached

        # 3. Cache miss - enumerate
        self.cache_misses += 1
        future = asyncio.get_running_loop().create_future()
        self._scans_in_progress[cache_key] = future
        try:
            result = await self._materialise(node)
            self._cache[cache_key] = result
            future.set_result(result)
            return result
        except Exception as e:
            future.set_exception(e)
            # Nobody else may be waiting; mark the exception as retrieved
            future.exception()
            raise
        except BaseException:
            future.cancel()
            raise
        finally:
            del self._scans_in_progress[cache_key]

    async def _materialise(self, node: Any) -> Optional[List[Any]]:
        children = self._children(node)
        if inspect.isawaitable(children):
            children = await children
        if children is None:
            return None
        if hasattr(children, '__aiter__'):
            return [child async for child in children]
        return list(children)

    def invalidate(self, node: Any = None) -> None:
        """Drop one cached parent, or everything if ``node`` is None."""
        if node is None:
            self._cache.clear()
        else:
            self._cache.pop(self.get_cache_key(node), None)

    def __len__(self) -> int:
        return len(self._cache)
