"""In-memory cache backend implementation."""

import logging
from datetime import timedelta
from typing import Any

from cachetools import LRUCache  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)


class InMemoryCacheBackend:
    """Bounded in-memory cache backend.

    Suitable for single-process deployments and the default store of a
    cache instance. Values are kept as-is (no copy, no encoding), and
    cachetools evicts the least recently used key once ``maxsize`` is
    reached.

    Note: ``delete`` is coarse. It flushes the whole pool rather than
    the single key, so unsetting one key drops every cached entry.
    Use an external backend when precise deletion matters.
    """

    def __init__(self, maxsize: int = 2000) -> None:
        """Initialize the in-memory cache backend.

        Args:
            maxsize: Maximum number of items in the cache.
        """
        self._maxsize = maxsize
        self._cache: LRUCache[str, Any] = LRUCache(maxsize=maxsize)

    async def get(self, key: str) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found.
        """
        return self._cache.get(key)

    async def set(
        self,
        key: str,
        value: Any,
        ttl: timedelta | None = None,
    ) -> None:
        """Store value.

        The TTL hint is ignored; entry expiry is enforced by the envelope.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Ignored.
        """
        self._cache[key] = value

    async def delete(self, key: str) -> bool:
        """Flush the pool.

        Args:
            key: The cache key that triggered the flush.

        Returns:
            True if the key existed before the flush, False otherwise.
        """
        existed = key in self._cache
        logger.debug("Flushing in-memory pool of %d items", len(self._cache))
        self._cache.clear()
        return existed

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        return key in self._cache

    async def clear(self) -> None:
        """Clear all cached values."""
        self._cache.clear()

    def __len__(self) -> int:
        """Return the number of items in the cache."""
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return self._maxsize
