"""tagcache - namespaced cache with tag invalidation for asyncio services.

A cache facade over any key-value backend that adds per-entry expiry,
envelope integrity checks, and bulk invalidation by tag without
enumerating or deleting entries. Tag invalidations are shared between
processes through a keeper that every instance of a namespace
periodically publishes to and pulls from.

Example:
    from tagcache import CacheRegistry, InMemoryTagKeeper

    keeper = InMemoryTagKeeper()

    async with CacheRegistry() as registry:
        cache = registry.acquire("users", keeper=keeper)

        await cache.set("user:1", {"name": "Alice"}, expire=60_000, tags=["users"])

        result = await cache.get("user:1")
        if result.hit:
            print(result.value, result.ttl)

        # Every entry tagged "users" is now a miss, here immediately and
        # on other instances after their next sync cycle.
        cache.tagrm("users")

Process-wide shortcut:
    from tagcache import create

    cache = create("users", options={"tag_flush_interval": 1000})
"""

from tagcache.core.entities import (
    GLOBAL_TAG,
    CacheConfig,
    CacheEntry,
    CacheResult,
    EntryStatus,
    TagState,
    normalize_tags,
)
from tagcache.core.exceptions import (
    CacheError,
    SerializationError,
    UnExpectCacheValue,
    UnexpectedCacheValueError,
)
from tagcache.core.interfaces import (
    ICacheBackend,
    IKeeper,
    IKeyBuilder,
    ISerializer,
)
from tagcache.core.services import (
    CacheInstance,
    CacheRegistry,
    EntryValidator,
    TagSyncEngine,
    create,
    default_registry,
)
from tagcache.decorators import cached, configure, invalidates
from tagcache.infrastructure import (
    DefaultKeyBuilder,
    InMemoryCacheBackend,
    InMemoryTagKeeper,
    JsonSerializer,
    PassthroughSerializer,
)
from tagcache.utils.hashing import key_index

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "CacheResult",
    "EntryStatus",
    "TagState",
    "GLOBAL_TAG",
    "normalize_tags",
    # Exceptions
    "CacheError",
    "SerializationError",
    "UnexpectedCacheValueError",
    "UnExpectCacheValue",
    # Core interfaces
    "ICacheBackend",
    "IKeeper",
    "IKeyBuilder",
    "ISerializer",
    # Core services
    "CacheInstance",
    "CacheRegistry",
    "EntryValidator",
    "TagSyncEngine",
    "create",
    "default_registry",
    # Infrastructure implementations
    "InMemoryCacheBackend",
    "InMemoryTagKeeper",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "PassthroughSerializer",
    "key_index",
    # Decorators
    "cached",
    "invalidates",
    "configure",
]
