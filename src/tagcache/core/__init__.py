"""Core domain layer for tagcache."""

from tagcache.core.entities import (
    CacheConfig,
    CacheEntry,
    CacheResult,
    EntryStatus,
    TagState,
)
from tagcache.core.exceptions import (
    CacheError,
    SerializationError,
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
)

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "CacheResult",
    "EntryStatus",
    "TagState",
    # Exceptions
    "CacheError",
    "SerializationError",
    "UnexpectedCacheValueError",
    # Interfaces
    "ICacheBackend",
    "IKeeper",
    "IKeyBuilder",
    "ISerializer",
    # Services
    "CacheInstance",
    "CacheRegistry",
    "EntryValidator",
    "TagSyncEngine",
]
