"""Domain services for tagcache."""

from tagcache.core.services.cache_instance import CacheInstance, normalize_namespace
from tagcache.core.services.entry_validator import EntryValidator
from tagcache.core.services.registry import CacheRegistry, create, default_registry
from tagcache.core.services.tag_sync import TagSyncEngine

__all__ = [
    "CacheInstance",
    "CacheRegistry",
    "EntryValidator",
    "TagSyncEngine",
    "create",
    "default_registry",
    "normalize_namespace",
]
