"""Domain entities for tagcache."""

from tagcache.core.entities.cache_config import CacheConfig
from tagcache.core.entities.cache_entry import (
    GLOBAL_TAG,
    CacheEntry,
    normalize_tags,
)
from tagcache.core.entities.cache_result import CacheResult, EntryStatus
from tagcache.core.entities.tag_state import TagState

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheResult",
    "EntryStatus",
    "GLOBAL_TAG",
    "TagState",
    "normalize_tags",
]
