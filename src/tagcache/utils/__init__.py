"""Utility helpers for tagcache."""

from tagcache.utils.hashing import hash_value, key_index
from tagcache.utils.timing import now_ms, to_millis

__all__ = [
    "hash_value",
    "key_index",
    "now_ms",
    "to_millis",
]
