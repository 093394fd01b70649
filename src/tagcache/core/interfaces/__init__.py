"""Core interfaces (Protocol classes) for tagcache."""

from tagcache.core.interfaces.cache_backend import ICacheBackend
from tagcache.core.interfaces.keeper import IKeeper
from tagcache.core.interfaces.key_builder import IKeyBuilder
from tagcache.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheBackend",
    "IKeeper",
    "IKeyBuilder",
    "ISerializer",
]
