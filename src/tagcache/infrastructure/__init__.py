"""Infrastructure layer implementations for tagcache."""

from tagcache.infrastructure.backends import InMemoryCacheBackend
from tagcache.infrastructure.keepers import InMemoryTagKeeper
from tagcache.infrastructure.key_builders import DefaultKeyBuilder
from tagcache.infrastructure.serializers import JsonSerializer, PassthroughSerializer

__all__ = [
    "InMemoryCacheBackend",
    "InMemoryTagKeeper",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "PassthroughSerializer",
]
