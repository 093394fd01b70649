"""Serializer implementations."""

from tagcache.infrastructure.serializers.json import JsonSerializer
from tagcache.infrastructure.serializers.passthrough import PassthroughSerializer

__all__ = ["JsonSerializer", "PassthroughSerializer"]
