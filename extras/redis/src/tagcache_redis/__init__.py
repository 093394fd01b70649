"""Redis backend and tag keeper for tagcache."""

from tagcache_redis.backend import RedisCacheBackend
from tagcache_redis.keeper import RedisTagKeeper

__all__ = ["RedisCacheBackend", "RedisTagKeeper"]
