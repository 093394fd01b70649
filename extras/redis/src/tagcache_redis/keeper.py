"""Redis tag keeper implementation."""

from typing import Optional

import redis.asyncio as redis


class RedisTagKeeper:
    """Tag keeper storing invalidation instants in a Redis sorted set.

    Each member is a tag and its score the invalidation instant in epoch
    milliseconds, so loading everything newer than a watermark is a
    single range query. Use one key per cache namespace.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key: str = "tagcache:tags",
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis tag keeper.

        Args:
            redis_url: Redis connection URL.
            key: Sorted set holding the tag instants.
            client: Existing client to use instead of connecting to redis_url.
        """
        self._redis: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._key = key

    async def write(self, tag: str, instant: int) -> None:
        """Store an invalidation instant, never lowering an existing one.

        Args:
            tag: The invalidated tag.
            instant: Invalidation instant in epoch milliseconds.
        """
        await self._redis.zadd(self._key, {tag: instant}, gt=True)

    async def load(self, since: int) -> dict[str, int]:
        """Load tags invalidated after ``since``.

        Args:
            since: Watermark in epoch milliseconds (exclusive).

        Returns:
            Mapping of tag to invalidation instant.
        """
        rows = await self._redis.zrangebyscore(self._key, f"({since}", "+inf", withscores=True)
        return {
            (member.decode() if isinstance(member, bytes) else member): int(score)
            for member, score in rows
        }

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisTagKeeper":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
