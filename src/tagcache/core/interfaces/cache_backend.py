"""Cache backend interface."""

from datetime import timedelta
from typing import Any, Protocol


class ICacheBackend(Protocol):
    """Contract for cache storage backends.

    Backends store encoded envelopes under hashed keys. Methods are
    async to support both in-memory and distributed implementations.
    Failures are reported by raising; the cache instance turns them
    into error results for its callers.
    """

    async def get(self, key: str) -> Any | None:
        """Retrieve a stored payload by key.

        Args:
            key: The storage key to retrieve.

        Returns:
            The stored payload, or None if not found.
        """
        ...

    async def set(
        self,
        key: str,
        value: Any,
        ttl: timedelta | None = None,
    ) -> None:
        """Store a payload with an optional TTL hint.

        Args:
            key: The storage key.
            value: The encoded payload.
            ttl: Advisory time-to-live, in whole seconds. Backends that
                cannot expire keys may ignore it.
        """
        ...

    async def delete(self, key: str) -> bool:
        """Delete a stored payload.

        Args:
            key: The storage key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        ...
