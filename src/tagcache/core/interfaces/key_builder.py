"""Key builder interface."""

from typing import Protocol


class IKeyBuilder(Protocol):
    """Contract for building storage keys from namespaced cache keys."""

    def build(self, namespace: str, key: str) -> str:
        """Build the storage key for a cache key.

        Args:
            namespace: The normalized namespace of the cache instance.
            key: The caller's cache key.

        Returns:
            A deterministic string key for the backend.
        """
        ...
