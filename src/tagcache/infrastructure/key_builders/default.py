"""Default key builder implementation."""

from tagcache.utils.hashing import key_index


class DefaultKeyBuilder:
    """Default key builder using the two-accumulator key index.

    Storage keys are ``key_index("<namespace>#<key>")``, optionally
    prefixed.
    """

    def __init__(self, prefix: str = "") -> None:
        """Initialize the key builder.

        Args:
            prefix: Optional prefix for all storage keys.
        """
        self._prefix = prefix

    def build(self, namespace: str, key: str) -> str:
        """Build the storage key for a namespaced cache key.

        Args:
            namespace: The cache namespace.
            key: The cache key.

        Returns:
            The storage key.
        """
        index = key_index(f"{namespace}#{key}")
        if self._prefix:
            return f"{self._prefix}:{index}"
        return index
