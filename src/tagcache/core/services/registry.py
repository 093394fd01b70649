"""Cache registry - one cache instance per namespace.

Example:
    async with CacheRegistry() as registry:
        cache = registry.acquire("users", backend=RedisCacheBackend(), keeper=keeper)
        await cache.set("user:1", {"name": "Alice"}, tags=["users"])
        cache.tagrm("users")
"""

import logging
from collections.abc import Mapping
from typing import Any

from tagcache.core.entities.cache_config import CacheConfig
from tagcache.core.interfaces.cache_backend import ICacheBackend
from tagcache.core.interfaces.keeper import IKeeper
from tagcache.core.services.cache_instance import CacheInstance, normalize_namespace

logger = logging.getLogger(__name__)


class CacheRegistry:
    """Owns the cache instances of an application, keyed by namespace.

    Acquiring a namespace twice returns the same instance, so a
    namespace never runs two sync tasks against the same keeper.
    Instances live until disposed.
    """

    def __init__(self) -> None:
        self._instances: dict[str, CacheInstance] = {}

    def acquire(
        self,
        namespace: str,
        backend: ICacheBackend | None = None,
        keeper: IKeeper | None = None,
        options: CacheConfig | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> CacheInstance:
        """Return the instance for a namespace, creating it on first use.

        Arguments other than ``namespace`` only apply when the instance
        is created.

        Args:
            namespace: Namespace name; trimmed and lowercased.
            backend: Backend store for a new instance.
            keeper: Tag keeper for a new instance.
            options: A CacheConfig or an option mapping merged over the
                defaults (unknown options are ignored).
            **kwargs: Extra CacheInstance arguments (key_builder,
                serializer, clock).

        Returns:
            The namespace's CacheInstance.
        """
        name = normalize_namespace(namespace)
        instance = self._instances.get(name)
        if instance is not None:
            return instance

        config = options if isinstance(options, CacheConfig) else CacheConfig.from_options(options)
        instance = CacheInstance(name, backend=backend, keeper=keeper, config=config, **kwargs)
        self._instances[name] = instance
        logger.info("Created cache instance for namespace %r", name)
        return instance

    def get(self, namespace: str) -> CacheInstance | None:
        """Return the instance for a namespace if it exists."""
        return self._instances.get(normalize_namespace(namespace))

    async def dispose(self, namespace: str, flush: bool = False) -> bool:
        """Stop and forget the instance for a namespace.

        Args:
            namespace: Namespace name.
            flush: Publish pending tag updates before stopping.

        Returns:
            True if an instance was disposed.
        """
        instance = self._instances.pop(normalize_namespace(namespace), None)
        if instance is None:
            return False
        await instance.close(flush=flush)
        logger.info("Disposed cache instance for namespace %r", instance.namespace)
        return True

    async def shutdown(self, flush: bool = False) -> None:
        """Dispose every instance."""
        for name in list(self._instances):
            await self.dispose(name, flush=flush)

    def __contains__(self, namespace: object) -> bool:
        if not isinstance(namespace, str):
            return False
        return namespace.strip().lower() in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    async def __aenter__(self) -> "CacheRegistry":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.shutdown()


# Process-wide registry used by create()
_default_registry: CacheRegistry | None = None


def default_registry() -> CacheRegistry:
    """Get the process-wide registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = CacheRegistry()
    return _default_registry


def create(
    namespace: str,
    backend: ICacheBackend | None = None,
    keeper: IKeeper | None = None,
    options: CacheConfig | Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> CacheInstance:
    """Get or create a cache instance in the process-wide registry.

    Example:
        cache = create("users", options={"tag_flush_interval": 1000})
        await cache.set("user:1", {"name": "Alice"}, expire=60_000, tags="users")
        result = await cache.get("user:1")
    """
    return default_registry().acquire(
        namespace, backend=backend, keeper=keeper, options=options, **kwargs
    )
