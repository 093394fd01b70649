"""Tests for CacheRegistry and the process-wide create()."""

import pytest

from tagcache import CacheConfig, CacheInstance, CacheRegistry, create, default_registry


class TestCacheRegistry:
    """Tests for CacheRegistry."""

    @pytest.fixture
    async def registry(self):
        registry = CacheRegistry()
        yield registry
        await registry.shutdown()

    async def test_acquire_creates_instance(self, registry: CacheRegistry) -> None:
        cache = registry.acquire("users")

        assert isinstance(cache, CacheInstance)
        assert cache.namespace == "users"
        assert "users" in registry
        assert len(registry) == 1

    async def test_acquire_is_idempotent(self, registry: CacheRegistry) -> None:
        """Test namespaces are trimmed and case-folded before lookup."""
        first = registry.acquire("Users")
        second = registry.acquire("  users ")

        assert first is second
        assert registry.get("USERS") is first
        assert " Users" in registry
        assert len(registry) == 1

    async def test_later_arguments_ignored(self, registry: CacheRegistry, keeper) -> None:
        first = registry.acquire("users")
        second = registry.acquire("users", keeper=keeper, options={"tag_flush_interval": 1})

        assert second is first
        assert second.config.tag_flush_interval == 5000
        assert not second.sync_engine.enabled

    async def test_different_namespaces(self, registry: CacheRegistry) -> None:
        assert registry.acquire("users") is not registry.acquire("posts")
        assert len(registry) == 2

    async def test_options_mapping(self, registry: CacheRegistry) -> None:
        cache = registry.acquire(
            "users", options={"tag_flush_interval": 1000, "unknown_option": True}
        )

        assert cache.config.tag_flush_interval == 1000
        assert cache.config.tag_pull_overlap == 2000

    async def test_options_config(self, registry: CacheRegistry) -> None:
        config = CacheConfig(default_expire=42)
        assert registry.acquire("users", options=config).config is config

    async def test_memory_maxsize_option(self, registry: CacheRegistry) -> None:
        cache = registry.acquire("users", options={"memory_maxsize": 10})
        assert cache.backend.maxsize == 10

    def test_empty_namespace(self) -> None:
        with pytest.raises(ValueError):
            CacheRegistry().acquire("")

    def test_get_unknown(self) -> None:
        registry = CacheRegistry()
        assert registry.get("users") is None
        assert 42 not in registry

    async def test_dispose(self, registry: CacheRegistry, keeper) -> None:
        """Test dispose stops the sync task and forgets the namespace."""
        cache = registry.acquire("users", keeper=keeper)
        await cache.set("k", "v")
        assert cache.sync_engine.running

        assert await registry.dispose("USERS") is True

        assert not cache.sync_engine.running
        assert "users" not in registry
        assert registry.acquire("users") is not cache

    async def test_dispose_unknown(self, registry: CacheRegistry) -> None:
        assert await registry.dispose("users") is False

    async def test_dispose_with_flush(self, registry: CacheRegistry, keeper, clock) -> None:
        cache = registry.acquire("users", keeper=keeper, clock=clock)
        cache.tagrm("A")

        await registry.dispose("users", flush=True)

        assert await keeper.load(0) == {"A": clock()}

    async def test_shutdown(self, keeper) -> None:
        registry = CacheRegistry()
        users = registry.acquire("users", keeper=keeper)
        posts = registry.acquire("posts", keeper=keeper)
        users.tagrm("A")
        posts.tagrm("B")

        await registry.shutdown()

        assert len(registry) == 0
        assert not users.sync_engine.running
        assert not posts.sync_engine.running

    async def test_context_manager(self, keeper) -> None:
        async with CacheRegistry() as registry:
            cache = registry.acquire("users", keeper=keeper)
            cache.tagrm("A")
            assert cache.sync_engine.running

        assert len(registry) == 0
        assert not cache.sync_engine.running


class TestCreate:
    """Tests for the process-wide create() entry point."""

    def test_create_returns_shared_instance(self) -> None:
        first = create("Users")
        second = create("users")

        assert first is second
        assert default_registry().get("users") is first

    def test_default_registry_is_singleton(self) -> None:
        assert default_registry() is default_registry()

    def test_create_with_options(self) -> None:
        cache = create("configured", options={"tag_flush_interval": 250})
        assert cache.config.tag_flush_interval == 250
