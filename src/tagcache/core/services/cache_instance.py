"""Cache instance - the namespaced cache facade."""

import logging
from datetime import timedelta
from typing import Any

from tagcache.core.entities.cache_config import CacheConfig
from tagcache.core.entities.cache_entry import GLOBAL_TAG, CacheEntry, TagsInput
from tagcache.core.entities.cache_result import CacheResult, EntryStatus
from tagcache.core.entities.tag_state import TagState
from tagcache.core.exceptions import SerializationError, UnexpectedCacheValueError
from tagcache.core.interfaces.cache_backend import ICacheBackend
from tagcache.core.interfaces.keeper import IKeeper
from tagcache.core.interfaces.key_builder import IKeyBuilder
from tagcache.core.interfaces.serializer import ISerializer
from tagcache.core.services.entry_validator import EntryValidator
from tagcache.core.services.tag_sync import TagSyncEngine
from tagcache.infrastructure.backends.memory import InMemoryCacheBackend
from tagcache.infrastructure.key_builders.default import DefaultKeyBuilder
from tagcache.infrastructure.serializers.json import JsonSerializer
from tagcache.infrastructure.serializers.passthrough import PassthroughSerializer
from tagcache.utils.timing import Clock, now_ms, to_millis

logger = logging.getLogger(__name__)


def normalize_namespace(namespace: str) -> str:
    """Trim and lowercase a namespace name.

    Raises:
        ValueError: If the namespace is empty.
    """
    name = namespace.strip().lower()
    if not name:
        raise ValueError("namespace must not be empty")
    return name


class CacheInstance:
    """Cache facade bound to one namespace.

    Composes a backend store, a key builder, a serializer, the tag
    state and its sync engine. Values are wrapped in an envelope
    recording insertion and expiry instants, the original key and the
    tags; reads check the envelope against the clock and the known tag
    invalidations.

    Operations never raise for backend or data failures. They return a
    CacheResult whose ``error`` carries the failure.

    Use CacheRegistry.acquire (or tagcache.create) rather than building
    instances directly, so each namespace gets a single tag state and a
    single sync task per process.
    """

    def __init__(
        self,
        namespace: str,
        backend: ICacheBackend | None = None,
        keeper: IKeeper | None = None,
        config: CacheConfig | None = None,
        key_builder: IKeyBuilder | None = None,
        serializer: ISerializer | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the cache instance.

        Args:
            namespace: Logical name isolating keys and tags.
            backend: Backend store. Defaults to a bounded in-memory store.
            keeper: Shared tag keeper. Without one, tag invalidations stay local.
            config: Cache configuration. Uses defaults if not provided.
            key_builder: Storage key builder. Defaults to DefaultKeyBuilder.
            serializer: Envelope codec. Defaults to pass-through for the
                in-memory store and JSON for any other backend.
            clock: Returns the current instant in epoch milliseconds.
        """
        self._namespace = normalize_namespace(namespace)
        self._config = config or CacheConfig()
        self._clock = clock or now_ms

        if backend is None:
            backend = InMemoryCacheBackend(maxsize=self._config.memory_maxsize)
        if serializer is None:
            if isinstance(backend, InMemoryCacheBackend):
                serializer = PassthroughSerializer()
            else:
                serializer = JsonSerializer()

        self._backend = backend
        self._serializer = serializer
        self._key_builder = key_builder or DefaultKeyBuilder()
        self._keeper = keeper

        self._tag_state = TagState()
        self._validator = EntryValidator(self._tag_state)
        self._sync = TagSyncEngine(
            keeper,
            self._tag_state,
            self._config,
            clock=self._clock,
            name=self._namespace,
        )

        # Statistics
        self._hits = 0
        self._misses = 0
        self._errors = 0

    @property
    def namespace(self) -> str:
        """Get the normalized namespace."""
        return self._namespace

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def backend(self) -> ICacheBackend:
        """Get the backend store."""
        return self._backend

    @property
    def tag_state(self) -> TagState:
        """Get the tag invalidation state."""
        return self._tag_state

    @property
    def sync_engine(self) -> TagSyncEngine:
        """Get the tag sync engine."""
        return self._sync

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, errors and their total.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "errors": self._errors,
            "total": self._hits + self._misses + self._errors,
        }

    def _storage_key(self, key: str) -> str:
        return self._key_builder.build(self._namespace, key)

    async def set(
        self,
        key: str,
        value: Any,
        expire: int | timedelta | None = None,
        tags: TagsInput = None,
    ) -> CacheResult:
        """Store a value.

        Args:
            key: The cache key.
            value: The value to cache.
            expire: Lifetime in milliseconds or as a timedelta. Uses the
                configured default when not given.
            tags: A tag or tags to attach for invalidation.

        Returns:
            A STORED result with ``ttl`` set to the lifetime, or a failed one.
        """
        self._sync.ensure_running()
        now = self._clock()
        expire_ms = to_millis(expire) or self._config.default_expire

        entry = CacheEntry.create(key=key, value=value, now=now, expire=expire_ms, tags=tags)
        ttl_hint = timedelta(seconds=max(1, expire_ms // 1000))

        try:
            payload = self._serializer.serialize(entry.to_envelope())
            await self._backend.set(self._storage_key(key), payload, ttl_hint)
        except Exception as e:
            self._errors += 1
            logger.warning("Cache set failed for %s#%s: %s", self._namespace, key, e)
            return CacheResult.failure(e)

        return CacheResult(status=EntryStatus.STORED, ttl=expire_ms)

    async def get(self, key: str) -> CacheResult:
        """Read a value.

        Expired, invalidated, undecodable and colliding entries are
        reported as misses. An envelope missing a required field is an
        error (UnexpectedCacheValueError).

        Args:
            key: The cache key.

        Returns:
            A VALID result with the value and the remaining lifetime in
            milliseconds, a miss, or a failed result.
        """
        self._sync.ensure_running()
        now = self._clock()

        try:
            payload = await self._backend.get(self._storage_key(key))
        except Exception as e:
            self._errors += 1
            logger.warning("Cache get failed for %s#%s: %s", self._namespace, key, e)
            return CacheResult.failure(e)

        if payload is None:
            return self._miss(EntryStatus.MISSING)

        try:
            envelope = self._serializer.deserialize(payload)
        except SerializationError as e:
            logger.debug("Undecodable entry for %s#%s: %s", self._namespace, key, e)
            return self._miss(EntryStatus.CORRUPT)
        if envelope is None:
            return self._miss(EntryStatus.CORRUPT)

        try:
            entry = CacheEntry.from_envelope(envelope)
        except UnexpectedCacheValueError as e:
            self._errors += 1
            return CacheResult.failure(e)

        status = self._validator.check(entry, key, now)
        if status is not EntryStatus.VALID:
            return self._miss(status)

        self._hits += 1
        return CacheResult(status=EntryStatus.VALID, value=entry.value, ttl=entry.remaining(now))

    def _miss(self, status: EntryStatus) -> CacheResult:
        self._misses += 1
        logger.debug("Cache miss (%s) in %s", status.value, self._namespace)
        return CacheResult.miss(status)

    async def unset(self, key: str) -> CacheResult:
        """Delete a value.

        Note: on the default in-memory store this flushes every entry,
        not just ``key``.

        Args:
            key: The cache key.

        Returns:
            A DELETED result whose value tells whether the key existed,
            or a failed result.
        """
        try:
            deleted = await self._backend.delete(self._storage_key(key))
        except Exception as e:
            self._errors += 1
            logger.warning("Cache unset failed for %s#%s: %s", self._namespace, key, e)
            return CacheResult.failure(e)
        return CacheResult(status=EntryStatus.DELETED, value=deleted)

    def tagrm(
        self,
        tag: str | None = None,
        delay: int | timedelta | None = None,
        flush: bool = False,
    ) -> int:
        """Invalidate every entry carrying a tag.

        Entries inserted at or before ``now + delay`` that carry the tag
        become misses here immediately, and on other instances sharing
        the keeper after their next sync cycle.

        Args:
            tag: The tag to invalidate. None or empty invalidates the
                whole namespace.
            delay: Milliseconds (or timedelta) to push the invalidation
                instant forward. Negative values count as zero.
            flush: Publish to the keeper right away instead of waiting
                for the next cycle.

        Returns:
            The invalidation instant now held for the tag.
        """
        name = tag.strip() if tag else ""
        name = name or GLOBAL_TAG
        delay_ms = max(0, to_millis(delay) or 0)

        instant = self._tag_state.record(
            name, self._clock() + delay_ms, publish=self._keeper is not None
        )
        logger.debug("Invalidated tag %r in %s at %d", name, self._namespace, instant)

        self._sync.ensure_running()
        if flush:
            self._sync.schedule_flush(name, instant)
        return instant

    async def sync(self) -> bool:
        """Run one tag publish/pull cycle now.

        Returns:
            False if there is no keeper or a cycle is already in flight.
        """
        return await self._sync.run_cycle()

    async def close(self, flush: bool = False) -> None:
        """Stop tag synchronization.

        Args:
            flush: Publish pending tag updates before stopping.
        """
        await self._sync.stop(flush=flush)

    def __repr__(self) -> str:
        return f"CacheInstance(namespace={self._namespace!r})"
