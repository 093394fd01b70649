"""Cache entry entity - the envelope stored for every value."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from tagcache.core.exceptions import UnexpectedCacheValueError

GLOBAL_TAG = "__global__"

TagsInput = str | Iterable[str] | None


def normalize_tags(tags: TagsInput) -> tuple[str, ...]:
    """Normalize tag input to an ordered, de-duplicated tuple.

    Accepts None, a single tag, or an iterable of tags. Tags are
    stripped and empty ones dropped.

    Args:
        tags: The tag input.

    Returns:
        Tuple of tags in first-seen order.
    """
    if tags is None:
        return ()
    if isinstance(tags, str):
        tags = [tags]

    seen: dict[str, None] = {}
    for tag in tags:
        tag = str(tag).strip()
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Wraps a cached value with its insertion instant, absolute expiry
    instant (both epoch milliseconds), the original un-hashed key and
    the tags attached at write time.
    """

    key: str
    value: Any
    inserted_at: int
    expires_at: int
    tags: tuple[str, ...] = ()

    def is_expired(self, now: int) -> bool:
        """Check whether the entry has expired at ``now``."""
        return self.expires_at <= now

    def remaining(self, now: int) -> int:
        """Remaining lifetime in milliseconds at ``now``."""
        return self.expires_at - now

    def to_envelope(self) -> dict[str, Any]:
        """Return the wire representation of the entry.

        The single-letter field names are a compatibility surface shared
        with every process reading the same backend.
        """
        return {
            "i": self.inserted_at,
            "e": self.expires_at,
            "k": self.key,
            "v": self.value,
            "t": list(self.tags),
        }

    @classmethod
    def from_envelope(cls, data: Any) -> "CacheEntry":
        """Rebuild an entry from its wire representation.

        Args:
            data: The decoded envelope.

        Returns:
            The CacheEntry.

        Raises:
            UnexpectedCacheValueError: If a required field is missing.
        """
        if not isinstance(data, Mapping):
            raise UnexpectedCacheValueError()
        if any(data.get(name) is None for name in ("i", "e", "k")) or "v" not in data:
            raise UnexpectedCacheValueError()

        try:
            inserted_at = int(data["i"])
            expires_at = int(data["e"])
        except (TypeError, ValueError) as e:
            raise UnexpectedCacheValueError() from e

        raw_tags = data.get("t")
        return cls(
            key=data["k"],
            value=data["v"],
            inserted_at=inserted_at,
            expires_at=expires_at,
            tags=normalize_tags(raw_tags) if isinstance(raw_tags, list) else (),
        )

    @classmethod
    def create(
        cls,
        key: str,
        value: Any,
        now: int,
        expire: int,
        tags: TagsInput = None,
    ) -> "CacheEntry":
        """Factory method to create a new cache entry.

        Args:
            key: The original cache key.
            value: The value to cache.
            now: Insertion instant in epoch milliseconds.
            expire: Lifetime in milliseconds.
            tags: Optional tag or tags for invalidation.

        Returns:
            A new CacheEntry instance.
        """
        return cls(
            key=key,
            value=value,
            inserted_at=now,
            expires_at=now + expire,
            tags=normalize_tags(tags),
        )
