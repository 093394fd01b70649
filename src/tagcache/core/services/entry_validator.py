"""Entry validation - decides whether a stored entry may be served."""

from tagcache.core.entities.cache_entry import GLOBAL_TAG, CacheEntry
from tagcache.core.entities.cache_result import EntryStatus
from tagcache.core.entities.tag_state import TagState


class EntryValidator:
    """Turns a decoded entry, the current instant and tag state into a verdict.

    An entry is readable at ``now`` when all of the following hold:

    - it has not expired (``expires_at > now``);
    - its stored key equals the requested key, which guards against
      two keys hashing to the same storage key;
    - for the global tag and every tag attached to it, the entry was
      inserted strictly after the tag's last known invalidation.

    An entry inserted in the same millisecond as an invalidation is
    treated as invalidated.
    """

    def __init__(self, tag_state: TagState) -> None:
        """Initialize the validator.

        Args:
            tag_state: The tag invalidation state to check against.
        """
        self._tag_state = tag_state

    def check(self, entry: CacheEntry, key: str, now: int) -> EntryStatus:
        """Validate an entry read for ``key`` at ``now``.

        Args:
            entry: The decoded entry.
            key: The key the caller asked for.
            now: Current instant in epoch milliseconds.

        Returns:
            EntryStatus.VALID, or the reason the entry must be treated as a miss.
        """
        if entry.is_expired(now):
            return EntryStatus.EXPIRED

        if entry.key != key:
            return EntryStatus.KEY_MISMATCH

        if self.is_invalidated(entry):
            return EntryStatus.INVALIDATED

        return EntryStatus.VALID

    def is_invalidated(self, entry: CacheEntry) -> bool:
        """Check the entry against the global tag and its own tags."""
        for tag in (GLOBAL_TAG, *entry.tags):
            invalidated_at = self._tag_state.get(tag)
            if invalidated_at is not None and entry.inserted_at <= invalidated_at:
                return True
        return False
