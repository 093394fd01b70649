"""Tag invalidation state entity."""

from collections.abc import Mapping


class TagState:
    """Process-local view of tag invalidation instants.

    Holds, per tag, the most recent invalidation instant known to this
    process, plus the invalidations recorded locally that have not yet
    been confirmed written to the keeper. Instants only ever move
    forward: every update keeps the larger value.
    """

    def __init__(self) -> None:
        self._tags: dict[str, int] = {}
        self._pending: dict[str, int] = {}

    def get(self, tag: str) -> int | None:
        """Return the last known invalidation instant for a tag."""
        return self._tags.get(tag)

    @property
    def tags(self) -> dict[str, int]:
        """Copy of the known tag instants."""
        return dict(self._tags)

    @property
    def pending(self) -> dict[str, int]:
        """Copy of the updates not yet published."""
        return dict(self._pending)

    def record(self, tag: str, instant: int, publish: bool = True) -> int:
        """Record a local invalidation and mark it pending.

        Args:
            tag: The tag to invalidate.
            instant: Invalidation instant in epoch milliseconds.
            publish: Whether the update must be sent to a keeper.

        Returns:
            The effective instant now held for the tag.
        """
        self._tags[tag] = max(instant, self._tags.get(tag, instant))
        if publish:
            self._pending[tag] = max(instant, self._pending.get(tag, instant))
        return self._tags[tag]

    def take_pending(self) -> dict[str, int]:
        """Remove and return all pending updates."""
        pending, self._pending = self._pending, {}
        return pending

    def restore_pending(self, tag: str, instant: int) -> None:
        """Put a failed update back unless a newer one is already pending."""
        current = self._pending.get(tag)
        if current is None or instant > current:
            self._pending[tag] = instant

    def confirm(self, tag: str, instant: int) -> None:
        """Drop a pending update once the keeper holds ``instant``."""
        if self._pending.get(tag) == instant:
            del self._pending[tag]

    def merge(self, remote: Mapping[str, int]) -> int | None:
        """Merge a keeper snapshot, keeping the larger instant per tag.

        Args:
            remote: Mapping of tag to invalidation instant.

        Returns:
            The largest remote instant seen, or None if remote is empty.
        """
        newest: int | None = None
        for tag, instant in remote.items():
            instant = int(instant)
            current = self._tags.get(tag)
            self._tags[tag] = instant if current is None else max(current, instant)
            newest = instant if newest is None else max(newest, instant)
        return newest

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __len__(self) -> int:
        return len(self._tags)
