"""In-memory tag keeper implementation."""

from collections.abc import Mapping


class InMemoryTagKeeper:
    """Tag keeper backed by a dict.

    Shares invalidations between cache instances living in the same
    process, e.g. several registries in tests. Writes keep the larger
    instant, so replays and out-of-order publishes are harmless.
    """

    def __init__(self) -> None:
        self._tags: dict[str, int] = {}

    async def write(self, tag: str, instant: int) -> None:
        """Store an invalidation instant, keeping the newest."""
        current = self._tags.get(tag)
        if current is None or instant > current:
            self._tags[tag] = instant

    async def load(self, since: int) -> Mapping[str, int]:
        """Return every tag invalidated after ``since``."""
        return {tag: instant for tag, instant in self._tags.items() if instant > since}

    def __len__(self) -> int:
        return len(self._tags)
