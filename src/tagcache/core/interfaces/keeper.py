"""Tag keeper interface."""

from collections.abc import Mapping
from typing import Protocol


class IKeeper(Protocol):
    """Contract for the shared store of tag invalidation instants.

    A keeper is the authority every cache instance of a namespace
    publishes its tag invalidations to and pulls the others' from.
    """

    async def write(self, tag: str, instant: int) -> None:
        """Publish an invalidation instant for a tag.

        Implementations should keep the larger of the stored and the
        written instant.

        Args:
            tag: The invalidated tag.
            instant: Invalidation instant in epoch milliseconds.
        """
        ...

    async def load(self, since: int) -> Mapping[str, int]:
        """Load invalidation instants newer than ``since``.

        Args:
            since: Watermark in epoch milliseconds (exclusive).

        Returns:
            Mapping of tag to invalidation instant.
        """
        ...
