"""Tag keeper implementations."""

from tagcache.infrastructure.keepers.memory import InMemoryTagKeeper

__all__ = ["InMemoryTagKeeper"]
