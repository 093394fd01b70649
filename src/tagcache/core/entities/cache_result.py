"""Cache operation result entity."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EntryStatus(Enum):
    """Outcome of a cache operation.

    VALID: Entry found and readable.
    MISSING: Backend has no value for the key.
    EXPIRED: Entry lifetime is over.
    KEY_MISMATCH: Stored key differs from the requested one (hash collision).
    INVALIDATED: A tag on the entry was invalidated at or after insertion.
    CORRUPT: Stored blob could not be decoded.
    ERROR: The operation failed; see ``CacheResult.error``.
    STORED: A write succeeded.
    DELETED: A delete succeeded.
    """

    VALID = "valid"
    MISSING = "missing"
    EXPIRED = "expired"
    KEY_MISMATCH = "key_mismatch"
    INVALIDATED = "invalidated"
    CORRUPT = "corrupt"
    ERROR = "error"
    STORED = "stored"
    DELETED = "deleted"


@dataclass(frozen=True)
class CacheResult:
    """Result-or-error of a cache operation.

    Cache operations never raise for backend or data failures; the
    exception is carried in ``error`` instead.

    Attributes:
        status: What happened.
        value: The cached value on a hit, otherwise None.
        ttl: Remaining lifetime in milliseconds on a hit, otherwise None.
        error: The failure, if any.
    """

    status: EntryStatus
    value: Any = None
    ttl: int | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """True when the operation did not fail."""
        return self.error is None

    @property
    def hit(self) -> bool:
        """True when a readable value was returned."""
        return self.status is EntryStatus.VALID

    def unwrap(self) -> Any:
        """Return the value, raising the carried error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def miss(cls, status: EntryStatus = EntryStatus.MISSING) -> "CacheResult":
        """Create a logical miss."""
        return cls(status=status)

    @classmethod
    def failure(cls, error: Exception) -> "CacheResult":
        """Create a failed result."""
        return cls(status=EntryStatus.ERROR, error=error)
