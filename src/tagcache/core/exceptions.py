"""Exceptions raised by tagcache."""


class CacheError(Exception):
    """Base class for tagcache errors."""

    pass


class UnexpectedCacheValueError(CacheError):
    """Raised when a stored envelope lacks a required field."""

    def __init__(self, message: str = "UnExpectCacheValue") -> None:
        super().__init__(message)


class SerializationError(CacheError):
    """Raised when serialization or deserialization fails."""

    pass


# Name used by existing consumers of the cache API
UnExpectCacheValue = UnexpectedCacheValueError
