"""Pass-through serializer for in-process backends."""

from typing import Any


class PassthroughSerializer:
    """Identity serializer.

    Used with the in-memory backend, which keeps Python objects as-is,
    so no encoding cost is paid.
    """

    def serialize(self, value: Any) -> Any:
        return value

    def deserialize(self, data: Any) -> Any:
        return data
