"""Serializer interface."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Contract for encoding/decoding entry envelopes.

    Serializers handle the conversion between envelope mappings and
    the representation the backend stores.
    """

    def serialize(self, value: Any) -> Any:
        """Encode an envelope for storage.

        Args:
            value: The envelope mapping.

        Returns:
            The stored representation.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        ...

    def deserialize(self, data: Any) -> Any:
        """Decode a stored representation.

        Args:
            data: The stored payload.

        Returns:
            The envelope mapping.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        ...
