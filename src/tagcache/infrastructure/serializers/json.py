"""JSON serializer implementation."""

import json
from datetime import date, datetime
from typing import Any

from tagcache.core.exceptions import SerializationError

__all__ = ["JsonSerializer", "SerializationError"]


class JsonSerializer:
    """JSON serializer for entry envelopes.

    Used with out-of-process backends: envelopes are stored as JSON
    text encoded to bytes. Datetimes and dates are tagged on the way out
    and restored on the way back; other values come back as plain JSON
    types (tuples and sets as lists, bytes as text).
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the JSON serializer.

        Args:
            encoding: Character encoding to use.
        """
        self._encoding = encoding

    def serialize(self, value: Any) -> bytes:
        """Serialize value to bytes.

        Args:
            value: The Python object to serialize.

        Returns:
            The serialized value as bytes.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        try:
            json_str = json.dumps(value, default=self._default_encoder)
            return json_str.encode(self._encoding)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: Any) -> Any:
        """Deserialize stored data to a value.

        Args:
            data: The bytes (or text) to deserialize.

        Returns:
            The deserialized Python object.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        try:
            json_str = data.decode(self._encoding) if isinstance(data, bytes) else data
            return json.loads(json_str, object_hook=self._object_hook)
        except (ValueError, TypeError, RecursionError) as e:
            raise SerializationError(f"Failed to deserialize data: {e}") from e

    def _default_encoder(self, obj: Any) -> Any:
        """Custom encoder for non-JSON-serializable types.

        Args:
            obj: The object to encode.

        Returns:
            A JSON-serializable representation of the object.

        Raises:
            TypeError: If the object cannot be encoded.
        """
        if isinstance(obj, datetime):
            return {"__datetime__": obj.isoformat()}
        if isinstance(obj, date):
            return {"__date__": obj.isoformat()}
        if isinstance(obj, (bytes, bytearray)):
            return bytes(obj).decode(self._encoding, errors="replace")
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        if hasattr(obj, "__dict__"):
            return obj.__dict__
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    @staticmethod
    def _object_hook(obj: dict[str, Any]) -> Any:
        """Restore values tagged by ``_default_encoder``.

        Args:
            obj: A decoded JSON object.

        Returns:
            The datetime or date it stands for, or the object unchanged.
        """
        if len(obj) == 1:
            if "__datetime__" in obj:
                return datetime.fromisoformat(obj["__datetime__"])
            if "__date__" in obj:
                return date.fromisoformat(obj["__date__"])
        return obj
