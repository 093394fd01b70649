"""Tests for JsonSerializer and PassthroughSerializer."""

from datetime import date, datetime

import pytest

from tagcache.infrastructure.serializers.json import JsonSerializer, SerializationError
from tagcache.infrastructure.serializers.passthrough import PassthroughSerializer


class TestJsonSerializer:
    """Tests for JsonSerializer."""

    @pytest.fixture
    def serializer(self) -> JsonSerializer:
        """Create a serializer for testing."""
        return JsonSerializer()

    def test_serialize_envelope(self, serializer: JsonSerializer) -> None:
        """Test serializing an envelope."""
        envelope = {"i": 1, "e": 2, "k": "user:1", "v": {"name": "Alice"}, "t": ["users"]}
        result = serializer.serialize(envelope)

        assert isinstance(result, bytes)
        assert b"Alice" in result
        assert serializer.deserialize(result) == envelope

    def test_deserialize_text(self, serializer: JsonSerializer) -> None:
        """Test deserializing data a backend returned as text."""
        assert serializer.deserialize('{"name": "Alice"}') == {"name": "Alice"}

    def test_datetime_restored(self, serializer: JsonSerializer) -> None:
        """Test datetime objects come back as datetimes."""
        data = {"timestamp": datetime(2024, 1, 15, 10, 30, 0)}

        serialized = serializer.serialize(data)

        assert b"__datetime__" in serialized
        assert serializer.deserialize(serialized) == data

    def test_date_restored(self, serializer: JsonSerializer) -> None:
        """Test date objects come back as dates."""
        data = {"days": [date(2024, 1, 15), date(2024, 1, 16)]}

        assert serializer.deserialize(serializer.serialize(data)) == data

    def test_marker_with_other_keys_left_alone(self, serializer: JsonSerializer) -> None:
        data = {"__date__": "2024-01-15", "note": "kept"}

        assert serializer.deserialize(serializer.serialize(data)) == data

    def test_invalid_marker_raises(self, serializer: JsonSerializer) -> None:
        with pytest.raises(SerializationError):
            serializer.deserialize(b'{"__datetime__": "yesterday"}')

    def test_tuples_come_back_as_lists(self, serializer: JsonSerializer) -> None:
        assert serializer.deserialize(serializer.serialize({"t": (1, 2)})) == {"t": [1, 2]}

    def test_serialize_bytes_and_sets(self, serializer: JsonSerializer) -> None:
        deserialized = serializer.deserialize(serializer.serialize({"b": b"raw", "s": {1}}))

        assert deserialized == {"b": "raw", "s": [1]}

    def test_serialize_none(self, serializer: JsonSerializer) -> None:
        """Test serializing None."""
        assert serializer.deserialize(serializer.serialize(None)) is None

    def test_deserialize_invalid_json(self, serializer: JsonSerializer) -> None:
        """Test deserializing invalid JSON raises error."""
        with pytest.raises(SerializationError):
            serializer.deserialize(b"not valid json")

    def test_deeply_nested_data_raises(self, serializer: JsonSerializer) -> None:
        """Test nesting too deep for the decoder raises error."""
        with pytest.raises(SerializationError):
            serializer.deserialize(b"[" * 100_000 + b"]" * 100_000)

    def test_deserialize_invalid_encoding(self, serializer: JsonSerializer) -> None:
        """Test deserializing invalid encoding raises error."""
        with pytest.raises(SerializationError):
            serializer.deserialize(b"\xff\xfe")

    def test_deserialize_wrong_type(self, serializer: JsonSerializer) -> None:
        with pytest.raises(SerializationError):
            serializer.deserialize(12345)

    def test_serialize_non_serializable(self, serializer: JsonSerializer) -> None:
        """Test serializing objects with circular references raises error."""
        circular: dict = {}
        circular["self"] = circular
        with pytest.raises(SerializationError):
            serializer.serialize(circular)

    def test_custom_encoding(self) -> None:
        """Test serializer with custom encoding."""
        serializer = JsonSerializer(encoding="utf-16")
        data = {"name": "Alice"}

        assert serializer.deserialize(serializer.serialize(data)) == data


class TestPassthroughSerializer:
    """Tests for PassthroughSerializer."""

    def test_identity(self) -> None:
        serializer = PassthroughSerializer()
        value = {"v": [1, 2]}

        assert serializer.serialize(value) is value
        assert serializer.deserialize(value) is value
