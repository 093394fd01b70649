"""Hashing utilities for cache key generation."""

import hashlib
import json
from typing import Any

_MASK = 0xFFFFFFFF
_SEED1 = 5381
_SEED2 = 0


def key_index(key: str | bytes) -> str:
    """Map a namespaced key to a compact storage key.

    Runs two independent rolling hashes over the UTF-8 bytes of the
    key: a multiply-add (djb2) accumulator and a shift/XOR accumulator,
    both kept to 32 bits. Collisions are possible; readers must compare
    the original key stored alongside the value.

    Args:
        key: The namespaced key, as text or raw bytes.

    Returns:
        A string of the form ``"<hash1>:<hash2>:<length>"``.
    """
    data = key if isinstance(key, bytes) else key.encode("utf-8")

    hash1 = _SEED1
    hash2 = _SEED2
    for byte in data:
        hash1 = ((hash1 << 5) + hash1 + byte) & _MASK
        hash2 = ((hash2 << 4) ^ (hash2 >> 28) ^ byte) & _MASK

    return f"{hash1}:{hash2}:{len(data)}"


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None:
        return "none"

    # Normalize to JSON with sorted keys for determinism
    normalized = json.dumps(value, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]
