"""Pytest configuration for tagcache tests."""

import asyncio
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

import pytest

from tagcache import InMemoryTagKeeper

START = 1_700_000_000_000


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = START) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


class FlakyKeeper(InMemoryTagKeeper):
    """In-memory keeper whose writes and loads can be made to fail or block."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_writes = False
        self.fail_loads = False
        self.gate: asyncio.Event | None = None
        self.write_calls: list[tuple[str, int]] = []
        self.load_calls: list[int] = []

    async def write(self, tag: str, instant: int) -> None:
        self.write_calls.append((tag, instant))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_writes:
            raise ConnectionError("keeper unavailable")
        await super().write(tag, instant)

    async def load(self, since: int) -> Mapping[str, int]:
        self.load_calls.append(since)
        if self.fail_loads:
            raise ConnectionError("keeper unavailable")
        return await super().load(since)


class DictBackend:
    """Out-of-process style backend: a plain dict with precise deletes."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.ttls: dict[str, timedelta | None] = {}

    async def get(self, key: str) -> Any | None:
        return self.data.get(key)

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        self.data[key] = value
        self.ttls[key] = ttl

    async def delete(self, key: str) -> bool:
        self.ttls.pop(key, None)
        return self.data.pop(key, None) is not None


class FailingBackend:
    """Backend whose every call raises."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or ConnectionError("backend down")

    async def get(self, key: str) -> Any | None:
        raise self.error

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        raise self.error

    async def delete(self, key: str) -> bool:
        raise self.error


@pytest.fixture
def clock() -> FakeClock:
    """A fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def keeper() -> FlakyKeeper:
    """A shared keeper that works until told otherwise."""
    return FlakyKeeper()


@pytest.fixture
def dict_backend() -> DictBackend:
    """An external (JSON-encoded) backend."""
    return DictBackend()


@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset decorator configuration and the default registry after each test."""
    import tagcache.core.services.registry
    import tagcache.decorators

    # Store original values
    original_instance = tagcache.decorators._cache_instance
    original_registry = tagcache.core.services.registry._default_registry

    yield

    # Restore original values after test
    tagcache.decorators._cache_instance = original_instance
    tagcache.core.services.registry._default_registry = original_registry


@pytest.fixture
def failing_backend() -> FailingBackend:
    """A backend that always raises ConnectionError."""
    return FailingBackend()
