"""Time helpers. All instants are integer milliseconds since the epoch."""

import time
from collections.abc import Callable
from datetime import timedelta

Clock = Callable[[], int]


def now_ms() -> int:
    """Return the current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def to_millis(value: int | float | timedelta | None) -> int | None:
    """Convert a duration to whole milliseconds.

    Args:
        value: Milliseconds as a number, a timedelta, or None.

    Returns:
        The duration in milliseconds, or None if value is None.
    """
    if value is None:
        return None
    if isinstance(value, timedelta):
        return int(value.total_seconds() * 1000)
    return int(value)
