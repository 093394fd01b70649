"""Cache configuration entity."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_INTERVAL = 5000
DEFAULT_MAX_EXPIRE_TIME = 7 * 86_400_000
DEFAULT_EXPIRE = 86_400_000
DEFAULT_MEMORY_MAXSIZE = 2000


@dataclass
class CacheConfig:
    """Cache configuration.

    All durations are integer milliseconds.

    Tag synchronization:
        Every ``tag_flush_interval`` ms the instance publishes its pending
        tag invalidations to the keeper and pulls the keeper's view. The
        first pull covers the last ``tag_max_expire_time`` ms; later pulls
        start at a watermark that trails the newest observed invalidation
        by ``tag_pull_overlap`` ms.
    """

    tag_flush_interval: int = DEFAULT_FLUSH_INTERVAL
    tag_max_expire_time: int = DEFAULT_MAX_EXPIRE_TIME
    tag_pull_overlap: int | None = None

    # Entry defaults
    default_expire: int = DEFAULT_EXPIRE
    memory_maxsize: int = DEFAULT_MEMORY_MAXSIZE

    def __post_init__(self) -> None:
        """Derive the pull overlap and validate values."""
        if self.tag_pull_overlap is None:
            self.tag_pull_overlap = 2 * self.tag_flush_interval

        if self.tag_flush_interval <= 0:
            raise ValueError("tag_flush_interval must be positive")
        if self.tag_max_expire_time <= 0:
            raise ValueError("tag_max_expire_time must be positive")
        if self.tag_pull_overlap < 0:
            raise ValueError("tag_pull_overlap must not be negative")
        if self.default_expire <= 0:
            raise ValueError("default_expire must be positive")
        if self.memory_maxsize <= 0:
            raise ValueError("memory_maxsize must be positive")

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "CacheConfig":
        """Build a config by merging recognised options over the defaults.

        Unrecognised keys are ignored.

        Args:
            options: Option mapping, e.g. ``{"tag_flush_interval": 1000}``.

        Returns:
            A new CacheConfig instance.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for name, value in (options or {}).items():
            if name in known:
                values[name] = value
            else:
                logger.debug("Ignoring unknown cache option %r", name)
        return cls(**values)
