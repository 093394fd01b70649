"""Cache decorators for async functions.

These decorators cache coroutine results in a CacheInstance and
invalidate tags after mutations. They use the instance passed as
``cache`` or, failing that, the one registered with ``configure``.
"""

import functools
import logging
import re
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from tagcache.core.services.cache_instance import CacheInstance
from tagcache.utils.hashing import hash_value

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Module-level cache instance reference
_cache_instance: CacheInstance | None = None


def configure(cache: CacheInstance | None) -> None:
    """Configure the cache instance used by the decorators.

    Args:
        cache: The cache instance to use, or None to disable caching.

    Example:
        configure(create("resolvers"))
    """
    global _cache_instance
    _cache_instance = cache


def get_cache_instance() -> CacheInstance | None:
    """Get the configured cache instance.

    Returns:
        The configured cache instance, or None if not configured.
    """
    return _cache_instance


def cached(
    expire: int | timedelta | None = None,
    tags: list[str] | None = None,
    key: str | Callable[..., str] | None = None,
    cache: CacheInstance | None = None,
) -> Callable[[F], F]:
    """Decorator for caching async function results.

    Args:
        expire: Lifetime of cached results. Uses the cache default if None.
        tags: Tags for invalidation. Supports {arg_name} interpolation.
        key: Custom cache key or function to generate key.
            If string, supports {arg_name} interpolation.
            If callable, receives (*args, **kwargs) and returns key string.
        cache: Cache instance to use instead of the configured one.

    Returns:
        Decorated function.

    Example:
        @cached(expire=timedelta(minutes=10), tags=["users", "user:{id}"])
        async def get_user(id: str) -> dict:
            return await db.get_user(id)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            instance = cache or _cache_instance
            if instance is None:
                # Cache not configured, execute directly
                return await func(*args, **kwargs)

            cache_key = _build_cache_key(func, args, kwargs, key)

            result = await instance.get(cache_key)
            if result.hit:
                return result.value
            if not result.ok:
                logger.debug("Ignoring cache error for %s: %s", cache_key, result.error)

            value = await func(*args, **kwargs)

            stored = await instance.set(
                cache_key, value, expire=expire, tags=_resolve_tags(tags, kwargs)
            )
            if not stored.ok:
                logger.debug("Result of %s not cached: %s", cache_key, stored.error)

            return value

        return wrapper  # type: ignore

    return decorator


def invalidates(
    tags: list[str] | None = None,
    delay: int | timedelta | None = None,
    flush: bool = False,
    cache: CacheInstance | None = None,
) -> Callable[[F], F]:
    """Decorator for invalidating tags after a mutation.

    Executes the decorated function and then invalidates every given
    tag. Without tags the whole namespace is invalidated.

    Args:
        tags: Tags to invalidate. Supports {arg_name} interpolation.
        delay: Push the invalidation instant forward by this much.
        flush: Publish the invalidation to the keeper right away.
        cache: Cache instance to use instead of the configured one.

    Returns:
        Decorated function.

    Example:
        @invalidates(tags=["users", "user:{id}"])
        async def update_user(id: str, data: dict) -> dict:
            return await db.update_user(id, data)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            # Execute function first
            result = await func(*args, **kwargs)

            instance = cache or _cache_instance
            if instance is not None:
                resolved = _resolve_tags(tags, kwargs) or [None]
                for tag in resolved:
                    instance.tagrm(tag, delay=delay, flush=flush)

            return result

        return wrapper  # type: ignore

    return decorator


def _build_cache_key(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    custom_key: str | Callable[..., str] | None,
) -> str:
    """Build cache key for a function call.

    Args:
        func: The function being cached.
        args: Positional arguments.
        kwargs: Keyword arguments.
        custom_key: Custom key or key builder function.

    Returns:
        The cache key string.
    """
    if custom_key is not None:
        if callable(custom_key):
            return custom_key(*args, **kwargs)
        return _interpolate_string(custom_key, kwargs)

    # Build default key from function module, name, and arguments
    name = f"{func.__module__}.{func.__qualname__}"
    if not args and not kwargs:
        return name
    return f"{name}:{hash_value({'args': list(args), 'kwargs': kwargs})}"


def _resolve_tags(
    tags: list[str] | None,
    kwargs: dict[str, Any],
) -> list[str]:
    """Resolve tags with argument interpolation.

    Args:
        tags: Tag patterns with optional {arg} placeholders.
        kwargs: Keyword arguments.

    Returns:
        List of resolved tag strings.
    """
    if not tags:
        return []
    return [_interpolate_string(tag, kwargs) for tag in tags]


def _interpolate_string(template: str, kwargs: dict[str, Any]) -> str:
    """Interpolate {arg_name} placeholders in string.

    Args:
        template: String with {arg_name} placeholders.
        kwargs: Keyword arguments for interpolation.

    Returns:
        Interpolated string.
    """
    pattern = r"\{(\w+)\}"

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in kwargs:
            return str(kwargs[name])
        return match.group(0)  # Keep original if not found

    return re.sub(pattern, replacer, template)
