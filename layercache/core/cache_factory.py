"""Convenience constructors for single-policy caches, and typed read/write helpers."""

import time
from typing import Optional, Type, TypeVar

from layercache.core.cache_builder import CacheBuilder
from layercache.core.expirable_cache import DEFAULT_FLUSH_INTERVAL_SECONDS, ExpirableCache
from layercache.core.lru_cache import DEFAULT_MAX_SIZE, LRUCache
from layercache.core.perpetual_cache import PerpetualCache
from layercache.core.ttl_cache import DEFAULT_TTL_SECONDS, TTLCache
from layercache.domain.interfaces.cache import Cache
from layercache.domain.models.common import CacheKey, Clock, Duration

T = TypeVar("T")


class CacheFactory:
    """Shortcuts that wrap a fresh PerpetualCache in one policy layer."""

    @staticmethod
    def perpetual() -> PerpetualCache:
        return PerpetualCache()

    @staticmethod
    def lru(max_size: int = DEFAULT_MAX_SIZE) -> LRUCache:
        return LRUCache(PerpetualCache(), max_size)

    @staticmethod
    def expirable(
        flush_interval: Duration = DEFAULT_FLUSH_INTERVAL_SECONDS,
        clock: Clock = time.monotonic,
    ) -> ExpirableCache:
        return ExpirableCache(PerpetualCache(), flush_interval, clock=clock)

    @staticmethod
    def ttl(ttl: Duration = DEFAULT_TTL_SECONDS, clock: Clock = time.monotonic) -> TTLCache:
        return TTLCache(PerpetualCache(), ttl, clock=clock)

    @staticmethod
    def builder(clock: Clock = time.monotonic) -> CacheBuilder:
        return CacheBuilder(clock=clock)


def get_typed(cache: Cache, key: CacheKey, expected_type: Type[T]) -> Optional[T]:
    """Returns the cached value only if it is an instance of expected_type."""
    value = cache.get(key)
    return value if isinstance(value, expected_type) else None


def set_typed(cache: Cache, key: CacheKey, value: T, expected_type: Type[T]) -> None:
    """Stores value only if it is an instance of expected_type.

    Raises:
        TypeError: If value has another type; the cache is left untouched.
    """
    if not isinstance(value, expected_type):
        raise TypeError(f"Expected {expected_type.__name__} for key {key!r}, got {type(value).__name__}")
    cache.set(key, value)
