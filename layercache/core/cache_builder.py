"""Composes the cache layers into a chain.

The order is fixed regardless of the order options are given in:

    PerpetualCache -> LRUCache -> TTLCache -> ExpirableCache -> SynchronizedCache

so TTL checks run above recency bookkeeping, a bulk flush clears the TTL
and LRU side tables through their own `clear`, and the lock guards the
whole chain.
"""

import logging
import time
from typing import List, Optional

from layercache.core.expirable_cache import ExpirableCache
from layercache.core.lru_cache import LRUCache
from layercache.core.perpetual_cache import PerpetualCache
from layercache.core.synchronized_cache import SynchronizedCache
from layercache.core.ttl_cache import TTLCache
from layercache.domain.exceptions import CacheConfigurationError
from layercache.domain.interfaces.cache import Cache
from layercache.domain.models.common import CacheOptions, Clock, Duration, to_seconds

logger = logging.getLogger(__name__)


class CacheBuilder:
    """Fluent builder for a composed cache chain."""

    def __init__(self, clock: Clock = time.monotonic):
        """Initializes an empty builder.

        Args:
            clock: Time source shared by the TTL and bulk expiry layers.
        """
        self._clock = clock
        self._max_size: Optional[int] = None
        self._ttl: Optional[float] = None
        self._flush_interval: Optional[float] = None
        self._thread_safe = False

    @classmethod
    def from_options(cls, options: CacheOptions, clock: Clock = time.monotonic) -> "CacheBuilder":
        """Creates a builder preloaded with the given options."""
        builder = cls(clock=clock)
        if options.capacity is not None:
            builder.max_size(options.capacity)
        if options.ttl is not None:
            builder.ttl(options.ttl)
        if options.flush_interval is not None:
            builder.flush_interval(options.flush_interval)
        return builder.thread_safe(options.thread_safe)

    def max_size(self, size: int) -> "CacheBuilder":
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise CacheConfigurationError(f"Cache capacity must be a positive integer, got {size!r}")
        self._max_size = size
        return self

    def ttl(self, ttl: Duration) -> "CacheBuilder":
        self._ttl = to_seconds(ttl)
        return self

    def flush_interval(self, interval: Duration) -> "CacheBuilder":
        self._flush_interval = to_seconds(interval)
        return self

    def thread_safe(self, enabled: bool = True) -> "CacheBuilder":
        self._thread_safe = enabled
        return self

    def options(self) -> CacheOptions:
        """Returns the options currently held by the builder."""
        return CacheOptions(
            capacity=self._max_size,
            ttl=self._ttl,
            flush_interval=self._flush_interval,
            thread_safe=self._thread_safe,
        )

    def build(self) -> Cache:
        """Builds a new cache chain from the configured options."""
        cache: Cache = PerpetualCache()

        if self._max_size is not None:
            cache = LRUCache(cache, self._max_size)

        if self._ttl is not None:
            cache = TTLCache(cache, self._ttl, clock=self._clock)

        if self._flush_interval is not None:
            cache = ExpirableCache(cache, self._flush_interval, clock=self._clock)

        if self._thread_safe:
            cache = SynchronizedCache(cache)

        logger.info(f"Built cache chain: {' -> '.join(describe_layers(cache))}")
        return cache


def build_cache(options: CacheOptions, clock: Clock = time.monotonic) -> Cache:
    """Builds a cache chain directly from options."""
    return CacheBuilder.from_options(options, clock=clock).build()


def describe_layers(cache: Cache) -> List[str]:
    """Lists the class names of a chain, outermost first."""
    layers = []
    current: Optional[Cache] = cache
    while current is not None:
        layers.append(type(current).__name__)
        current = getattr(current, "delegate", None)
    return layers
