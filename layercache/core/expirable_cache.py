"""Bulk expiry layer: empties the wrapped cache once per flush interval.

The interval is checked lazily at the start of every operation, so an
idle cache only empties on its next touch.
"""

import logging
import time
from typing import Optional

from layercache.domain.interfaces.cache import Cache, CacheDecorator
from layercache.domain.models.common import CacheKey, CacheValue, Clock, Duration, to_seconds

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_INTERVAL_SECONDS = 60.0


class ExpirableCache(CacheDecorator):
    """Clears everything once `flush_interval` has elapsed since the last flush."""

    def __init__(
        self,
        delegate: Cache,
        flush_interval: Duration = DEFAULT_FLUSH_INTERVAL_SECONDS,
        clock: Clock = time.monotonic,
    ):
        """Initializes the bulk expiry layer.

        Args:
            delegate: The cache to wrap.
            flush_interval: Seconds (or timedelta) between flushes.
            clock: Monotonic time source in seconds.
        """
        super().__init__(delegate)
        self._flush_interval = to_seconds(flush_interval)
        self._clock = clock
        self._last_flush_time = clock()
        logger.debug(f"ExpirableCache initialized with flush interval {self._flush_interval}s")

    @property
    def flush_interval(self) -> float:
        return self._flush_interval

    @property
    def size(self) -> int:
        self._recycle()
        return self._delegate.size

    def set(self, key: CacheKey, value: CacheValue, ttl: Optional[Duration] = None) -> None:
        self._recycle()
        self._forward_set(key, value, ttl)

    def get(self, key: CacheKey) -> Optional[CacheValue]:
        self._recycle()
        return self._delegate.get(key)

    def remove(self, key: CacheKey) -> Optional[CacheValue]:
        self._recycle()
        return self._delegate.remove(key)

    def contains_key(self, key: CacheKey) -> bool:
        self._recycle()
        return self._delegate.contains_key(key)

    def clear(self) -> None:
        # An explicit clear is a flush too
        self._delegate.clear()
        self._last_flush_time = self._clock()

    def _recycle(self) -> None:
        now = self._clock()
        if now - self._last_flush_time >= self._flush_interval:
            self._delegate.clear()
            self._last_flush_time = now
            logger.debug("Flush interval elapsed, cleared all cached entries.")
