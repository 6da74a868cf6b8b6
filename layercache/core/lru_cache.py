"""Least-recently-used eviction layer.

Tracks the recency of every key set through it and evicts the least
recently touched key from the wrapped cache once capacity is exceeded.
"""

import logging
from collections import OrderedDict
from typing import Optional

from layercache.domain.exceptions import CacheConfigurationError
from layercache.domain.interfaces.cache import Cache, CacheDecorator
from layercache.domain.models.common import CacheKey, CacheValue, Duration

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 100


class LRUCache(CacheDecorator):
    """Keeps at most `max_size` entries in the wrapped cache."""

    def __init__(self, delegate: Cache, max_size: int = DEFAULT_MAX_SIZE):
        """Initializes the LRU layer.

        Args:
            delegate: The cache to wrap.
            max_size: Maximum number of keys kept in the delegate.

        Raises:
            CacheConfigurationError: If max_size is not a positive integer.
        """
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0:
            raise CacheConfigurationError(f"LRU capacity must be a positive integer, got {max_size!r}")
        super().__init__(delegate)
        self._max_size = max_size
        # Oldest (least recently used) key first
        self._key_order: "OrderedDict[CacheKey, bool]" = OrderedDict()
        logger.debug(f"LRUCache initialized with capacity {max_size}")

    @property
    def capacity(self) -> int:
        return self._max_size

    def set(self, key: CacheKey, value: CacheValue, ttl: Optional[Duration] = None) -> None:
        self._forward_set(key, value, ttl)
        self._key_order[key] = True
        self._key_order.move_to_end(key)
        if len(self._key_order) > self._max_size:
            eldest_key, _ = self._key_order.popitem(last=False)
            self._delegate.remove(eldest_key)
            logger.debug(f"Evicted least recently used key: {eldest_key!r}")

    def get(self, key: CacheKey) -> Optional[CacheValue]:
        # Counts as a touch even if the delegate no longer holds the value
        if key in self._key_order:
            self._key_order.move_to_end(key)
        return self._delegate.get(key)

    def remove(self, key: CacheKey) -> Optional[CacheValue]:
        self._key_order.pop(key, None)
        return self._delegate.remove(key)

    def clear(self) -> None:
        self._key_order.clear()
        self._delegate.clear()
