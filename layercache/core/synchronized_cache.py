"""Thread-safe wrapper that serializes every operation on a cache chain."""

import logging
from threading import Lock
from typing import Optional

from layercache.domain.interfaces.cache import Cache, CacheDecorator
from layercache.domain.models.common import CacheKey, CacheValue, Duration

logger = logging.getLogger(__name__)


class SynchronizedCache(CacheDecorator):
    """Runs each operation on the wrapped chain under a single lock.

    There is no reader/writer split: concurrent reads serialize as well.
    Callers block without a timeout until the lock is free.
    """

    def __init__(self, delegate: Cache):
        super().__init__(delegate)
        self._lock = Lock()
        logger.debug(f"SynchronizedCache initialized around {type(delegate).__name__}")

    @property
    def size(self) -> int:
        with self._lock:
            return self._delegate.size

    def set(self, key: CacheKey, value: CacheValue, ttl: Optional[Duration] = None) -> None:
        with self._lock:
            self._forward_set(key, value, ttl)

    def get(self, key: CacheKey) -> Optional[CacheValue]:
        with self._lock:
            return self._delegate.get(key)

    def remove(self, key: CacheKey) -> Optional[CacheValue]:
        with self._lock:
            return self._delegate.remove(key)

    def clear(self) -> None:
        with self._lock:
            self._delegate.clear()

    def contains_key(self, key: CacheKey) -> bool:
        with self._lock:
            return self._delegate.contains_key(key)
