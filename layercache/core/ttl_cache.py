"""Per-entry time-to-live layer.

Records an absolute expiry instant for every key set through it. Expired
entries are purged lazily, when `get`, `contains_key`, `size` or
`purge_expired` next touches them.
"""

import logging
import time
from typing import Dict, List, Optional

from layercache.domain.interfaces.cache import Cache, CacheDecorator, require_key, require_value
from layercache.domain.models.common import (
    CacheEntry,
    CacheKey,
    CacheValue,
    Clock,
    Duration,
    to_seconds,
)

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60  # 5 minutes


class TTLCache(CacheDecorator):
    """Expires each entry independently after its time to live.

    The wrapped cache knows nothing about expiry; it always holds the latest
    value for a key until this layer purges it. The wrapped cache is treated
    as authoritative for presence, so keys dropped underneath (an LRU
    eviction, an inner flush) are forgotten here on next touch.
    """

    def __init__(
        self,
        delegate: Cache,
        default_ttl: Duration = DEFAULT_TTL_SECONDS,
        clock: Clock = time.monotonic,
    ):
        """Initializes the TTL layer.

        Args:
            delegate: The cache to wrap.
            default_ttl: Seconds (or timedelta) an entry lives unless `set`
                is given an explicit ttl.
            clock: Monotonic time source in seconds.
        """
        super().__init__(delegate)
        self._default_ttl = to_seconds(default_ttl)
        self._clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}
        logger.debug(f"TTLCache initialized with default TTL {self._default_ttl}s")

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    @property
    def size(self) -> int:
        self.purge_expired()
        return len(self._entries)

    def set(self, key: CacheKey, value: CacheValue, ttl: Optional[Duration] = None) -> None:
        """Stores value under key with the default or an explicit TTL.

        A ttl of zero or less stores an entry that is already expired.
        """
        require_key(key, "set")
        require_value(value, "set")
        seconds = self._default_ttl if ttl is None else to_seconds(ttl)
        self._entries[key] = CacheEntry(value=value, expiry_time=self._clock() + seconds)
        self._delegate.set(key, value)

    def get(self, key: CacheKey) -> Optional[CacheValue]:
        require_key(key, "get")
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._purge(key)
            return None
        value = self._delegate.get(key)
        if value is None:
            self._entries.pop(key, None)
        return value

    def contains_key(self, key: CacheKey) -> bool:
        require_key(key, "contains_key")
        entry = self._entries.get(key)
        if entry is None:
            return False
        if entry.is_expired(self._clock()):
            self._purge(key)
            return False
        if not self._delegate.contains_key(key):
            self._entries.pop(key, None)
            return False
        return True

    def remove(self, key: CacheKey) -> Optional[CacheValue]:
        require_key(key, "remove")
        self._entries.pop(key, None)
        return self._delegate.remove(key)

    def clear(self) -> None:
        self._entries.clear()
        self._delegate.clear()

    def purge_expired(self) -> int:
        """Purges expired entries and entries the wrapped cache no longer holds.

        Returns:
            The number of entries dropped from this layer.
        """
        now = self._clock()
        expired_keys: List[CacheKey] = [k for k, e in self._entries.items() if e.is_expired(now)]
        for key in expired_keys:
            self._purge(key)
        missing_keys = [k for k in self._entries if not self._delegate.contains_key(k)]
        for key in missing_keys:
            del self._entries[key]
        if expired_keys or missing_keys:
            logger.debug(f"Purged {len(expired_keys)} expired and {len(missing_keys)} evicted entries")
        return len(expired_keys) + len(missing_keys)

    def _purge(self, key: CacheKey) -> None:
        self._entries.pop(key, None)
        self._delegate.remove(key)
        logger.debug(f"Purged expired key: {key!r}")
