"""Unbounded cache that keeps entries until they are removed or cleared."""

import logging
from typing import Any, Dict, Optional

from layercache.domain.interfaces.cache import Cache, require_key, require_value
from layercache.domain.models.common import CacheKey, CacheValue

logger = logging.getLogger(__name__)


class PerpetualCache(Cache):
    """Plain dict-backed store with no eviction and no expiry."""

    def __init__(self):
        self._store: Dict[CacheKey, Any] = {}
        logger.debug("PerpetualCache initialized.")

    @property
    def size(self) -> int:
        return len(self._store)

    def set(self, key: CacheKey, value: CacheValue) -> None:
        require_key(key, "set")
        require_value(value, "set")
        self._store[key] = value

    def get(self, key: CacheKey) -> Optional[CacheValue]:
        require_key(key, "get")
        return self._store.get(key)

    def remove(self, key: CacheKey) -> Optional[CacheValue]:
        require_key(key, "remove")
        return self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def contains_key(self, key: CacheKey) -> bool:
        require_key(key, "contains_key")
        return key in self._store
