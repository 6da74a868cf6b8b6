"""Interface for in-process caches.

Defines the contract every cache layer implements, plus the forwarding
base class used by decorators that wrap another cache.
"""

import abc
from typing import Optional

from layercache.domain.exceptions import InvalidCacheArgumentError
from layercache.domain.models.common import CacheKey, CacheValue, Duration


def require_key(key: CacheKey, operation: str) -> None:
    """Rejects None keys, which are indistinguishable from a cache miss."""
    if key is None:
        raise InvalidCacheArgumentError("key", operation)


def require_value(value: CacheValue, operation: str) -> None:
    """Rejects None values, which are indistinguishable from a cache miss."""
    if value is None:
        raise InvalidCacheArgumentError("value", operation)


class Cache(abc.ABC):
    """Abstract Base Class for cache operations.

    A missing key is never an error: lookups return None instead.
    """

    @property
    @abc.abstractmethod
    def size(self) -> int:
        """Number of live entries."""
        pass

    @abc.abstractmethod
    def set(self, key: CacheKey, value: CacheValue) -> None:
        """Stores value under key, replacing any previous value.

        Args:
            key: A hashable, non-None key.
            value: A non-None value.
        """
        pass

    @abc.abstractmethod
    def get(self, key: CacheKey) -> Optional[CacheValue]:
        """Returns the value stored under key, or None if absent."""
        pass

    @abc.abstractmethod
    def remove(self, key: CacheKey) -> Optional[CacheValue]:
        """Removes key and returns its previous value, or None if absent."""
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """Removes every entry. Safe to call repeatedly."""
        pass

    @abc.abstractmethod
    def contains_key(self, key: CacheKey) -> bool:
        """Returns True if key currently holds a value."""
        pass


class CacheDecorator(Cache):
    """A cache that wraps another cache and forwards every operation to it.

    Subclasses override only the operations whose behavior they change.
    `set` accepts an optional per-call `ttl`, which is passed through only
    when given, so it reaches a TTL layer anywhere below this one.
    """

    def __init__(self, delegate: Cache):
        self._delegate = delegate

    @property
    def delegate(self) -> Cache:
        """The wrapped cache."""
        return self._delegate

    @property
    def size(self) -> int:
        return self._delegate.size

    def set(self, key: CacheKey, value: CacheValue, ttl: Optional[Duration] = None) -> None:
        self._forward_set(key, value, ttl)

    def get(self, key: CacheKey) -> Optional[CacheValue]:
        return self._delegate.get(key)

    def remove(self, key: CacheKey) -> Optional[CacheValue]:
        return self._delegate.remove(key)

    def clear(self) -> None:
        self._delegate.clear()

    def contains_key(self, key: CacheKey) -> bool:
        return self._delegate.contains_key(key)

    def _forward_set(self, key: CacheKey, value: CacheValue, ttl: Optional[Duration]) -> None:
        if ttl is None:
            self._delegate.set(key, value)
        else:
            self._delegate.set(key, value, ttl=ttl)
