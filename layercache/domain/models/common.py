"""Defines common Value Objects used across the cache layers.

These objects represent simple values or concepts like keys, values,
durations and builder options, ensuring consistency across layers.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Hashable, Optional, Union

# === Core Value Objects ===

CacheKey = Hashable   # Any hashable, non-None key
CacheValue = Any      # Any non-None value

# Seconds as a number, or a timedelta
Duration = Union[int, float, timedelta]

# Returns a monotonic timestamp in seconds (time.monotonic by default)
Clock = Callable[[], float]


def to_seconds(duration: Duration) -> float:
    """Normalizes a duration to a float number of seconds."""
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


@dataclass
class CacheEntry:
    """Value stored by the TTL layer alongside its absolute expiry instant."""
    value: Any
    expiry_time: float  # Clock reading after which the entry is expired

    def is_expired(self, now: float) -> bool:
        # An entry is only valid strictly before its expiry instant
        return not self.expiry_time > now


@dataclass
class CacheOptions:
    """Configuration consumed by the cache builder.

    Attributes:
        capacity: Maximum number of entries (enables LRU eviction).
        ttl: Default per-entry time to live in seconds (enables TTL expiry).
        flush_interval: Seconds between bulk flushes (enables bulk expiry).
        thread_safe: Wrap the whole chain in a single lock.
    """
    capacity: Optional[int] = None
    ttl: Optional[float] = None
    flush_interval: Optional[float] = None
    thread_safe: bool = False
