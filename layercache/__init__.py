"""layercache: in-process key/value caches composed from policy layers."""

from layercache.core.cache_builder import CacheBuilder, build_cache, describe_layers
from layercache.core.cache_factory import CacheFactory, get_typed, set_typed
from layercache.core.clock import ManualClock
from layercache.core.expirable_cache import ExpirableCache
from layercache.core.lru_cache import LRUCache
from layercache.core.perpetual_cache import PerpetualCache
from layercache.core.synchronized_cache import SynchronizedCache
from layercache.core.ttl_cache import TTLCache
from layercache.domain.exceptions import (
    CacheConfigurationError,
    InvalidCacheArgumentError,
    LayerCacheError,
)
from layercache.domain.interfaces.cache import Cache, CacheDecorator
from layercache.domain.models.common import CacheOptions

__version__ = "1.0.0"

__all__ = [
    "Cache",
    "CacheBuilder",
    "CacheConfigurationError",
    "CacheDecorator",
    "CacheFactory",
    "CacheOptions",
    "ExpirableCache",
    "InvalidCacheArgumentError",
    "LRUCache",
    "LayerCacheError",
    "ManualClock",
    "PerpetualCache",
    "SynchronizedCache",
    "TTLCache",
    "build_cache",
    "describe_layers",
    "get_typed",
    "set_typed",
]
