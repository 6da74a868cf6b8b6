from datetime import timedelta

import pytest

from layercache.core.clock import ManualClock
from layercache.core.lru_cache import LRUCache
from layercache.core.perpetual_cache import PerpetualCache
from layercache.core.ttl_cache import DEFAULT_TTL_SECONDS, TTLCache
from layercache.domain.exceptions import InvalidCacheArgumentError


@pytest.fixture
def store():
    return PerpetualCache()


@pytest.fixture
def ttl_cache(store: PerpetualCache, clock: ManualClock):
    return TTLCache(store, default_ttl=2, clock=clock)


def test_value_available_before_expiry(ttl_cache: TTLCache, clock: ManualClock):
    ttl_cache.set("temp", "x")
    assert ttl_cache.get("temp") == "x"
    clock.advance(1.999)
    assert ttl_cache.get("temp") == "x"
    assert ttl_cache.contains_key("temp")


def test_value_expires_after_default_ttl(ttl_cache: TTLCache, clock: ManualClock, store: PerpetualCache):
    ttl_cache.set("temp", "x")
    clock.advance(2)
    assert ttl_cache.get("temp") is None
    assert not ttl_cache.contains_key("temp")
    # Purge reaches the delegate too
    assert not store.contains_key("temp")


def test_entry_is_expired_exactly_at_expiry_instant(ttl_cache: TTLCache, clock: ManualClock):
    ttl_cache.set("k", "v", ttl=5)
    clock.advance(5)
    assert not ttl_cache.contains_key("k")


@pytest.mark.parametrize("ttl", [0, -1, timedelta(0)])
def test_non_positive_ttl_is_immediately_expired(ttl_cache: TTLCache, ttl):
    ttl_cache.set("k", "v", ttl=ttl)
    assert ttl_cache.get("k") is None
    assert not ttl_cache.contains_key("k")


def test_zero_ttl_with_real_clock_is_expired(store: PerpetualCache):
    cache = TTLCache(store, default_ttl=0)
    cache.set("k", "v")
    assert cache.get("k") is None
    assert not cache.contains_key("k")


def test_explicit_ttl_overrides_default(ttl_cache: TTLCache, clock: ManualClock):
    ttl_cache.set("short", 1)
    ttl_cache.set("long", 2, ttl=timedelta(seconds=10))
    clock.advance(5)
    assert ttl_cache.get("short") is None
    assert ttl_cache.get("long") == 2


def test_set_refreshes_expiry(ttl_cache: TTLCache, clock: ManualClock):
    ttl_cache.set("k", "old")
    clock.advance(1.5)
    ttl_cache.set("k", "new")
    clock.advance(1.5)
    assert ttl_cache.get("k") == "new"


def test_size_sweeps_expired_entries(ttl_cache: TTLCache, clock: ManualClock, store: PerpetualCache):
    ttl_cache.set("a", 1)
    ttl_cache.set("b", 2, ttl=10)
    clock.advance(3)
    # Delegate still holds the stale entry until something touches it
    assert store.size == 2
    assert ttl_cache.size == 1
    assert store.size == 1
    assert ttl_cache.get("b") == 2


def test_purge_expired_returns_count(ttl_cache: TTLCache, clock: ManualClock):
    ttl_cache.set("a", 1)
    ttl_cache.set("b", 2)
    ttl_cache.set("c", 3, ttl=60)
    clock.advance(2)
    assert ttl_cache.purge_expired() == 2
    assert ttl_cache.purge_expired() == 0


def test_remove_returns_delegate_value_even_if_expired(ttl_cache: TTLCache, clock: ManualClock):
    ttl_cache.set("k", "v")
    clock.advance(10)
    assert ttl_cache.remove("k") == "v"
    assert ttl_cache.remove("k") is None
    assert ttl_cache.size == 0


def test_get_untracked_key_returns_none_without_consulting_delegate(ttl_cache: TTLCache, store: PerpetualCache):
    store.set("outside", "value")
    assert ttl_cache.get("outside") is None
    assert not ttl_cache.contains_key("outside")


def test_clear_resets_both_structures(ttl_cache: TTLCache, store: PerpetualCache):
    ttl_cache.set("a", 1)
    ttl_cache.set("b", 2)
    ttl_cache.clear()
    assert ttl_cache.size == 0
    assert store.size == 0
    ttl_cache.clear()
    assert ttl_cache.size == 0


def test_keys_evicted_below_are_forgotten(clock: ManualClock):
    lru = LRUCache(PerpetualCache(), max_size=2)
    cache = TTLCache(lru, default_ttl=30, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert cache.size == 2
    assert cache.get("a") is None
    assert not cache.contains_key("a")
    assert cache.get("c") == 3


def test_default_ttl_property(store: PerpetualCache):
    assert TTLCache(store).default_ttl == DEFAULT_TTL_SECONDS
    assert TTLCache(store, default_ttl=timedelta(minutes=1)).default_ttl == 60.0


def test_none_value_rejected_before_recording_entry(ttl_cache: TTLCache):
    with pytest.raises(InvalidCacheArgumentError):
        ttl_cache.set("k", None)
    assert ttl_cache.size == 0


def test_none_key_rejected(ttl_cache: TTLCache):
    with pytest.raises(InvalidCacheArgumentError):
        ttl_cache.get(None)
