"""Tests for the TTL cache."""

from __future__ import annotations

from f1relay.cache import MISS, TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    def test_set_then_get(self) -> None:
        cache = TTLCache(ttl=30, clock=FakeClock())
        cache.set("drivers:9161", ["VER"])
        assert cache.get("drivers:9161") == ["VER"]
        assert cache.has("drivers:9161")

    def test_expiry(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl=30, clock=clock)
        cache.set("k", "v")
        clock.now += 30.5
        assert cache.get("k") is MISS
        assert not cache.has("k")
        assert len(cache) == 0

    def test_ttl_boundary_inclusive(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl=30, clock=clock)
        cache.set("k", "v")
        clock.now += 30
        assert cache.get("k") == "v"

    def test_falsy_values_distinct_from_miss(self) -> None:
        cache = TTLCache(ttl=30, clock=FakeClock())
        cache.set("empty", [])
        cache.set("none", None)
        assert cache.get("empty") == []
        assert cache.get("none") is None
        assert cache.get("absent") is MISS

    def test_custom_default(self) -> None:
        cache = TTLCache(ttl=30, clock=FakeClock())
        assert cache.get("absent", None) is None

    def test_overwrite_refreshes_timestamp(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl=30, clock=clock)
        cache.set("k", 1)
        clock.now += 20
        cache.set("k", 2)
        clock.now += 20
        assert cache.get("k") == 2

    def test_eviction_is_lazy(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl=30, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        clock.now += 60
        assert len(cache) == 2
        cache.has("a")
        assert len(cache) == 1

    def test_delete_and_clear(self) -> None:
        cache = TTLCache(ttl=30, clock=FakeClock())
        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("a")
        cache.delete("missing")
        assert cache.get("a") is MISS
        cache.clear()
        assert len(cache) == 0

    def test_miss_is_falsy_singleton(self) -> None:
        assert not MISS
        assert repr(MISS) == "MISS"
