"""Tests for definition caches."""

from __future__ import annotations

import pytest

from squaretag import MISS, DictDefinitionCache, TTLDefinitionCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestMissSentinel:
    def test_distinct_from_empty_list(self) -> None:
        assert MISS is not None
        assert MISS != []
        assert repr(MISS) == "MISS"

    def test_falsy(self) -> None:
        assert not MISS


class TestDictDefinitionCache:
    """Tests for DictDefinitionCache."""

    def test_get_returns_miss_when_empty(self) -> None:
        assert DictDefinitionCache().get("definitions") is MISS

    def test_set_then_get(self) -> None:
        cache = DictDefinitionCache()
        value = ["x"]
        cache.set("definitions", value)
        assert cache.get("definitions") is value

    def test_empty_list_is_a_hit(self) -> None:
        cache = DictDefinitionCache()
        cache.set("definitions", [])
        assert cache.get("definitions") == []

    def test_delete_and_clear(self) -> None:
        cache = DictDefinitionCache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("a")
        cache.delete("missing")
        assert cache.get("a") is MISS
        cache.clear()
        assert cache.get("b") is MISS


class TestTTLDefinitionCache:
    """Tests for TTLDefinitionCache."""

    def test_valid_within_ttl(self) -> None:
        clock = FakeClock()
        cache = TTLDefinitionCache(60, clock=clock)
        cache.set("definitions", [])
        clock.now += 59
        assert cache.get("definitions") == []

    def test_expires_after_ttl(self) -> None:
        clock = FakeClock()
        cache = TTLDefinitionCache(60, clock=clock)
        cache.set("definitions", [])
        clock.now += 60
        assert cache.get("definitions") is MISS

    def test_set_renews(self) -> None:
        clock = FakeClock()
        cache = TTLDefinitionCache(10, clock=clock)
        cache.set("k", 1)
        clock.now += 8
        cache.set("k", 2)
        clock.now += 8
        assert cache.get("k") == 2

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_rejects_non_positive_ttl(self, ttl: float) -> None:
        with pytest.raises(ValueError, match="ttl"):
            TTLDefinitionCache(ttl)
