"""Tests for the discovery-backed registry."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from squaretag import (
    MISS,
    DictDefinitionCache,
    DiscoveryRegistry,
    MappingSource,
    Registry,
)
from squaretag.registry import CACHE_KEY
from tests.callbacks import identity, return_one, return_two


class CountingSource:
    """Source recording how often it is queried."""

    def __init__(self, table: Mapping[str, Mapping[str, Any]]) -> None:
        self.inner = MappingSource("mod_test", table)
        self.calls = 0

    def fetch(self) -> Iterator[tuple[str, dict[str, Any]]]:
        self.calls += 1
        return self.inner.fetch()


TABLE = {
    "off": {"callback": return_one, "wraps": True},
    "name": {"callback": return_two},
}


class TestDiscoveryRegistry:
    def test_lazy(self) -> None:
        source = CountingSource(TABLE)
        DiscoveryRegistry(source)
        assert source.calls == 0

    def test_queries_source_once(self) -> None:
        source = CountingSource(TABLE)
        registry = DiscoveryRegistry(source)
        registry.get_handler("off")
        registry.get_handler("name")
        list(registry.get_definitions())
        assert source.calls == 1

    def test_get_handler(self) -> None:
        registry = DiscoveryRegistry(CountingSource(TABLE))
        handler = registry.get_handler("off")
        assert handler is not None
        assert handler.wraps is True
        assert handler.invoke("off", {}, "is [not] processed", None, identity) == "one"
        assert registry.get_handler("off") is handler
        assert registry.get_handler("missing") is None

    def test_get_definitions(self) -> None:
        registry = DiscoveryRegistry(CountingSource(TABLE))
        defs = list(registry.get_definitions())
        assert [(d.tag, d.component) for d in defs] == [("off", "mod_test"), ("name", "mod_test")]

    def test_writes_cache_under_fixed_key(self) -> None:
        cache = DictDefinitionCache()
        DiscoveryRegistry(CountingSource(TABLE), cache).get_handler("off")
        cached = cache.get(CACHE_KEY)
        assert cached is not MISS
        assert [d.tag for d in cached] == ["off", "name"]

    def test_second_instance_reuses_cache(self) -> None:
        cache = DictDefinitionCache()
        first = CountingSource(TABLE)
        second = CountingSource(TABLE)
        DiscoveryRegistry(first, cache).get_handler("off")
        registry = DiscoveryRegistry(second, cache)
        assert registry.get_handler("name") is not None
        assert first.calls == 1
        assert second.calls == 0

    def test_cached_empty_list_is_a_hit(self) -> None:
        cache = DictDefinitionCache()
        cache.set(CACHE_KEY, [])
        source = CountingSource(TABLE)
        registry = DiscoveryRegistry(source, cache)
        assert registry.get_handler("off") is None
        assert source.calls == 0

    def test_cache_invalidation_triggers_rediscovery(self) -> None:
        cache = DictDefinitionCache()
        source = CountingSource(TABLE)
        DiscoveryRegistry(source, cache).get_handler("off")
        cache.clear()
        DiscoveryRegistry(source, cache).get_handler("off")
        assert source.calls == 2

    def test_custom_cache_key(self) -> None:
        cache = DictDefinitionCache()
        DiscoveryRegistry(CountingSource(TABLE), cache, cache_key="other").get_handler("off")
        assert cache.get(CACHE_KEY) is MISS
        assert cache.get("other") is not MISS

    def test_reset_reloads_from_cache(self) -> None:
        cache = DictDefinitionCache()
        source = CountingSource(TABLE)
        registry = DiscoveryRegistry(source, cache)
        first = registry.get_handler("off")
        registry.reset()
        assert registry.get_handler("off") is not first
        assert source.calls == 1

    def test_container_protocol(self) -> None:
        registry = DiscoveryRegistry(CountingSource(TABLE))
        assert "off" in registry
        assert len(registry) == 2
        assert registry.names == frozenset({"off", "name"})
        assert isinstance(registry, Registry)
