"""Registry backed by a definition source and a cache.

The source is queried at most once per registry instance, on first use.
The resulting definitions are stored in the cache under a fixed key, so
other registries sharing the cache reuse them for as long as the cache
keeps the entry.

Example:
    >>> cache = DictDefinitionCache()
    >>> registry = DiscoveryRegistry(ModuleSource("myapp.shortcodes"), cache=cache)
    >>> registry.get_handler("fullname")  # discovery happens here
    >>> DiscoveryRegistry(ModuleSource("myapp.shortcodes"), cache=cache)  # reuses cache
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from squaretag.cache import MISS, DefinitionCache, DictDefinitionCache
from squaretag.definitions import Definition, Handler, definition_from_data
from squaretag.registry.static import StaticRegistry
from squaretag.utils.logger import get_logger

if TYPE_CHECKING:
    from squaretag.sources import DefinitionSource

logger = get_logger(__name__)

CACHE_KEY = "definitions"


class DiscoveryRegistry:
    """Registry discovering its definitions lazily."""

    __slots__ = ("_cache", "_cache_key", "_registry", "_source")

    def __init__(
        self,
        source: DefinitionSource,
        cache: DefinitionCache | None = None,
        *,
        cache_key: str = CACHE_KEY,
    ) -> None:
        """Initialize the registry. Nothing is discovered yet.

        Args:
            source: Where declarations come from
            cache: Cache shared with other registries; a private in-memory
                cache is used when omitted
            cache_key: Key the definitions list is stored under
        """
        self._source = source
        self._cache = cache if cache is not None else DictDefinitionCache()
        self._cache_key = cache_key
        self._registry: StaticRegistry | None = None

    def get_handler(self, tag: str) -> Handler | None:
        """Get the active handler for ``tag``, discovering definitions if needed."""
        return self._load().get_handler(tag)

    def get_definitions(self) -> Iterator[Definition]:
        """Iterate over all discovered definitions."""
        return self._load().get_definitions()

    def reset(self) -> None:
        """Forget what this instance loaded. The cache is left alone."""
        self._registry = None

    def _fetch_definitions(self) -> list[Definition]:
        definitions = [definition_from_data(tag, data) for tag, data in self._source.fetch()]
        logger.debug("Discovered %d shortcode definitions", len(definitions))
        return definitions

    def _load(self) -> StaticRegistry:
        if self._registry is None:
            definitions = self._cache.get(self._cache_key)
            if definitions is MISS:
                definitions = self._fetch_definitions()
                self._cache.set(self._cache_key, definitions)
            else:
                logger.debug("Using %d cached shortcode definitions", len(definitions))
            self._registry = StaticRegistry(definitions)
        return self._registry

    @property
    def names(self) -> frozenset[str]:
        """Get all declared tag names."""
        return self._load().names

    def __contains__(self, tag: str) -> bool:
        return tag in self._load()

    def __iter__(self) -> Iterator[Definition]:
        return self.get_definitions()

    def __len__(self) -> int:
        return len(self._load())
