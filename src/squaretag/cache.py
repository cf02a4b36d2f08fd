"""Key-value caches for discovered definitions.

DiscoveryRegistry stores the full list of discovered definitions under a
single key, so later registries can skip discovery. A miss is signalled by
the MISS sentinel, which is distinct from a cached empty list.

Expiry belongs to the cache: DictDefinitionCache never expires,
TTLDefinitionCache drops entries older than its ttl.

Thread Safety:
    Neither cache is thread-safe. Wrap get/set with a lock when sharing
    one between threads.

Example:
    >>> cache = DictDefinitionCache()
    >>> cache.get("definitions") is MISS
    True
    >>> cache.set("definitions", [])
    >>> cache.get("definitions")
    []
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, Final, Protocol


class _Miss:
    """Type of the MISS sentinel."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISS"

    def __bool__(self) -> bool:
        return False


MISS: Final = _Miss()


class DefinitionCache(Protocol):
    """Protocol for definition caches."""

    def get(self, key: str) -> Any:
        """Return the cached value, or MISS."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value."""
        ...


class DictDefinitionCache:
    """In-memory cache using a dict. Entries never expire."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def get(self, key: str) -> Any:
        """Return the cached value, or MISS."""
        return self._data.get(key, MISS)

    def set(self, key: str, value: Any) -> None:
        """Store a value."""
        self._data[key] = value

    def delete(self, key: str) -> None:
        """Drop a value if present."""
        self._data.pop(key, None)

    def clear(self) -> None:
        """Drop every value."""
        self._data.clear()


class TTLDefinitionCache:
    """In-memory cache whose entries expire ``ttl`` seconds after being set."""

    __slots__ = ("_clock", "_data", "ttl")

    def __init__(self, ttl: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the cache.

        Args:
            ttl: Seconds an entry stays valid
            clock: Time source, monotonic by default
        """
        if ttl <= 0:
            msg = f"ttl must be positive, got {ttl}"
            raise ValueError(msg)
        self.ttl = ttl
        self._clock = clock
        self._data: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any:
        """Return the cached value, or MISS when absent or expired."""
        entry = self._data.get(key)
        if entry is None:
            return MISS
        expires, value = entry
        if self._clock() >= expires:
            del self._data[key]
            return MISS
        return value

    def set(self, key: str, value: Any) -> None:
        """Store a value, valid for ``ttl`` seconds from now."""
        self._data[key] = (self._clock() + self.ttl, value)

    def delete(self, key: str) -> None:
        """Drop a value if present."""
        self._data.pop(key, None)


__all__ = [
    "MISS",
    "DefinitionCache",
    "DictDefinitionCache",
    "TTLDefinitionCache",
]
