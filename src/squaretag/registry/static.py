"""In-memory shortcode registry.

Definitions are grouped by tag in insertion order. Several components may
declare the same tag: the first one registered is active, the others stay
visible through get_definitions().

Thread Safety:
StaticRegistry memoizes handlers without locking. Share a registry between
threads only once every tag in use has been resolved, or give each thread
its own instance.

Example:
    >>> builder = RegistryBuilder()
    >>> builder.register_data("fullname", {"callback": fullname, "component": "profile"})
    >>> registry = builder.build()
    >>> registry.get_handler("fullname").wraps
    False
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from itertools import chain
from typing import Any

from squaretag.definitions import (
    Definition,
    Handler,
    definition_from_data,
    handler_from_definition,
)


class StaticRegistry:
    """Registry over a fixed list of definitions."""

    __slots__ = ("_by_tag", "_handlers")

    def __init__(self, definitions: Iterable[Definition]) -> None:
        """Group definitions by tag, keeping their order."""
        self._by_tag: dict[str, list[Definition]] = {}
        self._handlers: dict[str, Handler | None] = {}
        for definition in definitions:
            self._by_tag.setdefault(definition.tag, []).append(definition)

    def get_handler(self, tag: str) -> Handler | None:
        """Get the handler of the first definition registered for ``tag``.

        Args:
            tag: Tag name (e.g., "fullname")

        Returns:
            Memoized handler, None if no definition uses the tag
        """
        try:
            return self._handlers[tag]
        except KeyError:
            pass

        handler = None
        definitions = self._by_tag.get(tag)
        if definitions:
            handler = handler_from_definition(definitions[0])
        self._handlers[tag] = handler
        return handler

    def get_definitions(self) -> Iterator[Definition]:
        """Iterate over all definitions, grouped by tag in insertion order."""
        return chain.from_iterable(self._by_tag.values())

    @property
    def names(self) -> frozenset[str]:
        """Get all declared tag names."""
        return frozenset(self._by_tag)

    def __contains__(self, tag: str) -> bool:
        """Support 'tag in registry' syntax."""
        return tag in self._by_tag

    def __iter__(self) -> Iterator[Definition]:
        return self.get_definitions()

    def __len__(self) -> int:
        """Number of declared tag names."""
        return len(self._by_tag)


class RegistryBuilder:
    """Mutable builder for StaticRegistry.

    Use this to register definitions, then call build() to create
    a registry.

    Example:
        >>> builder = RegistryBuilder()
        >>> builder.register(off_definition)
        >>> registry = builder.build()
    """

    __slots__ = ("_definitions",)

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._definitions: list[Definition] = []

    def register(self, definition: Definition) -> RegistryBuilder:
        """Register a definition.

        Duplicated tags are allowed; the first registration wins lookups.

        Returns:
            Self for chaining

        Raises:
            TypeError: If ``definition`` is not a Definition
        """
        if not isinstance(definition, Definition):
            msg = f"Expected a Definition, got {type(definition).__name__}"
            raise TypeError(msg)
        self._definitions.append(definition)
        return self

    def register_all(self, definitions: Iterable[Definition]) -> RegistryBuilder:
        """Register multiple definitions.

        Returns:
            Self for chaining
        """
        for definition in definitions:
            self.register(definition)
        return self

    def register_data(self, tag: str, data: Mapping[str, Any]) -> RegistryBuilder:
        """Build a definition from declaration data and register it.

        Returns:
            Self for chaining
        """
        return self.register(definition_from_data(tag, data))

    def build(self) -> StaticRegistry:
        """Build a registry from the registered definitions."""
        return StaticRegistry(self._definitions)

    def __len__(self) -> int:
        """Number of registered definitions."""
        return len(self._definitions)
