"""Registry protocol shared by the static and discovery-backed registries."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from squaretag.definitions import Definition, Handler


@runtime_checkable
class Registry(Protocol):
    """Source of handlers for the processor.

    Implementations memoize handlers: asking twice for the same tag
    returns the same Handler instance.
    """

    def get_handler(self, tag: str) -> Handler | None:
        """Return the active handler for ``tag``, or None if it is not declared."""
        ...

    def get_definitions(self) -> Iterator[Definition]:
        """Iterate over every definition, shadowed duplicates included."""
        ...
