"""Definition sources for discovery-backed registries.

A source yields ``(tag, data)`` pairs where ``data`` is declaration data
as accepted by definition_from_data. Each pair carries its ``component``.

Components declare their shortcodes in a table mapping tags to data,
without the component key:

    SHORTCODES = {
        "fullname": {"callback": render_fullname, "description": "shortcode:fullname"},
        "off": {"callback": render_off, "wraps": True},
    }

Sources:
    - MappingSource: one declaration table, for one component
    - ModuleSource: tables found on importable modules
    - EntryPointSource: tables advertised by installed distributions
    - ChainSource: several sources, one after the other
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable, Iterator, Mapping
from importlib.metadata import entry_points
from typing import Any, Protocol, runtime_checkable

from squaretag.utils.logger import get_logger

logger = get_logger(__name__)

ENTRY_POINT_GROUP = "squaretag.shortcodes"
DECLARATION_ATTRIBUTE = "SHORTCODES"

DeclarationTable = Mapping[str, Mapping[str, Any]]


@runtime_checkable
class DefinitionSource(Protocol):
    """Protocol for anything that can list shortcode declarations."""

    def fetch(self) -> Iterable[tuple[str, Mapping[str, Any]]]:
        """Yield ``(tag, data)`` pairs."""
        ...


def _declarations(component: str, table: DeclarationTable) -> Iterator[tuple[str, dict[str, Any]]]:
    for tag, data in table.items():
        yield tag, {**data, "component": component}


class MappingSource:
    """Declarations of one component, given as a table."""

    __slots__ = ("component", "table")

    def __init__(self, component: str, table: DeclarationTable) -> None:
        self.component = component
        self.table = table

    def fetch(self) -> Iterator[tuple[str, dict[str, Any]]]:
        return _declarations(self.component, self.table)


class ModuleSource:
    """Declarations read from modules.

    Each module is imported and its declaration table read; the module
    name becomes the component. Modules without a table are skipped, as
    are modules that cannot be imported when ``skip_missing`` is set.
    """

    __slots__ = ("attribute", "modules", "skip_missing")

    def __init__(
        self,
        *modules: str,
        attribute: str = DECLARATION_ATTRIBUTE,
        skip_missing: bool = False,
    ) -> None:
        self.modules = modules
        self.attribute = attribute
        self.skip_missing = skip_missing

    def fetch(self) -> Iterator[tuple[str, dict[str, Any]]]:
        for name in self.modules:
            try:
                module = importlib.import_module(name)
            except ImportError:
                if not self.skip_missing:
                    raise
                logger.debug("Module %s not importable, skipping", name)
                continue

            table = getattr(module, self.attribute, None)
            if table is None:
                logger.debug("Module %s declares no shortcodes", name)
                continue
            yield from _declarations(name, table)


class EntryPointSource:
    """Declarations advertised by installed distributions.

    A distribution exposes its table under the entry point group, for
    instance in its pyproject.toml:

        [project.entry-points."squaretag.shortcodes"]
        mod_profile = "mod_profile.shortcodes:SHORTCODES"

    The entry point name becomes the component.
    """

    __slots__ = ("group",)

    def __init__(self, group: str = ENTRY_POINT_GROUP) -> None:
        self.group = group

    def fetch(self) -> Iterator[tuple[str, dict[str, Any]]]:
        for entry_point in entry_points(group=self.group):
            logger.debug("Loading shortcodes of %s from %s", entry_point.name, entry_point.value)
            yield from _declarations(entry_point.name, entry_point.load())


class ChainSource:
    """Several sources queried in order."""

    __slots__ = ("sources",)

    def __init__(self, *sources: DefinitionSource) -> None:
        self.sources = sources

    def fetch(self) -> Iterator[tuple[str, Mapping[str, Any]]]:
        for source in self.sources:
            yield from source.fetch()


__all__ = [
    "DECLARATION_ATTRIBUTE",
    "ENTRY_POINT_GROUP",
    "ChainSource",
    "DefinitionSource",
    "EntryPointSource",
    "MappingSource",
    "ModuleSource",
]
