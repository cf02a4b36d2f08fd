"""
squaretag: bracket shortcodes for Python

Expands ``[tag attr="value"]`` and ``[tag]content[/tag]`` shortcodes in
arbitrary text with content produced by registered callbacks. Handlers can
expand the shortcodes of their own content, so tags nest.

Quick Start:
    >>> from squaretag import Shortcodes, create_registry_with_defaults, shortcode
    >>>
    >>> @shortcode("upper", component="demo", wraps=True)
    ... def upper(tag, attributes, content, environment, recurse):
    ...     return recurse(content).upper()
    >>>
    >>> registry = create_registry_with_defaults().register(upper).build()
    >>> shortcodes = Shortcodes(registry=registry)
    >>> shortcodes("Hi [upper]there [off][upper][/off][/upper]!")
    'Hi THERE [UPPER]!'

Low-level API:
    >>> from squaretag import TagInfo, expand
    >>> info = TagInfo(wraps=False, content_processor=lambda attrs, content: attrs.get("text", "banana"))
    >>> expand("a [dolor] b", lambda tag: info if tag == "dolor" else None)
    'a banana b'

Installation:
    pip install squaretag            # zero dependencies
"""

from typing import Any

from squaretag.attributes import AttributeMap, parse_attributes
from squaretag.builtins import create_default_registry, create_registry_with_defaults
from squaretag.cache import MISS, DefinitionCache, DictDefinitionCache, TTLDefinitionCache
from squaretag.config import (
    ProcessConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from squaretag.decorator import shortcode
from squaretag.definitions import (
    Definition,
    Handler,
    definition_from_data,
    handler_from_definition,
)
from squaretag.environment import Environment, make_environment
from squaretag.errors import (
    DefinitionError,
    ProcessorStateError,
    RecursionLimitError,
    SquaretagError,
)
from squaretag.processor import Processor
from squaretag.registry import DiscoveryRegistry, Registry, RegistryBuilder, StaticRegistry
from squaretag.scanner import Lookup, TagInfo, expand_tags
from squaretag.sources import (
    ChainSource,
    DefinitionSource,
    EntryPointSource,
    MappingSource,
    ModuleSource,
)

__version__ = "0.1.0"


def expand(text: str, lookup: Lookup) -> str:
    """Replace the tags known to ``lookup`` in ``text``.

    Args:
        text: Text to scan
        lookup: Returns a TagInfo for handled tag names, None otherwise

    Returns:
        The expanded text. Unknown and malformed tags are left as they are.
    """
    return expand_tags(text, lookup)


class Shortcodes:
    """High-level shortcode filter.

    Owns one Processor over a registry. The built-in shortcodes are used
    when no registry is given.

    Usage:
        >>> shortcodes = Shortcodes()
        >>> shortcodes("Hello [fullname]!", make_environment(user=current_user))
        'Hello Ada Lovelace!'

    Thread Safety:
        Not thread-safe, like the processor it wraps. Use one instance per
        thread.

    """

    __slots__ = ("_processor",)

    def __init__(self, *, registry: Registry | None = None) -> None:
        self._processor = Processor(registry if registry is not None else create_default_registry())

    @property
    def registry(self) -> Registry:
        return self._processor.registry

    def __call__(self, text: str, environment: Any = None) -> str:
        """Expand the shortcodes of ``text``.

        Args:
            text: Text to expand
            environment: Environment of the call; a default one is made
                when omitted

        Returns:
            The expanded text
        """
        if environment is None:
            environment = make_environment()
        return self._processor.run(text, environment)


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "expand",
    "parse_attributes",
    "Shortcodes",
    # Scanner
    "AttributeMap",
    "Lookup",
    "TagInfo",
    "expand_tags",
    # Definitions
    "Definition",
    "Handler",
    "definition_from_data",
    "handler_from_definition",
    "shortcode",
    # Registries
    "Registry",
    "RegistryBuilder",
    "StaticRegistry",
    "DiscoveryRegistry",
    "create_default_registry",
    "create_registry_with_defaults",
    # Sources
    "DefinitionSource",
    "ChainSource",
    "EntryPointSource",
    "MappingSource",
    "ModuleSource",
    # Cache
    "MISS",
    "DefinitionCache",
    "DictDefinitionCache",
    "TTLDefinitionCache",
    # Processing
    "Processor",
    "Environment",
    "make_environment",
    # Configuration (ContextVar-based)
    "ProcessConfig",
    "get_config",
    "set_config",
    "reset_config",
    "config_context",
    # Errors
    "SquaretagError",
    "DefinitionError",
    "ProcessorStateError",
    "RecursionLimitError",
]
