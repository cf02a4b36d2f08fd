"""Shortcode definitions and the handlers derived from them.

A definition is what a component declares: the tag, the callback that
produces its content, who owns it and whether it wraps content. A handler
is the runtime view the processor dispatches to.

Declaration data (the mapping a definition source yields per tag):

    {
        "callback": render_fullname,      # or "package.module:render_fullname"
        "component": "mod_profile",
        "description": "shortcode:fullname",
        "wraps": False,
    }

Validation only happens in strict mode (see squaretag.config). Production
trusts its declarations and skips the checks.
"""

from __future__ import annotations

import importlib
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from squaretag.attributes import AttributeMap
from squaretag.config import get_config
from squaretag.errors import DefinitionError
from squaretag.utils.logger import get_logger

logger = get_logger(__name__)

_TAG_NAME_RE = re.compile(r"[A-Za-z0-9]+")

Recurse: TypeAlias = Callable[[str], str]


class ShortcodeCallback(Protocol):
    """Signature of the function producing a shortcode's content."""

    def __call__(
        self,
        tag: str,
        attributes: AttributeMap,
        content: str | None,
        environment: Any,
        recurse: Recurse,
    ) -> str:
        """Return the replacement text for one tag occurrence.

        Args:
            tag: Tag name, so one callback can serve several tags
            attributes: Parsed attributes of the tag
            content: Wrapped content, None for self-closing tags
            environment: Environment of the current process call
            recurse: Expands the tags found in a piece of text
        """
        ...


@dataclass(frozen=True, slots=True)
class Definition:
    """A declared shortcode.

    Attributes:
        tag: Tag name, alphanumeric. Only lowercase names can be matched.
        callback: Content producer, or an import reference "module:attr"
            resolved when the handler is built.
        component: Owner of the shortcode.
        description: Optional reference to a human-readable description.
        wraps: Whether the tag encloses content up to ``[/tag]``.
    """

    tag: str
    callback: ShortcodeCallback | str
    component: str
    description: str | None = None
    wraps: bool = False


@dataclass(frozen=True, slots=True)
class Handler:
    """Runtime view of a definition."""

    wraps: bool
    callback: ShortcodeCallback

    def invoke(
        self,
        tag: str,
        attributes: AttributeMap,
        content: str | None,
        environment: Any,
        recurse: Recurse,
    ) -> str:
        """Forward one tag occurrence to the callback."""
        return self.callback(tag, attributes, content, environment, recurse)


def resolve_callback(reference: str) -> Callable[..., str]:
    """Import the object named by a "module:attr" reference.

    A reference without a colon is split on its last dot instead.

    Raises:
        ImportError: If the module cannot be imported
        AttributeError: If the module has no such attribute
    """
    if ":" in reference:
        module_name, _, attr_path = reference.partition(":")
    else:
        module_name, _, attr_path = reference.rpartition(".")
    if not module_name or not attr_path:
        msg = f"Invalid callback reference {reference!r}"
        raise ImportError(msg)

    target: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        target = getattr(target, attr)
    return target


def definition_from_data(tag: str, data: Mapping[str, Any]) -> Definition:
    """Create a definition from declaration data.

    Args:
        tag: The tag name
        data: Declaration mapping with ``callback`` and ``component``, and
            optionally ``description`` and ``wraps``

    Returns:
        Immutable Definition

    Raises:
        DefinitionError: In strict mode, when the declaration is invalid
    """
    config = get_config()
    description = data.get("description")

    if config.strict:
        _validate(tag, data)

    if description is not None and config.string_resolver is not None:
        if not config.string_resolver(description, data.get("component")):
            if config.strict:
                raise DefinitionError(tag, f"description {description!r} does not resolve")
            logger.warning(
                "Description %r of shortcode '%s' does not resolve, dropping it",
                description,
                tag,
            )
            description = None

    return Definition(
        tag=tag,
        callback=data.get("callback"),
        component=data.get("component"),
        description=description,
        wraps=bool(data.get("wraps", False)),
    )


def _validate(tag: str, data: Mapping[str, Any]) -> None:
    if not _TAG_NAME_RE.fullmatch(tag):
        raise DefinitionError(tag, "tag names may only contain letters and digits")
    if tag != tag.lower():
        logger.warning("Shortcode '%s' has uppercase letters and will never be matched", tag)

    callback = data.get("callback")
    if callback is None:
        raise DefinitionError(tag, "the callback is missing")
    if isinstance(callback, str):
        try:
            callback = resolve_callback(callback)
        except (ImportError, AttributeError) as e:
            raise DefinitionError(tag, f"the callback {data['callback']!r} is invalid") from e
    if not callable(callback):
        raise DefinitionError(tag, "the callback is not callable")

    if not data.get("component"):
        raise DefinitionError(tag, "a shortcode must belong to a component")


def handler_from_definition(definition: Definition) -> Handler:
    """Build the handler for a definition.

    Import references are resolved here, the first time the tag is used.
    """
    callback = definition.callback
    if isinstance(callback, str):
        callback = resolve_callback(callback)
    return Handler(wraps=definition.wraps, callback=callback)


__all__ = [
    "Definition",
    "Handler",
    "Recurse",
    "ShortcodeCallback",
    "definition_from_data",
    "handler_from_definition",
    "resolve_callback",
]
