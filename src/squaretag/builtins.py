"""Shortcodes shipped with squaretag.

- ``[off]...[/off]``: outputs its content as is, tags inside stay unexpanded
- ``[firstname]``: first name of the current user
- ``[fullname]``: first and last name of the current user

The user is read from ``environment.user``, as an object with
``firstname`` and ``lastname`` attributes or a mapping with those keys.
Without a user both name shortcodes expand to an empty string.

The table below is also what ModuleSource("squaretag.builtins") discovers.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from squaretag.definitions import definition_from_data
from squaretag.registry.static import RegistryBuilder, StaticRegistry

if TYPE_CHECKING:
    from squaretag.attributes import AttributeMap
    from squaretag.definitions import Recurse

COMPONENT = "squaretag"


def render_off(
    tag: str,
    attributes: AttributeMap,
    content: str | None,
    environment: Any,
    recurse: Recurse,
) -> str:
    return content or ""


def _user_field(environment: Any, name: str) -> str:
    user = getattr(environment, "user", None)
    if user is None:
        return ""
    if isinstance(user, Mapping):
        value = user.get(name)
    else:
        value = getattr(user, name, None)
    return str(value) if value is not None else ""


def render_firstname(
    tag: str,
    attributes: AttributeMap,
    content: str | None,
    environment: Any,
    recurse: Recurse,
) -> str:
    return _user_field(environment, "firstname")


def render_fullname(
    tag: str,
    attributes: AttributeMap,
    content: str | None,
    environment: Any,
    recurse: Recurse,
) -> str:
    parts = (_user_field(environment, "firstname"), _user_field(environment, "lastname"))
    return " ".join(part for part in parts if part)


SHORTCODES = {
    "off": {
        "callback": render_off,
        "description": "shortcode:off",
        "wraps": True,
    },
    "firstname": {
        "callback": render_firstname,
        "description": "shortcode:firstname",
    },
    "fullname": {
        "callback": render_fullname,
        "description": "shortcode:fullname",
    },
}


def create_registry_with_defaults() -> RegistryBuilder:
    """Create a builder pre-populated with the built-in shortcodes.

    Use this to extend the defaults with your own definitions:

        >>> builder = create_registry_with_defaults()
        >>> builder.register(my_definition)
        >>> registry = builder.build()
    """
    builder = RegistryBuilder()
    for tag, data in SHORTCODES.items():
        builder.register_data(tag, {**data, "component": COMPONENT})
    return builder


# Cached singleton
_DEFAULT_REGISTRY: StaticRegistry | None = None


def create_default_registry() -> StaticRegistry:
    """Get the registry of built-in shortcodes (cached singleton)."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = create_registry_with_defaults().build()
    return _DEFAULT_REGISTRY


__all__ = [
    "COMPONENT",
    "SHORTCODES",
    "create_default_registry",
    "create_registry_with_defaults",
    "render_firstname",
    "render_fullname",
    "render_off",
]
