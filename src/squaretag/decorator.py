"""@shortcode decorator for declaring shortcodes next to their callback.

Example:
    >>> @shortcode("upper", component="textutils", wraps=True)
    ... def upper(tag, attributes, content, environment, recurse):
    ...     return recurse(content).upper()
    >>> upper.tag, upper.wraps
    ('upper', True)
    >>> registry = RegistryBuilder().register(upper).build()
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from squaretag.definitions import Definition, definition_from_data

if TYPE_CHECKING:
    from squaretag.definitions import ShortcodeCallback


def shortcode(
    tag: str,
    *,
    component: str,
    wraps: bool = False,
    description: str | None = None,
) -> Callable[["ShortcodeCallback"], Definition]:
    """Decorator turning a callback into a Definition.

    The decorated name is bound to the Definition; the original function
    stays reachable as ``definition.callback``. Declarations go through
    definition_from_data, so strict mode validates them at import time.

    Args:
        tag: Tag name
        component: Owning component
        wraps: Whether the tag encloses content up to ``[/tag]``
        description: Optional description reference
    """

    def decorator(func: "ShortcodeCallback") -> Definition:
        data = {"callback": func, "component": component, "wraps": wraps}
        if description is not None:
            data["description"] = description
        return definition_from_data(tag, data)

    return decorator


__all__ = [
    "shortcode",
]
