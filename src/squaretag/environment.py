"""Environment handed to shortcode callbacks.

The environment describes the request a text is expanded for: where the
text is displayed, who is looking at it, and how it was written. The
processor treats it as opaque. It passes the same environment to every
callback of one top-level call, and a copy to recursive calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

FORMAT_PLAIN = "plain"
FORMAT_HTML = "html"
FORMAT_MARKDOWN = "markdown"


@dataclass(slots=True)
class Environment:
    """Context of one expansion.

    Attributes:
        context: Host object the text belongs to (page, course, ...)
        noclean: Whether the host will skip cleaning the output
        original_format: Format the text was authored in
        user: Object describing the current user, if any
        options: Extra host options
    """

    context: Any = None
    noclean: bool = False
    original_format: str = FORMAT_PLAIN
    user: Any = None
    options: dict[str, Any] = field(default_factory=dict)


def make_environment(context: Any = None, **options: Any) -> Environment:
    """Create the environment for a filtering request.

    Keyword options matching Environment fields set those fields; any
    other option lands in ``Environment.options``.

    Example:
        >>> env = make_environment(page, noclean=True, trusted=True)
        >>> env.noclean, env.options
        (True, {'trusted': True})
    """
    known = {name: options.pop(name) for name in ("noclean", "original_format", "user") if name in options}
    return Environment(context=context, options=options, **known)


__all__ = [
    "FORMAT_HTML",
    "FORMAT_MARKDOWN",
    "FORMAT_PLAIN",
    "Environment",
    "make_environment",
]
