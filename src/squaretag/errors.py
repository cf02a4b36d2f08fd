"""Exception classes for squaretag.

Provides standardized exceptions for error handling throughout squaretag.
Malformed markup is never an error: unknown, unterminated or unmatched tags
are left in the text as they are.
"""

from __future__ import annotations


class SquaretagError(Exception):
    """Base exception for all squaretag errors.

    Subclass this for specific error categories.
    """

    pass


class DefinitionError(SquaretagError):
    """Invalid shortcode definition.

    Raised in strict mode when a definition has an invalid tag name,
    a missing or uncallable callback, no owning component, or a
    description that cannot be resolved.
    """

    def __init__(self, tag: str, message: str) -> None:
        """Initialize definition error.

        Args:
            tag: Tag name of the offending definition
            message: Description of the problem
        """
        self.tag = tag
        self.message = message
        super().__init__(f"Shortcode '{tag}': {message}")


class ProcessorStateError(SquaretagError):
    """Processor used in an invalid state.

    Raised when process() is called without an environment having been
    set for that call.
    """

    pass


class RecursionLimitError(SquaretagError):
    """Nested expansion went deeper than the configured limit."""

    def __init__(self, depth: int, limit: int) -> None:
        """Initialize recursion limit error.

        Args:
            depth: Depth that was about to be entered
            limit: Configured maximum depth
        """
        self.depth = depth
        self.limit = limit
        super().__init__(f"Shortcode nesting depth {depth} exceeds limit of {limit}")
