"""Processor: expands the shortcodes of a registry in a text.

The processor glues the scanner to a registry. Every handled tag is
forwarded to its handler together with the environment of the call and a
``recurse`` function that expands the tags of another piece of text.

An environment must be set before every top-level process() call, and it
is cleared when the call returns:

    processor = Processor(registry)
    processor.set_environment(make_environment(page))
    html = processor.process(text)

    # Or scoped
    with processor.environment(make_environment(page)):
        html = processor.process(text)

    # Or in one go
    html = processor.run(text, make_environment(page))

Thread Safety:
    A processor holds the state of the call in progress. Do not share an
    instance between threads; create one processor per thread instead.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from squaretag.config import get_config
from squaretag.errors import ProcessorStateError, RecursionLimitError
from squaretag.scanner import Lookup, TagInfo, expand_tags
from squaretag.utils.logger import get_logger

if TYPE_CHECKING:
    from squaretag.attributes import AttributeMap
    from squaretag.definitions import Recurse
    from squaretag.registry.protocol import Registry

logger = get_logger(__name__)


class Processor:
    """Expands shortcodes using the handlers of a registry."""

    __slots__ = ("_depth", "_environment", "registry")

    def __init__(self, registry: Registry) -> None:
        self.registry = registry
        self._environment: Any = None
        self._depth = 0

    @property
    def current_environment(self) -> Any:
        """Environment the next process() call will use, None when unset."""
        return self._environment

    def set_environment(self, environment: Any) -> None:
        """Set the environment of the next process() call.

        Must be called before every call, the environment is cleared once
        process() returns.
        """
        if environment is None:
            msg = "The environment cannot be None"
            raise ProcessorStateError(msg)
        self._environment = environment

    @contextmanager
    def environment(self, environment: Any) -> Iterator[Processor]:
        """Set the environment for the duration of a block.

        The environment is cleared on exit, even when the block raises.
        """
        self.set_environment(environment)
        try:
            yield self
        finally:
            self._environment = None

    def process(self, text: str) -> str:
        """Expand the shortcodes found in ``text``.

        Args:
            text: Text to expand

        Returns:
            The expanded text

        Raises:
            ProcessorStateError: If no environment was set for this call
        """
        if self._environment is None:
            msg = "The environment must be set before each process call"
            raise ProcessorStateError(msg)

        environment = self._environment
        try:
            return expand_tags(text, self._make_lookup(environment))
        finally:
            self._environment = None

    def run(self, text: str, environment: Any) -> str:
        """Set the environment and process ``text`` in one call."""
        self.set_environment(environment)
        return self.process(text)

    def _make_lookup(self, environment: Any) -> Lookup:
        recurse = self._make_recurse(environment)

        def lookup(tag: str) -> TagInfo | None:
            handler = self.registry.get_handler(tag)
            if handler is None:
                return None

            def content_processor(attributes: AttributeMap, content: str | None) -> str:
                return handler.invoke(tag, attributes, content, environment, recurse)

            return TagInfo(wraps=handler.wraps, content_processor=content_processor)

        return lookup

    def _make_recurse(self, environment: Any) -> Recurse:
        def recurse(text: str) -> str:
            config = get_config()
            depth = self._depth + 1
            if config.max_depth is not None and depth > config.max_depth:
                if config.strict:
                    raise RecursionLimitError(depth, config.max_depth)
                logger.warning(
                    "Shortcode nesting depth %d exceeds limit of %d, leaving content unexpanded",
                    depth,
                    config.max_depth,
                )
                return text

            self._environment = copy.copy(environment)
            self._depth = depth
            try:
                return self.process(text)
            finally:
                self._depth -= 1
                # The nested call cleared the environment on its way out
                self._environment = environment

        return recurse


__all__ = [
    "Processor",
]
