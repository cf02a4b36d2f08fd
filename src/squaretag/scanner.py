"""Tag scanner and expander.

Walks a text once, finds ``[tag ...]`` and ``[tag ...]content[/tag]``
occurrences, and replaces the ones the lookup function knows about with
the output of their content processor.

Rules:
    - Tag names are read from the characters ``a-z``, ``0-9`` and ``[``.
    - Unknown tags, tags that never close and wrapping tags without their
      ``[/tag]`` closer are left untouched.
    - Replacement text is not scanned again. Nested tags are expanded by
      handlers that explicitly recurse into their own content.
    - When no ``]`` exists after a ``[`` nothing further can close, so the
      rest of the text is returned as is.

The text is never mutated: the scanner keeps a cursor over the input and
splices replacements into a SpliceBuffer over it. Every search
happens in the part of the input that has not been consumed yet, so offsets
there are those of the original text and no bound needs shifting after a
replacement.

Example:
    >>> info = TagInfo(wraps=True, content_processor=lambda attrs, content: content.upper())
    >>> expand_tags("[a]hi[/a]", lambda tag: info if tag == "a" else None)
    'HI'
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from squaretag.attributes import AttributeMap, parse_attributes
from squaretag.buffer import SpliceBuffer
from squaretag.utils.logger import get_logger

logger = get_logger(__name__)

ContentProcessor: TypeAlias = Callable[[AttributeMap, str | None], str]

_TAG_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789[")


@dataclass(frozen=True, slots=True)
class TagInfo:
    """What the scanner needs to know about a handled tag.

    Attributes:
        wraps: Whether the tag encloses content up to a ``[/tag]`` closer.
        content_processor: Called with the parsed attributes and the
            wrapped content (None for self-closing tags); returns the
            replacement text.
    """

    wraps: bool
    content_processor: ContentProcessor


Lookup: TypeAlias = Callable[[str], TagInfo | None]


def expand_tags(text: str, lookup: Lookup) -> str:
    """Replace the tags known to ``lookup`` in ``text``.

    Args:
        text: Text to scan
        lookup: Returns a TagInfo for tag names that should be handled,
            None for anything else

    Returns:
        The text with every handled tag replaced.
    """
    buf = SpliceBuffer(text)
    pos = 0
    end = len(text)

    while (start := text.find("[", pos)) != -1:
        last_close = text.rfind("]", start)
        if last_close == -1:
            # No tag can close from here on
            break

        pos = start + 1
        name_end = pos
        while name_end < end and text[name_end] in _TAG_CHARS:
            name_end += 1

        tag = text[pos:name_end]
        info = lookup(tag) if tag else None
        if info is None:
            continue

        pos = name_end
        if last_close < pos:
            continue

        closed = False
        in_quote = False
        while pos <= last_close:
            char = text[pos]
            if char == '"':
                in_quote = text[pos - 1] == "\\" if in_quote else True
            if not in_quote and char == "]":
                closed = True
                break
            pos += 1

        if not closed:
            logger.debug("Unterminated tag [%s at offset %d, leaving the rest as is", tag, start)
            break

        raw_attrs = text[name_end:pos]
        pos += 1

        content: str | None = None
        if info.wraps:
            closer = f"[/{tag}]"
            closing = text.find(closer, pos)
            if closing == -1:
                logger.debug("No %s found for tag at offset %d, skipping it", closer, start)
                continue
            content = text[pos:closing]
            pos = closing + len(closer)

        replacement = info.content_processor(parse_attributes(raw_attrs), content)
        buf.splice(start, pos, replacement)

    return buf.build()


__all__ = [
    "ContentProcessor",
    "Lookup",
    "TagInfo",
    "expand_tags",
]
