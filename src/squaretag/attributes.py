"""Attribute string tokenizer.

Turns the raw text between a tag name and its closing bracket into an
ordered mapping of attribute name to value.

Grammar:
    - Pairs are separated by spaces; runs of spaces count as one.
    - ``key=value`` sets a string value, a bare ``key`` is True.
    - Double quotes group text containing spaces or ``=``, for keys and
      values alike. ``\\"`` inside quotes is a literal quote.
    - An unterminated quote runs to the end of the text.

Example:
    >>> parse_attributes('id=2 "Oh my"=yes disabled')
    {'id': '2', 'Oh my': 'yes', 'disabled': True}
"""

from __future__ import annotations

from typing import TypeAlias

AttributeMap: TypeAlias = dict[str, str | bool]

_SPACE = " "
_EQUALS = "="
_QUOTE = '"'
_BACKSLASH = "\\"


def parse_attributes(text: str) -> AttributeMap:
    """Parse a string of attributes.

    Scans once, left to right, one code point at a time. Spaces around the
    equal sign are not allowed: ``a = b`` is three flags.

    Args:
        text: Raw attribute text, e.g. ``text="abc" flag``

    Returns:
        Attribute names mapped to their string value, or True when the
        attribute has no value. Order follows first appearance.
    """
    attrs: AttributeMap = {}
    key: list[str] = []
    value: list[str] = []
    in_key = True
    in_quote = False

    pos = 0
    end = len(text)
    while pos < end:
        char = text[pos]

        if not in_quote:
            if char == _SPACE:
                if key:
                    _flush(attrs, key, value)
                key = []
                value = []
                in_key = True
                pos += 1
                continue
            if char == _EQUALS and in_key and key:
                in_key = False
                pos += 1
                continue
            if char == _QUOTE:
                in_quote = True
                pos += 1
                continue
        else:
            if char == _QUOTE and pos and text[pos - 1] != _BACKSLASH:
                in_quote = False
                pos += 1
                continue
            if char == _BACKSLASH and text.startswith('\\"', pos):
                # Escaped quote: keep the quote, drop the backslash
                char = _QUOTE
                pos += 1

        if in_key:
            key.append(char)
        else:
            value.append(char)
        pos += 1

    if key:
        _flush(attrs, key, value)

    return attrs


def _flush(attrs: AttributeMap, key: list[str], value: list[str]) -> None:
    """Record the pending pair; an empty value means the flag form."""
    attrs["".join(key)] = "".join(value) if value else True


__all__ = [
    "AttributeMap",
    "parse_attributes",
]
