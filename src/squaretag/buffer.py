"""Output buffer for splicing replacements into a source text.

The scanner never rebuilds the text after a replacement. It keeps the
source as it is and records what the output is made of: spans of the
source that stay, and replacement strings. Everything is joined once at
the end.

Thread Safety:
    Buffers are local to each expand call.
"""

from __future__ import annotations


class SpliceBuffer:
    """Accumulates the output of one expansion over ``source``.

    ``copied`` is the offset up to which the source has been consumed,
    either copied to the output or replaced.

    Usage:
        >>> buf = SpliceBuffer("Hello [x]!")
        >>> buf.splice(6, 9, "banana")
        >>> buf.build()
        'Hello banana!'
    """

    __slots__ = ("_parts", "copied", "source")

    def __init__(self, source: str) -> None:
        self.source = source
        self.copied = 0
        self._parts: list[str] = []

    def _append(self, s: str) -> None:
        if s:
            self._parts.append(s)

    def splice(self, start: int, end: int, replacement: str) -> None:
        """Replace ``source[start:end]`` with ``replacement``.

        The untouched source before ``start`` is copied first. Splices must
        come in source order and must not overlap.
        """
        self._append(self.source[self.copied:start])
        self._append(replacement)
        self.copied = end

    @property
    def spliced(self) -> bool:
        """Whether anything was replaced yet."""
        return self.copied > 0

    def build(self) -> str:
        """Return the source with every splice applied."""
        if not self.spliced:
            return self.source
        return "".join(self._parts) + self.source[self.copied:]
