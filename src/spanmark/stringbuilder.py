"""StringBuilder for O(n) string accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation.

Unlike a plain list of parts, the builder also tracks the number of
characters appended so far. The matcher reads that running length to
place span boundaries directly in output coordinates.

Thread Safety:
StringBuilder instances are local to each match_spans() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator with a running character count.

    Usage:
            >>> sb = StringBuilder()
            >>> sb = sb.append("Hello, ").append("world")
            >>> sb.length
            12
            >>> sb.build()
            'Hello, world'

    Thread Safety:
        Instance is local to each match_spans() call.
        No shared mutable state.

    """

    __slots__ = ("_length", "_parts")

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []
        self._length = 0

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
            self._length += len(s)
        return self

    @property
    def length(self) -> int:
        """Total number of characters appended so far."""
        return self._length

    def build(self) -> str:
        """Join all parts into final string.

        Returns:
            Concatenated string of all appended parts
        """
        return "".join(self._parts)
