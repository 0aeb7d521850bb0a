"""Text offset utilities for Spanmark.

Spanmark reports offsets in code points, which is how Python indexes ``str``.
Platform attributed strings (Cocoa, Java, JavaScript DOM ranges) index by
UTF-16 code units instead; these helpers translate between the two.

Example:
    >>> from spanmark.utils.text import utf16_offsets
    >>> utf16_offsets("a😀b")
    [0, 1, 3, 4]
"""

from __future__ import annotations


def utf16_width(char: str) -> int:
    """Number of UTF-16 code units needed to encode a single code point."""
    return 2 if ord(char) > 0xFFFF else 1


def utf16_len(text: str) -> int:
    """Length of text in UTF-16 code units.

    Examples:
        >>> utf16_len("abc")
        3
        >>> utf16_len("😀")
        2
    """
    return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)


def utf16_offsets(text: str) -> list[int]:
    """Map every code point boundary of text to its UTF-16 offset.

    The returned list has ``len(text) + 1`` entries, so both the start and
    the exclusive end of any half-open range can be looked up directly.

    Args:
        text: Text to index

    Returns:
        List where ``result[i]`` is the UTF-16 offset of code point ``i``
    """
    offsets = [0] * (len(text) + 1)
    position = 0
    for index, char in enumerate(text):
        offsets[index] = position
        position += utf16_width(char)
    offsets[len(text)] = position
    return offsets
