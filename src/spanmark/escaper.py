"""Escape handling for delimiter symbols.

An escape character immediately followed by a delimiter symbol makes that
symbol literal text. escape() resolves such pairs before the scan: the
escape character is dropped, the symbol is kept, and its position is
recorded out of band so the matcher never mistakes it for a delimiter.
Input text containing brace placeholders is therefore never misread.

The textual ``{<symbol>}`` placeholder form is still available through
to_placeholders() and from_placeholders() for callers that persist
pre-escaped text.

Thread Safety:
All functions are pure. Safe to call from any thread.

"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from spanmark.rules import DEFAULT_ESCAPE_CHAR


class EscapedText(NamedTuple):
    """Text with escape sequences resolved.

    Attributes:
        text: Input with every escape character that preceded a delimiter
            symbol removed
        literal: Indices into ``text`` of symbols that were escaped

    """

    text: str
    literal: frozenset[int]

    def is_literal(self, index: int) -> bool:
        """Check whether the character at index was escaped."""
        return index in self.literal


def escape(
    text: str,
    symbols: Iterable[str],
    *,
    escape_char: str = DEFAULT_ESCAPE_CHAR,
) -> EscapedText:
    """Resolve escape sequences in text.

    Scans left to right. An escape character followed by one of ``symbols``
    is consumed and the symbol is marked literal. Any other escape character,
    including a trailing one, is left untouched.

    Args:
        text: Raw input text
        symbols: Active delimiter symbols
        escape_char: Escape character

    Returns:
        EscapedText with literal positions recorded

    Example:
        >>> escaped = escape("\\\\$5 or $red$", {"$"})
        >>> escaped.text
        '$5 or $red$'
        >>> sorted(escaped.literal)
        [0]
    """
    active = frozenset(symbols)
    if escape_char not in text or not active:
        return EscapedText(text, frozenset())

    chars: list[str] = []
    literal: set[int] = set()
    i = 0
    n = len(text)
    while i < n:
        char = text[i]
        if char == escape_char and i + 1 < n and text[i + 1] in active:
            literal.add(len(chars))
            chars.append(text[i + 1])
            i += 2
            continue
        chars.append(char)
        i += 1

    return EscapedText("".join(chars), frozenset(literal))


def placeholder(symbol: str) -> str:
    """Textual placeholder for an escaped symbol."""
    return f"{{{symbol}}}"


def to_placeholders(
    text: str,
    symbols: Iterable[str],
    *,
    escape_char: str = DEFAULT_ESCAPE_CHAR,
) -> str:
    """Rewrite every escaped symbol as its ``{<symbol>}`` placeholder.

    The result contains no escape sequences for the given symbols. Literal
    placeholders already present in text are indistinguishable from
    rewritten ones.

    Example:
        >>> to_placeholders("costs \\\\$5", {"$"})
        'costs {$}5'
    """
    for symbol in symbols:
        text = text.replace(escape_char + symbol, placeholder(symbol))
    return text


def from_placeholders(text: str, symbols: Iterable[str]) -> str:
    """Restore ``{<symbol>}`` placeholders to bare symbols.

    Example:
        >>> from_placeholders("costs {$}5", {"$"})
        'costs $5'
    """
    for symbol in symbols:
        text = text.replace(placeholder(symbol), symbol)
    return text


__all__ = [
    "EscapedText",
    "escape",
    "from_placeholders",
    "placeholder",
    "to_placeholders",
]
