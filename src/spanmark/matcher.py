"""Span matching for Spanmark.

Implements the delimiter stack scan: one left-to-right pass that pairs
openers with closers, strips every delimiter, and places span boundaries
directly in final-text coordinates.

Matching rules:
- A symbol that is not open pushes a new opener.
- A symbol that is open and on top of the stack closes it and emits a span.
- A symbol that is open but buried under a different opener is dropped.
  Only the top of the stack may close, so spans always nest.
- Openers still on the stack at the end produce no span.

Delimiters are removed from the output whether or not they matched. Because
boundaries are read from the running length of the output buffer, every
offset already accounts for the delimiters removed before it.

Thread Safety:
ScanState instances are single-use per match_spans() call.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from spanmark.escaper import EscapedText
from spanmark.rules import RuleSet
from spanmark.spans import StyledText, StyleSpan
from spanmark.stringbuilder import StringBuilder
from spanmark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class OpenDelimiter:
    """An opener waiting for its closer.

    Attributes:
        symbol: Delimiter symbol
        position: Index of the opener in the escaped text
        offset: Offset in the final text where the span would start

    """

    symbol: str
    position: int
    offset: int


@dataclass(slots=True)
class ScanState:
    """Mutable state of one scan.

    Usage:
        state = ScanState()
        state.open("$", position=8, offset=8)
        if state.is_top("$"):
            opener = state.close()

    Complexity:
        - open(), close(), is_open(), is_top(): O(1)

    """

    open_stack: list[OpenDelimiter] = field(default_factory=list)
    open_symbols: set[str] = field(default_factory=set)
    spans: list[StyleSpan] = field(default_factory=list)
    dropped: int = 0

    def is_open(self, symbol: str) -> bool:
        return symbol in self.open_symbols

    def is_top(self, symbol: str) -> bool:
        return bool(self.open_stack) and self.open_stack[-1].symbol == symbol

    def open(self, symbol: str, position: int, offset: int) -> None:
        self.open_stack.append(OpenDelimiter(symbol, position, offset))
        self.open_symbols.add(symbol)

    def close(self) -> OpenDelimiter:
        opener = self.open_stack.pop()
        self.open_symbols.discard(opener.symbol)
        return opener


def match_spans(escaped: EscapedText, rules: RuleSet) -> StyledText:
    """Pair delimiters, strip them, and compute final-text spans.

    Args:
        escaped: Output of escape(); literal positions are copied verbatim
        rules: Validated delimiter rules

    Returns:
        StyledText with spans in closing order (innermost first)
    """
    text = escaped.text
    literal = escaped.literal
    state = ScanState()
    out = StringBuilder()

    if not rules:
        return StyledText(text)

    run_start = 0
    for position, char in enumerate(text):
        rule = rules.get(char)
        if rule is None or position in literal:
            continue

        # Flush the plain run preceding this delimiter
        out.append(text[run_start:position])
        run_start = position + 1

        if not state.is_open(char):
            state.open(char, position, out.length)
        elif state.is_top(char):
            opener = state.close()
            state.spans.append(StyleSpan(opener.offset, out.length, rule.style, char))
        else:
            state.dropped += 1
            logger.debug(
                "Dropped closer %r at %d: %r is still open",
                char,
                position,
                state.open_stack[-1].symbol,
            )

    out.append(text[run_start:])

    if state.open_stack:
        logger.debug(
            "Unmatched openers stripped without style: %s",
            ", ".join(f"{o.symbol!r}@{o.position}" for o in state.open_stack),
        )
    if state.dropped or state.open_stack:
        logger.debug(
            "Scan finished: %d spans, %d dropped closers, %d unmatched openers",
            len(state.spans),
            state.dropped,
            len(state.open_stack),
        )

    return StyledText(out.build(), tuple(state.spans))


__all__ = [
    "OpenDelimiter",
    "ScanState",
    "match_spans",
]
