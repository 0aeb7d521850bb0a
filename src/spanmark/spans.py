"""Styled output values for Spanmark.

StyledText is what every entry point returns: the plain text with all
delimiters removed, and the spans that carry styles over it. Both types are
frozen and framework-neutral. Translating a StyledText into a platform
attributed string or rich-text model is left to the caller; segments()
gives the flat run structure most such models want.

Thread Safety:
All values are frozen and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from spanmark.utils.text import utf16_len, utf16_offsets


@dataclass(frozen=True, slots=True)
class StyleSpan:
    """A styled half-open range ``[start, end)`` over the final text.

    Attributes:
        start: First covered offset
        end: Offset just past the last covered character
        style: Payload of the rule that produced the span
        symbol: Delimiter symbol of that rule

    """

    start: int
    end: int
    style: Any
    symbol: str = ""

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, other: StyleSpan) -> bool:
        """True if other lies entirely inside this span."""
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: StyleSpan) -> bool:
        """True if the two spans share at least one character."""
        return self.start < other.end and other.start < self.end

    def covers(self, index: int) -> bool:
        return self.start <= index < self.end


def document_order_key(span: StyleSpan) -> tuple[int, int]:
    """Sort key: start ascending, then end descending (outer before inner)."""
    return (span.start, -span.end)


@dataclass(frozen=True, slots=True)
class Segment:
    """Run of text between two consecutive span boundaries.

    Abutting spans with equal styles stay separate segments, one per span.

    Attributes:
        start: Offset of the run in the final text
        text: Characters of the run
        styles: Styles covering the run, outermost first

    """

    start: int
    text: str
    styles: tuple[Any, ...] = ()

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True, slots=True)
class StyledText:
    """Plain text plus the style spans laid over it.

    Unpacks as ``(text, spans)``:

        >>> text, spans = apply_styles("This is $red$ text.", {"$": "red"})
        >>> text
        'This is red text.'
        >>> spans[0].start, spans[0].end
        (8, 11)

    It is not a tuple and never compares equal to one; compare
    ``tuple(result)`` or the ``text`` and ``spans`` fields instead.

    Attributes:
        text: Final plain text
        spans: Spans in the order they were produced
        offset_unit: "codepoint" or "utf16"; see to_utf16()

    """

    text: str
    spans: tuple[StyleSpan, ...] = ()
    offset_unit: str = "codepoint"

    def __iter__(self) -> Iterator[Any]:
        yield self.text
        yield self.spans

    def __len__(self) -> int:
        return len(self.text)

    def sorted_spans(self) -> tuple[StyleSpan, ...]:
        """Spans in document order: start ascending, then end descending.

        Spans over the same range keep outer before inner, i.e. the later
        closer comes first.
        """
        spans = self.spans
        order = sorted(range(len(spans)), key=lambda i: (*document_order_key(spans[i]), -i))
        return tuple(spans[i] for i in order)

    def slice(self, span: StyleSpan) -> str:
        """Text covered by span.

        Raises:
            ValueError: If offsets are UTF-16 based and cannot index ``str``
        """
        if self.offset_unit != "codepoint":
            msg = "slice() needs code point offsets; call it before to_utf16()"
            raise ValueError(msg)
        return self.text[span.start : span.end]

    def styles_at(self, index: int) -> tuple[Any, ...]:
        """Styles of all spans covering index, outermost first.

        index is read in the result's offset unit: a code point index by
        default, a UTF-16 code unit offset after to_utf16().

        Raises:
            IndexError: If index is outside the text
        """
        length = utf16_len(self.text) if self.offset_unit == "utf16" else len(self.text)
        if not 0 <= index < length:
            msg = f"index {index} out of range for text of length {length}"
            raise IndexError(msg)
        return tuple(span.style for span in self.sorted_spans() if span.covers(index))

    def segments(self) -> list[Segment]:
        """Partition the text into runs that share the same covering spans.

        Every character belongs to exactly one segment; unstyled runs have
        an empty ``styles`` tuple. Empty spans do not produce segments.

        Example:
            >>> result = apply_styles("a $b #c# d$ e", {"$": "red", "#": "blue"})
            >>> [(s.text, s.styles) for s in result.segments()]
            [('a ', ()), ('b ', ('red',)), ('c', ('red', 'blue')), (' d', ('red',)), (' e', ())]
        """
        if self.offset_unit != "codepoint":
            msg = "segments() needs code point offsets; call it before to_utf16()"
            raise ValueError(msg)
        if not self.text:
            return []

        ordered = [span for span in self.sorted_spans() if span.length > 0]
        cuts = {0, len(self.text)}
        for span in ordered:
            cuts.add(span.start)
            cuts.add(span.end)
        bounds = sorted(cuts)

        segments: list[Segment] = []
        for start, end in zip(bounds, bounds[1:]):
            styles = tuple(span.style for span in ordered if span.start <= start and end <= span.end)
            segments.append(Segment(start, self.text[start:end], styles))
        return segments

    def to_utf16(self) -> StyledText:
        """Same text with span offsets expressed in UTF-16 code units."""
        if self.offset_unit == "utf16":
            return self
        offsets = utf16_offsets(self.text)
        spans = tuple(
            StyleSpan(offsets[span.start], offsets[span.end], span.style, span.symbol)
            for span in self.spans
        )
        return StyledText(self.text, spans, offset_unit="utf16")


__all__ = [
    "Segment",
    "StyleSpan",
    "StyledText",
    "document_order_key",
]
