"""Property-based tests for Spanmark using Hypothesis.

These tests verify invariants that should hold for any input:
1. Text without delimiters passes through unchanged
2. Styling is idempotent once no delimiters remain
3. Exactly the delimiters (and the escape characters before escaped ones) are removed
4. Spans stay in bounds and never partially overlap
5. Results are deterministic

Property-based testing finds edge cases that example-based tests miss.
"""

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from spanmark import StyleConfig, apply_styles, escape

RULES = {"$": "A", "#": "B", "%": "C"}
SYMBOLS = frozenset(RULES)

# Small alphabet so delimiters, escapes and astral characters collide often
marked_text = st.text(alphabet=st.sampled_from(list("ab $#%\\é😀")), max_size=40)
plain_text = st.text(max_size=60).filter(lambda s: not SYMBOLS & set(s))


class TestPassThroughProperties:
    """Text that contains no delimiters is never altered."""

    @given(text=plain_text)
    @settings(max_examples=200)
    def test_no_delimiters_round_trip(self, text: str) -> None:
        result = apply_styles(text, RULES)
        assert result.text == text
        assert result.spans == ()

    @given(text=marked_text)
    @settings(max_examples=200)
    def test_idempotent_once_delimiters_are_gone(self, text: str) -> None:
        first = apply_styles(text, RULES)
        assume(not SYMBOLS & set(first.text))

        second = apply_styles(first.text, RULES)
        assert second.text == first.text
        assert second.spans == ()


class TestStrippingProperties:
    """Character accounting for the stripping step."""

    @given(text=marked_text)
    @settings(max_examples=300)
    def test_removed_characters_are_the_active_delimiters(self, text: str) -> None:
        escaped_count = len(escape(text, SYMBOLS).literal)
        symbol_count = sum(1 for char in text if char in SYMBOLS)

        result = apply_styles(text, RULES)

        # One escape character is consumed per escaped symbol
        stripped_delimiters = len(text) - len(result.text) - escaped_count
        assert stripped_delimiters == symbol_count - escaped_count

    @given(text=marked_text)
    @settings(max_examples=300)
    def test_only_escaped_symbols_survive(self, text: str) -> None:
        escaped_count = len(escape(text, SYMBOLS).literal)
        result = apply_styles(text, RULES)
        assert sum(1 for char in result.text if char in SYMBOLS) == escaped_count


class TestSpanProperties:
    """Structural invariants of the produced spans."""

    @given(text=marked_text)
    @settings(max_examples=300)
    def test_spans_in_bounds(self, text: str) -> None:
        result = apply_styles(text, RULES)
        for span in result.spans:
            assert 0 <= span.start <= span.end <= len(result.text)
            assert span.style == RULES[span.symbol]

    @given(text=marked_text)
    @settings(max_examples=300)
    def test_spans_nest_or_are_disjoint(self, text: str) -> None:
        spans = apply_styles(text, RULES).spans
        for i, a in enumerate(spans):
            for b in spans[i + 1 :]:
                if a.overlaps(b):
                    assert a.contains(b) or b.contains(a)

    @given(text=marked_text)
    @settings(max_examples=200)
    def test_closing_order_puts_inner_spans_first(self, text: str) -> None:
        spans = apply_styles(text, RULES).spans
        for i, later in enumerate(spans):
            for earlier in spans[:i]:
                if earlier.length and later.overlaps(earlier):
                    assert later.contains(earlier)

    @given(text=marked_text)
    @settings(max_examples=200)
    def test_document_order_is_a_permutation(self, text: str) -> None:
        closing = apply_styles(text, RULES)
        document = apply_styles(text, RULES, config=StyleConfig(span_order="document"))
        assert sorted(closing.spans, key=repr) == sorted(document.spans, key=repr)
        assert document.spans == closing.sorted_spans()

    @given(text=marked_text)
    @settings(max_examples=100)
    def test_segments_partition_text(self, text: str) -> None:
        result = apply_styles(text, RULES)
        segments = result.segments()
        assert "".join(s.text for s in segments) == result.text
        for prev, cur in zip(segments, segments[1:]):
            assert prev.end == cur.start


class TestDeterminism:
    @given(text=marked_text)
    @settings(max_examples=100)
    def test_same_input_same_output(self, text: str) -> None:
        assert apply_styles(text, RULES) == apply_styles(text, RULES)
