"""
Spanmark: Delimiter-Driven Text Styling for Python

Turns plain text with symbolic delimiters into plain text plus style spans,
with no dependency on any rendering or UI framework. Each delimiter symbol
is bound to an opaque style payload; matched pairs style the text between
them, delimiters are stripped, and escaped delimiters stay as literal text.

Quick Start:
    >>> from spanmark import apply_styles
    >>> text, spans = apply_styles("This is $red$ text.", {"$": {"color": "red"}})
    >>> text
    'This is red text.'
    >>> spans[0]
    StyleSpan(start=8, end=11, style={'color': 'red'}, symbol='$')

    >>> # Reuse a validated rule set
    >>> from spanmark import Styler
    >>> styler = Styler({"*": "bold", "_": "italic"})
    >>> styler("*bold* and _italic_, but \\\\*not this\\\\*").text
    'bold and italic, but *not this*'

Semantics:
    - Only the most recent open delimiter may close; a closer for a buried
      opener is dropped, so spans always nest.
    - Unmatched delimiters are stripped and style nothing.
    - Invalid rules (duplicate or multi-character symbols) raise
      ConfigurationError before any text is scanned.

Installation:
    pip install spanmark              # Core library (zero deps)
    pip install spanmark[test]        # + pytest and hypothesis
"""

from spanmark.config import (
    StyleConfig,
    get_style_config,
    reset_style_config,
    set_style_config,
    style_config_context,
)
from spanmark.errors import (
    ConfigurationError,
    DuplicateSymbolError,
    InvalidSymbolError,
    SerializationError,
    SpanmarkError,
)
from spanmark.escaper import EscapedText, escape, from_placeholders, to_placeholders
from spanmark.matcher import match_spans
from spanmark.rules import (
    DelimiterRule,
    RuleSet,
    RuleSetBuilder,
    RulesLike,
    coerce_rules,
)
from spanmark.serialization import from_dict, from_json, to_dict, to_json
from spanmark.spans import Segment, StyledText, StyleSpan, document_order_key

__version__ = "0.1.0"


class Styler:
    """Reusable processor for one rule set and configuration.

    Validates the rules once; every call afterwards is a pure function of
    the input text.

    Usage:
        >>> styler = Styler({"$": "red", "#": "blue"})
        >>> result = styler("This is $red$ and this is #blue#.")
        >>> result.text
        'This is red and this is blue.'
        >>> [result.slice(span) for span in result.spans]
        ['red', 'blue']

    Thread Safety:
        Immutable after construction. Safe to share across threads.

    """

    __slots__ = ("_config", "_rules")

    def __init__(self, rules: RulesLike, *, config: StyleConfig | None = None) -> None:
        """Initialize styler.

        Args:
            rules: Delimiter rules (RuleSet, mapping, rules, or pairs)
            config: Style configuration (uses the context default if None)

        Raises:
            ConfigurationError: If the rules are invalid for this config
        """
        self._config = config or get_style_config()
        self._rules = coerce_rules(rules, escape_char=self._config.escape_char)

    @property
    def rules(self) -> RuleSet:
        return self._rules

    @property
    def config(self) -> StyleConfig:
        return self._config

    def __call__(self, text: str) -> StyledText:
        """Style text.

        Args:
            text: Input with delimiters

        Returns:
            StyledText with delimiters stripped and spans applied
        """
        config = self._config
        escaped = escape(text, self._rules.symbols, escape_char=config.escape_char)
        result = match_spans(escaped, self._rules)

        if config.span_order == "document":
            result = StyledText(result.text, result.sorted_spans())
        if config.offset_unit == "utf16":
            result = result.to_utf16()
        return result

    def __repr__(self) -> str:
        return f"Styler({self._rules!r}, config={self._config!r})"


def apply_styles(
    text: str,
    rules: RulesLike,
    *,
    config: StyleConfig | None = None,
) -> StyledText:
    """Strip delimiters from text and return the styled spans they marked.

    Args:
        text: Input text; may be empty or contain no delimiters at all
        rules: Delimiter rules (RuleSet, mapping, rules, or pairs)
        config: Style configuration (uses the context default if None)

    Returns:
        StyledText, which unpacks as ``(text, spans)``

    Raises:
        ConfigurationError: If the rules are invalid

    Example:
        >>> text, spans = apply_styles("This is $unpaired text.", {"$": "red"})
        >>> text, spans
        ('This is unpaired text.', ())

    """
    return Styler(rules, config=config)(text)


__all__ = [
    "ConfigurationError",
    "DelimiterRule",
    "DuplicateSymbolError",
    "EscapedText",
    "InvalidSymbolError",
    "RuleSet",
    "RuleSetBuilder",
    "RulesLike",
    "Segment",
    "SerializationError",
    "SpanmarkError",
    "StyleConfig",
    "StyleSpan",
    "StyledText",
    "Styler",
    "__version__",
    "apply_styles",
    "coerce_rules",
    "document_order_key",
    "escape",
    "from_dict",
    "from_json",
    "from_placeholders",
    "get_style_config",
    "match_spans",
    "reset_style_config",
    "set_style_config",
    "style_config_context",
    "to_dict",
    "to_json",
    "to_placeholders",
]
