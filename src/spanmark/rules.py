"""Delimiter rules and the validated rule set.

A rule binds one delimiter character to an opaque style payload. The rule
set maps symbols to rules for O(1) lookup during the scan, and is validated
once at construction so scanning itself never fails.

Thread Safety:
DelimiterRule and RuleSet are immutable after creation. Safe to share.
Use RuleSetBuilder for mutable construction.

Example:
    >>> builder = RuleSetBuilder()
    >>> builder = builder.add("$", {"color": "red"}).add("#", {"color": "blue"})
    >>> rules = builder.build()
    >>> rules.get("$").style
    {'color': 'red'}

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from spanmark.errors import DuplicateSymbolError, InvalidSymbolError

DEFAULT_ESCAPE_CHAR = "\\"


@dataclass(frozen=True, slots=True)
class DelimiterRule:
    """A delimiter symbol and the style applied between its pairs.

    Attributes:
        symbol: Single delimiter character, unique within a rule set
        style: Opaque payload copied into every span this rule produces

    """

    symbol: str
    style: Any


def validate_symbol(symbol: object, *, escape_char: str = DEFAULT_ESCAPE_CHAR) -> str:
    """Check that symbol can be used as a delimiter.

    Args:
        symbol: Candidate delimiter
        escape_char: The escape character in effect; it may not double as a delimiter

    Returns:
        The symbol, unchanged

    Raises:
        InvalidSymbolError: If symbol is not a one-character string or
            collides with the escape character
    """
    if not isinstance(symbol, str):
        raise InvalidSymbolError(symbol, f"expected str, got {type(symbol).__name__}")
    if len(symbol) != 1:
        raise InvalidSymbolError(symbol, "symbols must be exactly one character")
    if symbol == escape_char:
        raise InvalidSymbolError(symbol, "symbol is the escape character")
    return symbol


class RuleSet:
    """Immutable, validated collection of delimiter rules.

    Iteration yields rules in the order they were registered.

    Thread Safety:
        Immutable after creation. Safe to share across threads.

    """

    __slots__ = ("_by_symbol", "_escape_char", "_rules")

    def __init__(
        self,
        rules: tuple[DelimiterRule, ...],
        by_symbol: dict[str, DelimiterRule],
        escape_char: str = DEFAULT_ESCAPE_CHAR,
    ) -> None:
        """Initialize rule set with pre-built mappings.

        Use RuleSetBuilder or coerce_rules() to create instances.
        """
        self._rules = rules
        self._by_symbol = by_symbol
        self._escape_char = escape_char

    def get(self, symbol: str) -> DelimiterRule | None:
        """Get the rule bound to symbol, or None."""
        return self._by_symbol.get(symbol)

    def has(self, symbol: str) -> bool:
        """Check if symbol is a registered delimiter."""
        return symbol in self._by_symbol

    @property
    def symbols(self) -> frozenset[str]:
        """All registered delimiter symbols."""
        return frozenset(self._by_symbol)

    @property
    def rules(self) -> tuple[DelimiterRule, ...]:
        """All rules in registration order."""
        return self._rules

    @property
    def escape_char(self) -> str:
        """Escape character the symbols were validated against."""
        return self._escape_char

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    def __iter__(self) -> Iterator[DelimiterRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        symbols = "".join(rule.symbol for rule in self._rules)
        return f"RuleSet(symbols={symbols!r})"


class RuleSetBuilder:
    """Mutable builder for RuleSet.

    Use this to register rules, then call build() to create
    an immutable rule set.

    Example:
            >>> builder = RuleSetBuilder()
            >>> builder = builder.add("*", "bold")
            >>> builder = builder.register(DelimiterRule("_", "italic"))
            >>> rules = builder.build()
            >>> sorted(rules.symbols)
            ['*', '_']

    """

    __slots__ = ("_by_symbol", "_escape_char", "_rules")

    def __init__(self, *, escape_char: str = DEFAULT_ESCAPE_CHAR) -> None:
        """Initialize empty builder.

        Args:
            escape_char: Escape character the rules will be used with
        """
        self._escape_char = escape_char
        self._rules: list[DelimiterRule] = []
        self._by_symbol: dict[str, DelimiterRule] = {}

    def register(self, rule: DelimiterRule) -> RuleSetBuilder:
        """Register a delimiter rule.

        Args:
            rule: Rule to add

        Returns:
            Self for chaining

        Raises:
            InvalidSymbolError: If the rule's symbol is unusable
            DuplicateSymbolError: If the symbol is already registered
        """
        if not isinstance(rule, DelimiterRule):
            msg = f"Expected DelimiterRule, got {type(rule).__name__}"
            raise TypeError(msg)

        symbol = validate_symbol(rule.symbol, escape_char=self._escape_char)
        if symbol in self._by_symbol:
            raise DuplicateSymbolError(symbol)

        self._by_symbol[symbol] = rule
        self._rules.append(rule)
        return self

    def add(self, symbol: str, style: Any) -> RuleSetBuilder:
        """Create and register a rule from a symbol and style."""
        return self.register(DelimiterRule(symbol, style))

    def register_all(self, rules: Iterable[DelimiterRule]) -> RuleSetBuilder:
        """Register multiple rules.

        Args:
            rules: Rules to register, in order

        Returns:
            Self for chaining
        """
        for rule in rules:
            self.register(rule)
        return self

    def build(self) -> RuleSet:
        """Build immutable rule set from registered rules."""
        return RuleSet(
            rules=tuple(self._rules),
            by_symbol=dict(self._by_symbol),
            escape_char=self._escape_char,
        )

    def __len__(self) -> int:
        """Number of registered rules."""
        return len(self._rules)


RulesLike: TypeAlias = RuleSet | Mapping[str, Any] | Iterable[DelimiterRule | tuple[str, Any]]


def coerce_rules(rules: RulesLike, *, escape_char: str = DEFAULT_ESCAPE_CHAR) -> RuleSet:
    """Normalize any accepted rule form into a validated RuleSet.

    Accepted forms:
        - RuleSet (returned as-is when built for the same escape character)
        - Mapping of symbol to style, e.g. ``{"$": RED, "#": BLUE}``
        - Iterable of DelimiterRule
        - Iterable of ``(symbol, style)`` pairs

    Args:
        rules: Rules in any accepted form
        escape_char: Escape character the rules will be used with

    Returns:
        Validated RuleSet

    Raises:
        InvalidSymbolError: If any symbol is unusable
        DuplicateSymbolError: If a symbol appears twice
        TypeError: If an entry is neither a rule nor a pair
    """
    if isinstance(rules, RuleSet):
        if rules.escape_char == escape_char:
            return rules
        return RuleSetBuilder(escape_char=escape_char).register_all(rules).build()

    builder = RuleSetBuilder(escape_char=escape_char)
    if isinstance(rules, Mapping):
        for symbol, style in rules.items():
            builder.add(symbol, style)
        return builder.build()

    for entry in rules:
        match entry:
            case DelimiterRule():
                builder.register(entry)
            case (symbol, style):
                builder.add(symbol, style)
            case _:
                msg = f"Expected DelimiterRule or (symbol, style) pair, got {entry!r}"
                raise TypeError(msg)
    return builder.build()


__all__ = [
    "DEFAULT_ESCAPE_CHAR",
    "DelimiterRule",
    "RuleSet",
    "RuleSetBuilder",
    "RulesLike",
    "coerce_rules",
    "validate_symbol",
]
