"""Exception classes for Spanmark.

Provides standardized exceptions for error handling throughout Spanmark.

Matching never raises: malformed markup degrades to unstyled text. Errors are
reserved for invalid configuration, which is rejected before scanning begins.
"""

from __future__ import annotations


class SpanmarkError(Exception):
    """Base exception for all Spanmark errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigurationError(SpanmarkError, ValueError):
    """Invalid rule set or style configuration.

    Raised at the API boundary, before any text is scanned.
    """

    pass


class InvalidSymbolError(ConfigurationError):
    """Delimiter symbol is not a single usable character."""

    def __init__(self, symbol: object, reason: str) -> None:
        """Initialize invalid symbol error.

        Args:
            symbol: The offending symbol as supplied by the caller
            reason: Why the symbol was rejected
        """
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Invalid delimiter symbol {symbol!r}: {reason}")


class DuplicateSymbolError(ConfigurationError):
    """The same delimiter symbol is bound to more than one rule."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Delimiter symbol {symbol!r} is already registered")


class SerializationError(SpanmarkError):
    """Styled text could not be converted to or from JSON."""

    pass
