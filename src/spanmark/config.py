"""ContextVar-based style configuration for Spanmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is resolved once per Styler instance, or per call to apply_styles()
when no explicit config is passed.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    styler = Styler({"$": RED}, config=StyleConfig(span_order="document"))

    # Context default, picked up by apply_styles() and Styler()
    from spanmark.config import StyleConfig, style_config_context

    with style_config_context(StyleConfig(escape_char="~")):
        result = apply_styles("~$literal~$ and $styled$", {"$": RED})

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from spanmark.errors import ConfigurationError

SpanOrder: TypeAlias = Literal["closing", "document"]
OffsetUnit: TypeAlias = Literal["codepoint", "utf16"]

_SPAN_ORDERS: frozenset[str] = frozenset({"closing", "document"})
_OFFSET_UNITS: frozenset[str] = frozenset({"codepoint", "utf16"})


@dataclass(frozen=True, slots=True)
class StyleConfig:
    """Immutable style configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        escape_char: Character that marks the following delimiter as literal
        span_order: "closing" reports spans in the order their closers were
            found (innermost first); "document" sorts by start ascending,
            then end descending
        offset_unit: "codepoint" for Python string indices, "utf16" for
            UTF-16 code units as used by platform attributed strings

    """

    escape_char: str = "\\"
    span_order: SpanOrder = "closing"
    offset_unit: OffsetUnit = "codepoint"

    def __post_init__(self) -> None:
        if not isinstance(self.escape_char, str) or len(self.escape_char) != 1:
            msg = f"escape_char must be a single character, got {self.escape_char!r}"
            raise ConfigurationError(msg)
        if self.span_order not in _SPAN_ORDERS:
            msg = f"span_order must be one of {sorted(_SPAN_ORDERS)}, got {self.span_order!r}"
            raise ConfigurationError(msg)
        if self.offset_unit not in _OFFSET_UNITS:
            msg = f"offset_unit must be one of {sorted(_OFFSET_UNITS)}, got {self.offset_unit!r}"
            raise ConfigurationError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> StyleConfig:
        """Create StyleConfig from dictionary.

        Useful for framework integration where config may come from external
        sources (settings files, environment, etc.).

        Only includes keys that are valid StyleConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                StyleConfig attribute names.

        Returns:
            New StyleConfig instance with values from dict.

        Example:
            >>> config = StyleConfig.from_dict({
            ...     "span_order": "document",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.span_order
            'document'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: StyleConfig = StyleConfig()

_style_config: ContextVar[StyleConfig] = ContextVar(
    "style_config",
    default=_DEFAULT_CONFIG,
)


def get_style_config() -> StyleConfig:
    """Get current style configuration (thread-local).

    Returns:
        The active StyleConfig for this thread/context.

    """
    return _style_config.get()


def set_style_config(config: StyleConfig) -> None:
    """Set style configuration for current context.

    Args:
        config: StyleConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _style_config.set(config)


def reset_style_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _style_config.set(_DEFAULT_CONFIG)


@contextmanager
def style_config_context(config: StyleConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: StyleConfig to use within the context.

    Yields:
        None

    Example:
        >>> with style_config_context(StyleConfig(span_order="document")):
        ...     result = apply_styles("$a$", {"$": "red"})
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _style_config.get()
    _style_config.set(config)
    try:
        yield
    finally:
        _style_config.set(previous)


__all__ = [
    "OffsetUnit",
    "SpanOrder",
    "StyleConfig",
    "get_style_config",
    "reset_style_config",
    "set_style_config",
    "style_config_context",
]
