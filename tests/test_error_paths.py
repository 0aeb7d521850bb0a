"""Error-path and malformed input tests.

Malformed markup never raises; it degrades to unstyled text. Only invalid
configuration is an error, and it is reported before any scanning.
"""

import pytest

from spanmark import (
    ConfigurationError,
    DuplicateSymbolError,
    InvalidSymbolError,
    SerializationError,
    SpanmarkError,
    StyleConfig,
    Styler,
    apply_styles,
)

# =========================================================================
# Exception hierarchy and formatting
# =========================================================================


class TestErrorHierarchy:
    def test_configuration_errors_share_base(self) -> None:
        assert issubclass(InvalidSymbolError, ConfigurationError)
        assert issubclass(DuplicateSymbolError, ConfigurationError)
        assert issubclass(ConfigurationError, SpanmarkError)
        assert issubclass(SerializationError, SpanmarkError)

    def test_configuration_error_is_value_error(self) -> None:
        assert issubclass(ConfigurationError, ValueError)

    def test_invalid_symbol_message(self) -> None:
        err = InvalidSymbolError("**", "symbols must be exactly one character")
        assert err.symbol == "**"
        assert str(err) == "Invalid delimiter symbol '**': symbols must be exactly one character"

    def test_duplicate_symbol_message(self) -> None:
        err = DuplicateSymbolError("$")
        assert err.symbol == "$"
        assert "'$'" in str(err)


# =========================================================================
# Configuration errors surface at the API boundary
# =========================================================================


class TestConfigurationErrors:
    def test_duplicate_symbol(self) -> None:
        with pytest.raises(DuplicateSymbolError):
            Styler([("$", "red"), ("#", "blue"), ("$", "green")])

    def test_multi_character_symbol(self) -> None:
        with pytest.raises(InvalidSymbolError):
            apply_styles("**bold**", {"**": "bold"})

    def test_empty_symbol(self) -> None:
        with pytest.raises(InvalidSymbolError):
            apply_styles("x", {"": "nothing"})

    def test_symbol_equal_to_escape_char(self) -> None:
        with pytest.raises(InvalidSymbolError):
            apply_styles("x", {"~": "strike"}, config=StyleConfig(escape_char="~"))

    def test_backslash_symbol_with_default_escape(self) -> None:
        with pytest.raises(InvalidSymbolError):
            apply_styles("x", {"\\": "slash"})

    def test_backslash_symbol_with_other_escape(self) -> None:
        result = apply_styles("\\a\\", {"\\": "slash"}, config=StyleConfig(escape_char="^"))
        assert result.text == "a"
        assert result.slice(result.spans[0]) == "a"


# =========================================================================
# Malformed markup degrades gracefully
# =========================================================================


class TestGracefulDegradation:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("$", ""),
            ("$$$", ""),
            ("\\", "\\"),
            ("\\\\", "\\\\"),
            ("a\\", "a\\"),
            ("$#%", ""),
            ("%#$%#$", ""),
            ("\\$\\", "$\\"),
        ],
    )
    def test_never_raises(self, source: str, expected: str) -> None:
        result = apply_styles(source, {"$": "A", "#": "B", "%": "C"})
        assert result.text == expected

    def test_only_closers_of_buried_openers(self) -> None:
        result = apply_styles("$#%$#", {"$": "A", "#": "B", "%": "C"})
        assert result.text == ""
        assert result.spans == ()

    def test_long_unbalanced_input(self) -> None:
        source = "$#" * 5000
        result = apply_styles(source, {"$": "A", "#": "B"})
        assert result.text == ""
        # The stack cycles every five "$#" pairs, closing four spans per cycle
        assert len(result.spans) == 4000
