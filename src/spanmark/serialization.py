"""StyledText serialization: JSON round-trip for styling results.

Converts StyledText values to/from JSON-compatible dicts. Useful for:
- Caching styled text alongside rendered output
- Handing spans to a non-Python renderer (e.g. a web client)
- Debugging and inspection

Styles are copied as-is, so they must already be JSON-compatible
(dicts, lists, strings, numbers, booleans, None). Tuples come back as lists.

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from spanmark import apply_styles
    from spanmark.serialization import to_json, from_json

    result = apply_styles("This is $red$ text.", {"$": {"color": "red"}})
    restored = from_json(to_json(result))
    assert restored == result

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from spanmark.config import _OFFSET_UNITS
from spanmark.errors import SerializationError
from spanmark.spans import StyledText, StyleSpan


def to_dict(styled: StyledText) -> dict[str, Any]:
    """Convert a StyledText to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        styled: Result of apply_styles() or Styler.

    Returns:
        Dict with ``_type``, ``text``, ``offset_unit`` and ``spans``.

    """
    return {
        "_type": "StyledText",
        "text": styled.text,
        "offset_unit": styled.offset_unit,
        "spans": [
            {
                "start": span.start,
                "end": span.end,
                "symbol": span.symbol,
                "style": span.style,
            }
            for span in styled.spans
        ],
    }


def from_dict(data: dict[str, Any]) -> StyledText:
    """Reconstruct a StyledText from a dict.

    Args:
        data: Dict as produced by to_dict.

    Returns:
        StyledText with spans in their serialized order.

    Raises:
        SerializationError: If ``_type`` is wrong, a field is missing, or a
            field has the wrong shape.

    """
    type_name = data.get("_type")
    if type_name != "StyledText":
        msg = f"Expected '_type' of 'StyledText', got {type_name!r}"
        raise SerializationError(msg)

    try:
        text = data["text"]
        raw_spans = data["spans"]
        offset_unit = data.get("offset_unit", "codepoint")
        if not isinstance(text, str):
            msg = f"'text' must be a string, got {type(text).__name__}"
            raise SerializationError(msg)
        if not isinstance(raw_spans, list):
            msg = f"'spans' must be a list, got {type(raw_spans).__name__}"
            raise SerializationError(msg)
        if offset_unit not in _OFFSET_UNITS:
            msg = f"Unknown offset_unit {offset_unit!r}"
            raise SerializationError(msg)

        spans = tuple(
            StyleSpan(
                start=raw["start"],
                end=raw["end"],
                style=raw["style"],
                symbol=raw.get("symbol", ""),
            )
            for raw in raw_spans
        )
    except KeyError as e:
        msg = f"Missing field in serialized StyledText: {e.args[0]!r}"
        raise SerializationError(msg) from e
    except (TypeError, AttributeError) as e:
        msg = f"Malformed span in serialized StyledText: {e}"
        raise SerializationError(msg) from e

    return StyledText(text=text, spans=spans, offset_unit=offset_unit)


def to_json(styled: StyledText, *, indent: int | None = None) -> str:
    """Serialize a StyledText to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        styled: StyledText to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    Raises:
        SerializationError: If a style is not JSON-compatible.

    """
    try:
        return json.dumps(to_dict(styled), sort_keys=True, indent=indent)
    except (TypeError, ValueError) as e:
        msg = f"Style payload is not JSON-compatible: {e}"
        raise SerializationError(msg) from e


def from_json(data: str) -> StyledText:
    """Deserialize a StyledText from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        StyledText value.

    Raises:
        SerializationError: If the JSON is malformed or not a StyledText.

    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise SerializationError(msg) from e
    if not isinstance(raw, dict):
        msg = f"Expected JSON object, got {type(raw).__name__}"
        raise SerializationError(msg)
    return from_dict(raw)


__all__ = [
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
