"""Fast JSON parsing and encoding for NDJSON lines."""

from typing import Any
import json

import msgspec
import orjson

_decoder = msgspec.json.Decoder()


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def loads_object(data: str | bytes) -> dict[str, Any]:
    """
    Parse one JSON document that must be an object.

    Args:
        data: JSON text (str or UTF-8 bytes)

    Returns:
        Parsed dictionary

    Raises:
        JSONParseError: If the text is not valid JSON or not an object
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        result = _decoder.decode(data)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # Use orjson for compact output (fastest)
    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    # Use msgspec for compact output
    if indent == 0:
        try:
            return msgspec.json.encode(obj).decode("utf-8")
        except (TypeError, ValueError):
            pass

    # Use stdlib for pretty-printed output or as fallback (most compatible)
    return json.dumps(obj, indent=indent if indent > 0 else None, ensure_ascii=False)


def validate_json_depth(obj: Any, max_depth: int = 32, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
