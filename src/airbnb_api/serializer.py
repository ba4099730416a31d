"""
Query string serialization for the Airbnb endpoints.

Array values use the bracket convention the web API expects:
``{"room_types": ["Private room", "Shared room"]}`` becomes
``room_types%5B%5D=Private%20room&room_types%5B%5D=Shared%20room``.
"""

from typing import Any, Mapping
from urllib.parse import quote

# Same unreserved set as JavaScript's encodeURIComponent
_SAFE_CHARS = "-_.!~*'()"
ENCODED_BRACKETS = quote("[]", safe="")


def encode_value(value: Any) -> str:
    """Render a scalar the way the web frontend does and percent-encode it."""
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    else:
        text = str(value)
    return quote(text, safe=_SAFE_CHARS)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def serialize(params: Mapping[str, Any]) -> str:
    """
    Serialize a mapping into a query string (no leading ``?``).

    Args:
        params: Option name to scalar or list of scalars

    Returns:
        Query string; keys holding None or unsupported types are skipped
    """
    pairs = []

    for key, value in params.items():
        if _is_scalar(value):
            pairs.append(f"{key}={encode_value(value)}")
        elif isinstance(value, (list, tuple)):
            pairs.extend(
                f"{key}{ENCODED_BRACKETS}={encode_value(item)}"
                for item in value
                if _is_scalar(item)
            )

    return "&".join(pairs)


def build_url(endpoint: str, params: Mapping[str, Any]) -> str:
    return f"{endpoint}?{serialize(params)}"


def path_segment(value: Any) -> str:
    """Percent-encode a value for use as a single URL path segment."""
    return quote(str(value), safe="")
