"""Token serialization: JSON round-trip for clex tokens.

Converts Token objects to/from JSON-compatible dicts. Useful for:
- Caching token streams between editor sessions
- Sending tokens to a front end that does its own styling
- Debugging and inspection

All output is deterministic (sorted keys).

Example:
    from clex import tokenize
    from clex.serialization import to_json, from_json

    tokens = tokenize("int x = 1;")
    assert from_json(to_json(tokens)) == tokens

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from collections.abc import Iterable
from typing import Any

from clex.tokens import Category, Token

_REQUIRED_FIELDS = ("category", "value", "start", "end", "lineno", "col")


def to_dict(token: Token) -> dict[str, Any]:
    """Convert a Token to a JSON-compatible dict.

    Args:
        token: Token to serialize.

    Returns:
        Dict with category name, value, offsets and coordinates.

    """
    return {
        "category": token.category.name,
        "value": token.value,
        "start": token.start,
        "end": token.end,
        "lineno": token.lineno,
        "col": token.col,
        "end_lineno": token._end_lineno,
        "end_col": token._end_col,
        "source_file": token._source_file,
    }


def from_dict(data: dict[str, Any]) -> Token:
    """Reconstruct a Token from a dict produced by :func:`to_dict`.

    Raises:
        ValueError: If a required field is missing or the category is unknown.

    """
    missing = [name for name in _REQUIRED_FIELDS if name not in data]
    if missing:
        msg = f"Missing field(s) in serialized token: {', '.join(missing)}"
        raise ValueError(msg)

    try:
        category = Category[data["category"]]
    except KeyError:
        msg = f"Unknown token category: {data['category']!r}"
        raise ValueError(msg) from None

    return Token(
        category=category,
        value=data["value"],
        _start_offset=data["start"],
        _end_offset=data["end"],
        _lineno=data["lineno"],
        _col=data["col"],
        _end_lineno=data.get("end_lineno"),
        _end_col=data.get("end_col"),
        _source_file=data.get("source_file"),
    )


def to_json(tokens: Iterable[Token], *, indent: int | None = None) -> str:
    """Serialize tokens to a JSON array string.

    Args:
        tokens: Tokens to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps([to_dict(t) for t in tokens], sort_keys=True, indent=indent)


def from_json(data: str) -> list[Token]:
    """Deserialize tokens from a JSON array string.

    Raises:
        ValueError: If the JSON is not an array of token objects.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array of tokens, got {type(raw).__name__}"
        raise ValueError(msg)
    return [from_dict(item) for item in raw]


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
