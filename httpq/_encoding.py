from __future__ import annotations

import typing
from collections.abc import Mapping
from urllib.parse import unquote_plus

from ._urlparse import percent_encode_char

# Characters left as-is by form-urlencoding. Space is handled separately.
FORM_SAFE = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._*"
)


def primitive_value_to_str(value: typing.Any) -> str:
    """
    Coerce a primitive data type into a string value.

    Note that we prefer JSON-style 'true'/'false' for boolean values here.
    """
    if value is True:
        return "true"
    elif value is False:
        return "false"
    elif value is None:
        return ""
    return str(value)


def _encode_scalar(value: typing.Any) -> str:
    text = primitive_value_to_str(value)
    return "".join(
        char if char in FORM_SAFE else "+" if char == " " else percent_encode_char(char)
        for char in text
    )


def encode(value: typing.Any) -> str:
    """
    Return the UTF-8 `application/x-www-form-urlencoded` form of a value.

    A mapping becomes `key=value` pairs joined by `&`, with every key and value
    encoded by this function in turn. Any other value is converted to a string
    and percent-encoded, with spaces written as `+`.

    >>> encode({"q": "a b", "lang": "en"})
    'q=a+b&lang=en'
    """
    if isinstance(value, Mapping):
        return "&".join(f"{encode(key)}={encode(item)}" for key, item in value.items())
    return _encode_scalar(value)


def decode(text: str) -> str:
    """
    Reverse the percent-encoding applied by `encode` to a scalar.
    """
    return unquote_plus(text, encoding="utf-8", errors="strict")
