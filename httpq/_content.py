from __future__ import annotations

import io
import typing
from collections.abc import Mapping
from dataclasses import dataclass

__all__ = ["Body", "FormBody", "StreamBody", "TextBody", "to_body"]


@dataclass(frozen=True)
class TextBody:
    text: str


@dataclass(frozen=True)
class FormBody:
    fields: Mapping[typing.Any, typing.Any]


@dataclass(frozen=True)
class StreamBody:
    stream: typing.BinaryIO


Body = typing.Union[TextBody, FormBody, StreamBody]


def to_body(content: typing.Any) -> Body | None:
    """
    Coerce a request body into one of the `Body` variants.

    * `str` is sent as UTF-8 text.
    * A mapping is sent form-urlencoded.
    * `bytes`, or any object with a `read()` method, is copied as a byte stream.
    """
    if content is None or isinstance(content, (TextBody, FormBody, StreamBody)):
        return content
    if isinstance(content, str):
        return TextBody(content)
    if isinstance(content, Mapping):
        return FormBody(content)
    if isinstance(content, (bytes, bytearray)):
        return StreamBody(io.BytesIO(content))
    if hasattr(content, "read"):
        return StreamBody(content)
    raise TypeError(
        f"Unexpected type for request body: {type(content).__name__!r}. "
        "Expected str, a mapping, bytes or a binary file-like object."
    )
