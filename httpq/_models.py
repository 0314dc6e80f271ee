from __future__ import annotations

import http.client
import io
import typing
from dataclasses import dataclass, field

from ._config import DEFAULT_ENCODING, DEFAULT_METHOD
from ._encoding import primitive_value_to_str
from ._exceptions import ReadError, StreamClosed

if typing.TYPE_CHECKING:
    from ._transports.base import BaseConnection
    from ._urls import URL

__all__ = [
    "BodyLines",
    "HeaderLookup",
    "Request",
    "Response",
    "cookie_header",
    "parse_cookies",
    "parse_headers",
]


@dataclass
class Request:
    """
    Everything needed to issue a single request. Consumed once by `send()`.
    """

    url: str | URL
    method: str = DEFAULT_METHOD
    headers: typing.Mapping[str, str] = field(default_factory=dict)
    cookies: typing.Mapping[str, typing.Any] = field(default_factory=dict)
    body: typing.Any = None


class HeaderLookup:
    """
    Case-insensitive access to the raw headers of a live connection.

    Unlike `Response.headers` this sees every header the server sent,
    including `Set-Cookie`.
    """

    def __init__(self, connection: BaseConnection) -> None:
        self._connection = connection

    def get(self, name: str, default: str | None = None) -> str | None:
        value = self._connection.get_header(primitive_value_to_str(name))
        return default if value is None else value

    def __getitem__(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __contains__(self, name: typing.Any) -> bool:
        return self.get(name) is not None

    def __call__(self, name: str) -> str | None:
        return self.get(name)


class BodyLines:
    """
    A single-pass iterator over the lines of a response body.

    Lines are read from the underlying stream on demand and returned without
    their line terminator. The connection is released once the last line has
    been read, or when `close()` is called. Abandoning the iterator without
    closing it leaks the connection.
    """

    def __init__(
        self,
        stream: typing.BinaryIO | None,
        on_close: typing.Callable[[], None] | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self._reader: typing.TextIO | None = None
        if stream is not None:
            self._reader = io.TextIOWrapper(
                stream,  # type: ignore[arg-type]
                encoding=encoding,
                errors="replace",
                newline=None,
            )
        self._on_close = on_close
        self._exhausted = False
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    def __iter__(self) -> BodyLines:
        return self

    def __next__(self) -> str:
        if self._closed and not self._exhausted:
            raise StreamClosed()
        if self._exhausted or self._reader is None:
            self._finish()
            raise StopIteration

        try:
            line = self._reader.readline()
        except (OSError, http.client.HTTPException) as exc:
            self.close()
            raise ReadError(str(exc)) from exc

        if not line:
            self._finish()
            raise StopIteration
        return line[:-1] if line.endswith("\n") else line

    def _finish(self) -> None:
        self._exhausted = True
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._reader is not None:
            self._reader.close()
        if self._on_close is not None:
            self._on_close()

    def __enter__(self) -> BodyLines:
        return self

    def __exit__(self, *args: typing.Any) -> None:
        self.close()


class Response:
    """
    The result of a single request.

    `headers` holds the first value of every response header except
    `Set-Cookie`, whose content is parsed into `cookies`. The body is only
    transferred as `body_lines` is consumed.
    """

    def __init__(
        self,
        *,
        status_code: int,
        reason_phrase: str,
        method: str,
        headers: dict[str, str],
        cookies: dict[str, str | None],
        url: str,
        body_lines: BodyLines,
        header_lookup: HeaderLookup,
    ) -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.method = method
        self.headers = headers
        self.cookies = cookies
        self.url = url
        self.body_lines = body_lines
        self.header_lookup = header_lookup

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    def get_header(self, name: str) -> str | None:
        return self.header_lookup.get(name)

    def close(self) -> None:
        self.body_lines.close()

    def __enter__(self) -> Response:
        return self

    def __exit__(self, *args: typing.Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Response [{self.status_code} {self.reason_phrase}]>"


def parse_headers(
    header_fields: typing.Mapping[str | None, typing.Sequence[str]],
) -> dict[str, str]:
    """
    Flatten transport header fields, keeping the first value of each named
    header. Entries without a name, such as the status line, are dropped.
    """
    return {name: values[0] for name, values in header_fields.items() if name and values}


def parse_cookies(cookie_string: str | None) -> dict[str, str | None]:
    """
    Parse the value of a `Set-Cookie` header into a dict.

    Parsing is lenient: a segment without `=` maps to `None`, and attributes
    such as `Path` are returned alongside the cookies themselves.

    >>> parse_cookies("a=1; b=2")
    {'a': '1', 'b': '2'}
    """
    cookies: dict[str, str | None] = {}
    if not cookie_string:
        return cookies
    for segment in cookie_string.split(";"):
        name, sep, value = segment.partition("=")
        name = name.strip()
        if not name:
            continue
        cookies[name] = value.strip() if sep else None
    return cookies


def cookie_header(cookies: typing.Mapping[typing.Any, typing.Any]) -> str:
    """
    Serialise cookies for the `Cookie` request header, in mapping order.
    """
    return "; ".join(
        f"{primitive_value_to_str(name)}={primitive_value_to_str(value)}"
        for name, value in cookies.items()
    )
