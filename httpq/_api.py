from __future__ import annotations

import codecs
import logging
import typing

from ._config import BUFFER_SIZE, DEFAULT_ENCODING, DEFAULT_HEADERS, DEFAULT_METHOD, FORM_CONTENT_TYPE
from ._content import Body, FormBody, StreamBody, TextBody, to_body
from ._encoding import encode, primitive_value_to_str
from ._exceptions import RequestError
from ._models import (
    BodyLines,
    HeaderLookup,
    Request,
    Response,
    cookie_header,
    parse_cookies,
    parse_headers,
)
from ._transports.base import BaseConnection, BaseTransport
from ._transports.default import HTTPTransport
from ._urls import URL, build_url

__all__ = [
    "delete",
    "get",
    "head",
    "options",
    "patch",
    "post",
    "put",
    "request",
    "send",
]

logger = logging.getLogger("httpq")


def _has_header(headers: typing.Mapping[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(key.lower() == lowered for key in headers)


def _content_charset(content_type: str | None) -> str:
    """
    The charset declared by a Content-Type header, if Python knows it.
    """
    if content_type:
        for param in content_type.split(";")[1:]:
            key, _, value = param.partition("=")
            charset = value.strip().strip("\"'")
            if key.strip().lower() == "charset" and charset:
                try:
                    codecs.lookup(charset)
                except LookupError:
                    break
                return charset
    return DEFAULT_ENCODING


def _write_body(connection: BaseConnection, body: Body) -> None:
    out = connection.output_stream()
    try:
        if isinstance(body, TextBody):
            out.write(body.text.encode("utf-8"))
        elif isinstance(body, FormBody):
            out.write(encode(body.fields).encode("utf-8"))
        elif isinstance(body, StreamBody):
            while True:
                chunk = body.stream.read(BUFFER_SIZE)
                if not chunk:
                    break
                if isinstance(chunk, str):
                    chunk = chunk.encode("utf-8")
                out.write(chunk)
        else:
            raise TypeError(f"Unexpected request body: {body!r}")
    finally:
        out.close()


def _send_body(
    connection: BaseConnection, body: Body, headers: typing.Mapping[str, str]
) -> None:
    connection.do_output = True
    if isinstance(body, FormBody) and not _has_header(headers, "Content-Type"):
        connection.set_header("Content-Type", FORM_CONTENT_TYPE)
    connection.connect()
    _write_body(connection, body)


def _build_response(connection: BaseConnection, method: str) -> Response:
    status_code = connection.status_code
    if status_code >= 400:
        stream = connection.error_stream()
    else:
        stream = connection.input_stream()

    headers = parse_headers(connection.header_fields())
    set_cookie = next((key for key in headers if key.lower() == "set-cookie"), None)
    cookies = parse_cookies(headers.pop(set_cookie) if set_cookie else None)

    encoding = _content_charset(connection.get_header("Content-Type"))
    return Response(
        status_code=status_code,
        reason_phrase=connection.reason_phrase,
        method=method,
        headers=headers,
        cookies=cookies,
        url=connection.final_url,
        body_lines=BodyLines(stream, on_close=connection.close, encoding=encoding),
        header_lookup=HeaderLookup(connection),
    )


def send(request: Request, *, transport: BaseTransport | None = None) -> Response:
    """
    Send a `Request`, returning a `Response` once the response head is read.

    The response body is read lazily through `Response.body_lines`. Exhaust or
    close it to release the connection:

    with httpq.send(httpq.Request("https://www.example.org/")) as response:
        for line in response.body_lines:
            ...
    """
    try:
        return _send(request, transport)
    except RequestError as exc:
        if exc._request is None:
            exc.request = request
        raise


def _send(request: Request, transport: BaseTransport | None) -> Response:
    url = build_url(request.url)
    if transport is None:
        transport = HTTPTransport()

    connection = transport.open(url)
    try:
        method = primitive_value_to_str(request.method or DEFAULT_METHOD).upper()
        connection.set_method(method)

        caller_headers = request.headers or {}
        for name, value in {**DEFAULT_HEADERS, **caller_headers}.items():
            connection.set_header(name, value)

        if request.cookies:
            connection.set_header("Cookie", cookie_header(request.cookies))

        body = to_body(request.body)
        if body is not None:
            _send_body(connection, body, caller_headers)
        else:
            connection.connect()

        response = _build_response(connection, method)
    except Exception:
        connection.close()
        raise

    logger.info(
        'HTTP Request: %s %s "%d %s"',
        method,
        response.url,
        response.status_code,
        response.reason_phrase,
    )
    return response


def request(
    url: str | URL,
    method: str = DEFAULT_METHOD,
    headers: typing.Mapping[str, str] | None = None,
    cookies: typing.Mapping[str, typing.Any] | None = None,
    body: typing.Any = None,
    *,
    transport: BaseTransport | None = None,
) -> Response:
    """
    Sends an HTTP request.

    **Parameters:**

    * **url** - URL for the new `Request`, a string or `httpq.URL`. Build one
    with a query or fragment using `httpq.build_url()`.
    * **method** - HTTP method for the new `Request`. Uppercased before use.
    * **headers** - *(optional)* Request headers, applied over the defaults.
    * **cookies** - *(optional)* Cookies sent in a single `Cookie` header.
    * **body** - *(optional)* A string, a mapping of form fields, bytes or a
    binary file-like object.
    * **transport** - *(optional)* The transport used to open the connection.

    **Returns:** `Response`

    Usage:

    ```
    >>> import httpq
    >>> response = httpq.request('https://httpbin.org/get')
    >>> response
    <Response [200 OK]>
    ```
    """
    return send(
        Request(
            url=url,
            method=method,
            headers=headers or {},
            cookies=cookies or {},
            body=body,
        ),
        transport=transport,
    )


def get(url: str | URL, **kwargs: typing.Any) -> Response:
    """
    Sends a `GET` request.

    **Parameters**: See `httpq.request`.
    """
    return request(url, "GET", **kwargs)


def options(url: str | URL, **kwargs: typing.Any) -> Response:
    return request(url, "OPTIONS", **kwargs)


def head(url: str | URL, **kwargs: typing.Any) -> Response:
    return request(url, "HEAD", **kwargs)


def delete(url: str | URL, **kwargs: typing.Any) -> Response:
    return request(url, "DELETE", **kwargs)


def post(url: str | URL, body: typing.Any = None, **kwargs: typing.Any) -> Response:
    """
    Sends a `POST` request.

    **Parameters**: See `httpq.request`.
    """
    return request(url, "POST", body=body, **kwargs)


def put(url: str | URL, body: typing.Any = None, **kwargs: typing.Any) -> Response:
    return request(url, "PUT", body=body, **kwargs)


def patch(url: str | URL, body: typing.Any = None, **kwargs: typing.Any) -> Response:
    return request(url, "PATCH", body=body, **kwargs)
