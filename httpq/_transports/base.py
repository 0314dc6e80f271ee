from __future__ import annotations

import io
import typing

from .._exceptions import LocalProtocolError

if typing.TYPE_CHECKING:
    from .._urls import URL

__all__ = ["BaseConnection", "BaseTransport", "RawResponse"]


class RawResponse(typing.NamedTuple):
    """
    The response head and body stream, as produced by a connection.
    """

    status_code: int
    reason_phrase: str
    headers: list[tuple[str, str]]
    stream: typing.BinaryIO | None
    url: str
    http_version: str = "HTTP/1.1"


class _OutputStream(io.BytesIO):
    """
    Buffers a request body, handing it to the connection once closed.
    """

    def __init__(self, on_close: typing.Callable[[bytes], None]) -> None:
        super().__init__()
        self._on_close = on_close

    def close(self) -> None:
        if not self.closed:
            self._on_close(self.getvalue())
        super().close()


class BaseConnection:
    """
    A single request/response exchange with a server.

    Callers configure the request, optionally write a body to
    `output_stream()`, then read the response through `status_code`,
    `header_fields()` and the input/error streams. The request is sent the
    first time any part of the response is accessed.

    Subclasses implement `_connect()`, `_send()` and `_close()`.
    """

    def __init__(self, url: URL) -> None:
        self.url = url
        self.method = "GET"
        self.request_headers: dict[str, str] = {}
        self.do_output = False
        self._connected = False
        self._output: _OutputStream | None = None
        self._content: bytes | None = None
        self._response: RawResponse | None = None
        self._closed = False

    # Request configuration

    def set_method(self, method: str) -> None:
        self.method = method

    def set_header(self, name: str, value: str) -> None:
        self.request_headers[name] = value

    def connect(self) -> None:
        if not self._connected:
            self._connect()
            self._connected = True

    def output_stream(self) -> typing.BinaryIO:
        if not self.do_output:
            raise LocalProtocolError(
                "Cannot write a request body when output is disabled on the connection."
            )
        if self._response is not None:
            raise LocalProtocolError(
                "Cannot write a request body after the response has been read."
            )
        self.connect()
        if self._output is None:
            self._output = _OutputStream(self._set_content)
        return self._output

    def _set_content(self, content: bytes) -> None:
        self._content = content

    # Response access

    def _get_response(self) -> RawResponse:
        if self._response is None:
            self.connect()
            if self._output is not None and not self._output.closed:
                self._output.close()
            self._response = self._send(self.method, dict(self.request_headers), self._content)
        return self._response

    @property
    def status_code(self) -> int:
        return self._get_response().status_code

    @property
    def reason_phrase(self) -> str:
        return self._get_response().reason_phrase

    @property
    def final_url(self) -> str:
        return self._get_response().url

    def input_stream(self) -> typing.BinaryIO | None:
        response = self._get_response()
        return response.stream if response.status_code < 400 else None

    def error_stream(self) -> typing.BinaryIO | None:
        response = self._get_response()
        return response.stream if response.status_code >= 400 else None

    def header_fields(self) -> dict[str | None, list[str]]:
        """
        All response headers, grouped by name in the order received.

        The status line is included under the `None` key.
        """
        response = self._get_response()
        status_line = f"{response.http_version} {response.status_code} {response.reason_phrase}"
        fields: dict[str | None, list[str]] = {None: [status_line.rstrip()]}
        for name, value in response.headers:
            fields.setdefault(name, []).append(value)
        return fields

    def get_header(self, name: str) -> str | None:
        """
        The first value of a response header, matched case-insensitively.
        """
        lowered = name.lower()
        for key, value in self._get_response().headers:
            if key.lower() == lowered:
                return value
        return None

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._response is not None and self._response.stream is not None:
            self._response.stream.close()
        self._close()

    # Transport specific

    def _connect(self) -> None:
        raise NotImplementedError("The '_connect' method must be implemented.")  # pragma: no cover

    def _send(
        self, method: str, headers: dict[str, str], content: bytes | None
    ) -> RawResponse:
        raise NotImplementedError("The '_send' method must be implemented.")  # pragma: no cover

    def _close(self) -> None:
        pass


class BaseTransport:
    """
    Opens connections to URLs. The only boundary between httpq and the network.
    """

    def open(self, url: URL) -> BaseConnection:
        raise NotImplementedError("The 'open' method must be implemented.")  # pragma: no cover

    def __enter__(self) -> BaseTransport:
        return self

    def __exit__(self, *args: typing.Any) -> None:
        self.close()

    def close(self) -> None:
        pass
