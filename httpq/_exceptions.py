"""
Our exception hierarchy:

* HTTPError
  x RequestError
    + TransportError
      - UnsupportedProtocol
      - ProtocolError
        · LocalProtocolError
        · RemoteProtocolError
      - NetworkError
        · ConnectError
        · ReadError
        · WriteError
        · CloseError
    + StreamError
      - StreamClosed
* InvalidURL
"""

from __future__ import annotations

import typing

if typing.TYPE_CHECKING:
    from ._models import Request

__all__ = [
    "CloseError",
    "ConnectError",
    "HTTPError",
    "InvalidURL",
    "LocalProtocolError",
    "NetworkError",
    "ProtocolError",
    "ReadError",
    "RemoteProtocolError",
    "RequestError",
    "StreamClosed",
    "StreamError",
    "TransportError",
    "UnsupportedProtocol",
    "WriteError",
]


class HTTPError(Exception):
    """
    Base class for `RequestError`.

    Under normal usage this is the exception to catch:

    ```
    try:
        response = httpq.get("https://www.example.com")
    except httpq.HTTPError as exc:
        print(f"HTTP Exception for {exc.request.url} - {exc}")
    ```
    """

    def __init__(self, message: str, **kwargs: typing.Any) -> None:
        super().__init__(message)
        self._request: Request | None = kwargs.get("request", None)

    @property
    def request(self) -> Request:
        if self._request is None:
            raise RuntimeError("The .request property has not been set.")
        return self._request

    @request.setter
    def request(self, request: Request) -> None:
        self._request = request


class RequestError(HTTPError):
    """
    Base class for all exceptions that may occur when issuing a `.request()`.
    """

    def __init__(self, message: str, *, request: Request | None = None) -> None:
        super().__init__(message, request=request)


class TransportError(RequestError):
    """
    Base class for all exceptions that occur at the level of the Transport API.
    """


class UnsupportedProtocol(TransportError):
    """
    Attempted to make a request to a URL scheme with no transport support.
    """


class ProtocolError(TransportError):
    """
    The protocol was violated.
    """


class LocalProtocolError(ProtocolError):
    """
    A protocol was violated by the client, e.g. writing a body to a connection
    that has output disabled.
    """


class RemoteProtocolError(ProtocolError):
    """
    The protocol was violated by the server, e.g. a malformed status line.
    """


class NetworkError(TransportError):
    """
    The failure occurred while interacting with the network.
    """


class ConnectError(NetworkError):
    """
    Failed to establish a connection.
    """


class ReadError(NetworkError):
    """
    Failed to receive data from the network.
    """


class WriteError(NetworkError):
    """
    Failed to send data through the network.
    """


class CloseError(NetworkError):
    """
    Failed to close a connection.
    """


class StreamError(RequestError):
    """
    The base class for stream exceptions.
    """


class StreamClosed(StreamError):
    """
    Attempted to read the body lines of a response that was already closed.
    """

    def __init__(self) -> None:
        message = (
            "Attempted to read the response body after it was closed. "
            "Body lines can only be consumed once."
        )
        super().__init__(message)


class InvalidURL(Exception):
    """
    URL is improperly formed or cannot be parsed.
    """
