"""
Transport over the standard library `http.client` module.

One `HTTPConnection` is opened per request and closed when the response body
has been read. Redirects are not followed.
"""

from __future__ import annotations

import http.client
import logging
import ssl
import typing

from .._exceptions import (
    CloseError,
    ConnectError,
    LocalProtocolError,
    ReadError,
    RemoteProtocolError,
    UnsupportedProtocol,
    WriteError,
)
from .._urlparse import DEFAULT_PORTS
from .base import BaseConnection, BaseTransport, RawResponse

if typing.TYPE_CHECKING:
    from .._urls import URL

__all__ = ["HTTPConnection", "HTTPTransport"]

logger = logging.getLogger("httpq")

SUPPORTED_SCHEMES = ("http", "https")


class HTTPConnection(BaseConnection):
    def __init__(self, url: URL, ssl_context: ssl.SSLContext | None = None) -> None:
        super().__init__(url)
        self._ssl_context = ssl_context
        self._connection: http.client.HTTPConnection | None = None

    def _connect(self) -> None:
        url = self.url
        # http.client reads the text after the last ":" of a bare IPv6 host as
        # the port unless one is given.
        port = url.port if url.port is not None else DEFAULT_PORTS[url.scheme]
        if url.scheme == "https":
            connection: http.client.HTTPConnection = http.client.HTTPSConnection(
                url.host, port, context=self._ssl_context
            )
        else:
            connection = http.client.HTTPConnection(url.host, port)

        logger.debug("connect host=%r port=%r", url.host, port)
        try:
            connection.connect()
        except OSError as exc:
            connection.close()
            raise ConnectError(str(exc)) from exc
        self._connection = connection

    def _send(
        self, method: str, headers: dict[str, str], content: bytes | None
    ) -> RawResponse:
        if self._connection is None:
            raise LocalProtocolError("Cannot send a request on a connection that is not open.")

        try:
            self._connection.request(method, self.url.raw_path, body=content, headers=headers)
        except OSError as exc:
            raise WriteError(str(exc)) from exc

        try:
            response = self._connection.getresponse()
        except http.client.HTTPException as exc:
            raise RemoteProtocolError(str(exc)) from exc
        except OSError as exc:
            raise ReadError(str(exc)) from exc

        http_version = "HTTP/1.0" if response.version == 10 else "HTTP/1.1"
        return RawResponse(
            status_code=response.status,
            reason_phrase=response.reason,
            headers=response.getheaders(),
            stream=response,
            url=str(self.url),
            http_version=http_version,
        )

    def _close(self) -> None:
        if self._connection is None:
            return
        logger.debug("close host=%r port=%r", self.url.host, self.url.port)
        try:
            self._connection.close()
        except OSError as exc:
            raise CloseError(str(exc)) from exc
        finally:
            self._connection = None


class HTTPTransport(BaseTransport):
    """
    The default transport. Pass an `ssl_context` to control certificate
    verification for `https` URLs.
    """

    def __init__(self, ssl_context: ssl.SSLContext | None = None) -> None:
        self._ssl_context = ssl_context

    def open(self, url: URL) -> HTTPConnection:
        if url.scheme not in SUPPORTED_SCHEMES:
            raise UnsupportedProtocol(
                f"Request URL has an unsupported protocol '{url.scheme}://'."
            )
        return HTTPConnection(url, ssl_context=self._ssl_context)
