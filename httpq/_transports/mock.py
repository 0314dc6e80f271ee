from __future__ import annotations

import io
import typing
from dataclasses import dataclass, field

from .._models import Request
from .base import BaseConnection, BaseTransport, RawResponse

if typing.TYPE_CHECKING:
    from .._urls import URL

__all__ = ["MockConnection", "MockResponse", "MockTransport"]


@dataclass
class MockResponse:
    status_code: int = 200
    content: bytes | str = b""
    headers: typing.Sequence[tuple[str, str]] | typing.Mapping[str, str] = field(
        default_factory=list
    )
    reason_phrase: str = ""
    url: str | None = None


Handler = typing.Callable[[Request], MockResponse]


class MockConnection(BaseConnection):
    def __init__(self, url: URL, handler: Handler) -> None:
        super().__init__(url)
        self._handler = handler

    def _connect(self) -> None:
        pass

    def _send(
        self, method: str, headers: dict[str, str], content: bytes | None
    ) -> RawResponse:
        request = Request(url=self.url, method=method, headers=headers, body=content)
        response = self._handler(request)

        body = response.content
        if isinstance(body, str):
            body = body.encode("utf-8")
        headers_list = (
            list(response.headers.items())
            if isinstance(response.headers, typing.Mapping)
            else list(response.headers)
        )
        return RawResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            headers=headers_list,
            stream=io.BytesIO(body),
            url=response.url if response.url is not None else str(self.url),
        )


class MockTransport(BaseTransport):
    """
    Serve requests from a handler function, without touching the network.

    The handler receives a `Request` holding the final method, URL, headers
    and the request body as `bytes` (or `None`), and returns a `MockResponse`.

    def handler(request):
        return httpq.MockResponse(200, content=b"Hello, world!")

    response = httpq.get("https://example.org/", transport=httpq.MockTransport(handler))
    """

    def __init__(self, handler: Handler) -> None:
        self.handler = handler

    def open(self, url: URL) -> MockConnection:
        return MockConnection(url, self.handler)
