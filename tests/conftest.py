import json
import socket
import threading
import time
import typing

import pytest
from uvicorn.config import Config
from uvicorn.server import Server

import httpq

Message = typing.Dict[str, typing.Any]
Receive = typing.Callable[[], typing.Awaitable[Message]]
Send = typing.Callable[
    [typing.Dict[str, typing.Any]], typing.Coroutine[None, None, None]
]
Scope = typing.Dict[str, typing.Any]


async def app(scope: Scope, receive: Receive, send: Send) -> None:
    assert scope["type"] == "http"
    if scope["path"].startswith("/status"):
        await status_code(scope, receive, send)
    elif scope["path"].startswith("/echo_body"):
        await echo_body(scope, receive, send)
    elif scope["path"].startswith("/echo"):
        await echo_request(scope, receive, send)
    elif scope["path"].startswith("/cookies"):
        await set_cookies(scope, receive, send)
    elif scope["path"].startswith("/lines"):
        await lines(scope, receive, send)
    elif scope["path"].startswith("/latin1"):
        await latin1(scope, receive, send)
    else:
        await hello_world(scope, receive, send)


async def read_body(receive: Receive) -> bytes:
    body = b""
    more_body = True
    while more_body:
        message = await receive()
        body += message.get("body", b"")
        more_body = message.get("more_body", False)
    return body


async def respond(
    send: Send,
    body: bytes,
    status: int = 200,
    content_type: bytes = b"text/plain",
    extra_headers: typing.Optional[typing.List[typing.List[bytes]]] = None,
) -> None:
    headers = [
        [b"content-type", content_type],
        [b"content-length", str(len(body)).encode()],
    ]
    headers.extend(extra_headers or [])
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body})


async def hello_world(scope: Scope, receive: Receive, send: Send) -> None:
    await respond(send, b"Hello, world!")


async def status_code(scope: Scope, receive: Receive, send: Send) -> None:
    status = int(scope["path"].replace("/status/", ""))
    await respond(send, f"Status {status}\nfrom the error stream".encode(), status=status)


async def echo_body(scope: Scope, receive: Receive, send: Send) -> None:
    body = await read_body(receive)
    await respond(send, body, content_type=b"application/octet-stream")


async def echo_request(scope: Scope, receive: Receive, send: Send) -> None:
    body = await read_body(receive)
    data = {
        "method": scope["method"],
        "path": scope["path"],
        "query": scope["query_string"].decode(),
        "headers": [[name.decode(), value.decode()] for name, value in scope["headers"]],
        "body": body.decode(),
    }
    await respond(send, json.dumps(data).encode(), content_type=b"application/json")


async def set_cookies(scope: Scope, receive: Receive, send: Send) -> None:
    await respond(
        send,
        b"Cookies set",
        extra_headers=[[b"set-cookie", b"session=abc123; theme=dark"]],
    )


async def lines(scope: Scope, receive: Receive, send: Send) -> None:
    await respond(send, b"first line\nsecond line\r\nthird line")


async def latin1(scope: Scope, receive: Receive, send: Send) -> None:
    await respond(
        send,
        "café crème".encode("latin-1"),
        content_type=b"text/plain; charset=iso-8859-1",
    )


class TestServer(Server):
    @property
    def url(self) -> httpq.URL:
        port = self.servers[0].sockets[0].getsockname()[1]
        return httpq.URL(f"http://{self.config.host}:{port}/")

    def install_signal_handlers(self) -> None:
        # Signal handlers can only be installed from the main thread.
        pass


def serve_in_thread(server: TestServer) -> typing.Iterator[TestServer]:
    thread = threading.Thread(target=server.run)
    thread.start()
    try:
        while not server.started:
            time.sleep(1e-3)
        yield server
    finally:
        server.should_exit = True
        thread.join()


@pytest.fixture(scope="session")
def server() -> typing.Iterator[TestServer]:
    config = Config(app=app, lifespan="off", loop="asyncio", host="127.0.0.1", port=0)
    server = TestServer(config=config)
    yield from serve_in_thread(server)


@pytest.fixture
def unused_port() -> int:
    """A local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
