import io
import json
import logging
import socket

import pytest

import httpq
from httpq._transports.default import HTTPConnection


def read_json(response: httpq.Response):
    return json.loads("\n".join(response.body_lines))


def test_get(server):
    response = httpq.get(server.url)
    assert response.status_code == 200
    assert response.reason_phrase == "OK"
    assert response.method == "GET"
    assert response.url == str(server.url)
    assert response.headers["content-type"] == "text/plain"
    assert list(response.body_lines) == ["Hello, world!"]


def test_get_string_url(server):
    response = httpq.request(str(server.url))
    assert list(response.body_lines) == ["Hello, world!"]


def test_default_headers(server):
    response = httpq.get(httpq.build_url(str(server.url) + "echo"))
    headers = dict(read_json(response)["headers"])
    assert headers["user-agent"] == httpq.USER_AGENT
    assert headers["connection"] == "close"


def test_custom_headers_and_cookies(server):
    response = httpq.get(
        str(server.url) + "echo",
        headers={"User-Agent": "tests", "X-Trace": "1"},
        cookies={"a": "1", "b": "two words"},
    )
    headers = dict(read_json(response)["headers"])
    assert headers["user-agent"] == "tests"
    assert headers["x-trace"] == "1"
    assert headers["cookie"] == "a=1; b=two words"


def test_query(server):
    url = httpq.build_url(str(server.url) + "echo", {"q": "a b", "lang": "en"})
    data = read_json(httpq.get(url))
    assert data["query"] == "q=a+b&lang=en"


def test_fragment_is_not_sent(server):
    url = httpq.build_url(str(server.url) + "echo", {"q": "1"}, "top")
    data = read_json(httpq.get(url))
    assert data["path"] == "/echo"
    assert data["query"] == "q=1"


def test_method(server):
    data = read_json(httpq.request(str(server.url) + "echo", "delete"))
    assert data["method"] == "DELETE"


def test_post_text(server):
    data = read_json(httpq.post(str(server.url) + "echo", "Hello, wörld!"))
    assert data["method"] == "POST"
    assert data["body"] == "Hello, wörld!"


def test_post_form(server):
    data = read_json(httpq.post(str(server.url) + "echo", {"name": "a b", "x": "&="}))
    headers = dict(data["headers"])
    assert headers["content-type"] == "application/x-www-form-urlencoded"
    assert data["body"] == "name=a+b&x=%26%3D"


def test_put_stream(server):
    payload = b"line one\nline two\n" * 200
    response = httpq.put(str(server.url) + "echo_body", io.BytesIO(payload))
    assert response.headers["content-type"] == "application/octet-stream"
    assert list(response.body_lines) == ["line one", "line two"] * 200


def test_error_status(server):
    response = httpq.get(str(server.url) + "status/404")
    assert response.status_code == 404
    assert response.reason_phrase == "Not Found"
    assert response.is_error
    assert list(response.body_lines) == ["Status 404", "from the error stream"]


def test_server_error_status(server):
    response = httpq.get(str(server.url) + "status/500")
    assert response.status_code == 500
    assert list(response.body_lines) == ["Status 500", "from the error stream"]


def test_cookies(server):
    response = httpq.get(str(server.url) + "cookies")
    assert response.cookies == {"session": "abc123", "theme": "dark"}
    assert "set-cookie" not in response.headers
    assert response.header_lookup("Set-Cookie") == "session=abc123; theme=dark"
    response.close()


def test_header_lookup(server):
    with httpq.get(server.url) as response:
        assert response.header_lookup("Content-Type") == "text/plain"
        assert response.get_header("CONTENT-LENGTH") == "13"


def test_lines(server):
    response = httpq.get(str(server.url) + "lines")
    assert list(response.body_lines) == ["first line", "second line", "third line"]


def test_charset(server):
    response = httpq.get(str(server.url) + "latin1")
    assert list(response.body_lines) == ["café crème"]


def test_head(server):
    response = httpq.head(server.url)
    assert response.status_code == 200
    assert list(response.body_lines) == []


def test_body_lines_released_after_read(server):
    response = httpq.get(str(server.url) + "lines")
    assert next(response.body_lines) == "first line"
    response.close()
    assert response.body_lines.is_closed
    with pytest.raises(httpq.StreamClosed):
        next(response.body_lines)


def test_logging(server, caplog):
    caplog.set_level(logging.INFO, logger="httpq")
    httpq.get(server.url).close()
    records = [record for record in caplog.record_tuples if record[0] == "httpq"]
    assert records == [
        ("httpq", logging.INFO, f'HTTP Request: GET {server.url} "200 OK"'),
    ]


def test_connection_refused(unused_port):
    with pytest.raises(httpq.ConnectError):
        httpq.get(f"http://127.0.0.1:{unused_port}/")


def test_ipv6_host_connects_on_default_port(monkeypatch):
    addresses = []

    def create_connection(address, *args, **kwargs):
        addresses.append(address)
        raise ConnectionRefusedError(111, "Connection refused")

    monkeypatch.setattr(socket, "create_connection", create_connection)
    with pytest.raises(httpq.ConnectError):
        httpq.get("http://[::1]/")
    assert addresses == [("::1", 80)]


def test_request_attached_to_transport_error(unused_port):
    url = f"http://127.0.0.1:{unused_port}/"
    with pytest.raises(httpq.HTTPError) as exc:
        httpq.get(url)
    assert exc.value.request.url == url
    assert exc.value.request.method == "GET"


def test_request_attached_to_unsupported_protocol():
    with pytest.raises(httpq.UnsupportedProtocol) as exc:
        httpq.get("ftp://example.org/")
    assert exc.value.request.url == "ftp://example.org/"


def test_unknown_host():
    with pytest.raises(httpq.TransportError):
        httpq.get("http://nonexistent.invalid/")


def test_send_before_connect():
    connection = HTTPConnection(httpq.URL("http://example.org/"))
    with pytest.raises(httpq.LocalProtocolError):
        connection._send("GET", {}, None)


def test_connection_refused_is_transport_error(unused_port):
    with pytest.raises(httpq.TransportError):
        httpq.post(f"http://127.0.0.1:{unused_port}/", {"a": "1"})


def test_unsupported_protocol():
    with pytest.raises(httpq.UnsupportedProtocol):
        httpq.get("ftp://example.org/")


def test_invalid_url():
    with pytest.raises(httpq.InvalidURL):
        httpq.get("http://[::zz]/")
