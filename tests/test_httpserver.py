import socket
import threading

import pytest

from xweb.httpserver import HttpServer
from xweb.logger import get_log_file_name, set_log_file_name, shutdown
from xweb.response import HttpResponse
from xweb.status import StatusCode
from xweb.threadpool import ThreadPool

HELLO_BODY = (
    "<!DOCTYPE html>\r\n"
    "<html>\r\n"
    "<head>\r\n"
    "    <title>xweb</title>\r\n"
    "</head>\r\n"
    "<body>\r\n"
    "    <h1>Run , Success!</h1>\r\n"
    "</body>\r\n"
    "</html>"
)

EMPTY_RESPONSE = b"HTTP/1.1 200 OK\r\n\r\n\r\n"


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path):
    previous = get_log_file_name()
    shutdown()
    set_log_file_name(str(tmp_path / "server.log"))
    yield
    shutdown()
    set_log_file_name(previous)


def make_app():
    app = HttpServer(pool=ThreadPool(min_threads=2, max_threads=4), poll_timeout=0.05)

    def hello(ctx):
        ctx.resp.body = HELLO_BODY
        ctx.resp.code = StatusCode.OK
        ctx.resp.set_content_type("text/html")
        ctx.resp.set_content_length(len(HELLO_BODY))

    def echo(ctx):
        ctx.resp.body = ctx.req.body
        ctx.resp.set_content_length(len(ctx.req.body))

    def greet(ctx):
        text = "hi " + ctx.req.route.get_param("name")
        ctx.resp.body = text
        ctx.resp.set_content_length(len(text))

    app.get("/hello", hello)
    app.post("/echo", echo)
    app.get("/greet", greet)
    return app


@pytest.fixture
def serve():
    servers = []

    def start(app):
        thread = threading.Thread(target=app.run, args=(0,), daemon=True)
        thread.start()
        assert app.ready.wait(5)
        servers.append((app, thread))
        return app.port

    yield start
    for app, thread in servers:
        app.stop()
        thread.join(5)


def recv_response(sock):
    data = b""
    while True:
        chunk = sock.recv(65536)
        assert chunk, "connection closed before a full response"
        data += chunk
        if b"\r\n\r\n" not in data:
            continue
        resp = HttpResponse.parse(data.decode("utf-8"))
        expected = int(resp.header["Content-Length"] or 0)
        if len(resp.body.encode("utf-8")) >= expected:
            return resp


def recv_exactly(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def test_get_hello(serve):
    port = serve(make_app())
    with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
        client.sendall(b"GET /hello HTTP/1.1\r\nHost: localhost\r\n\r\n")
        resp = recv_response(client)
    assert resp.code == StatusCode.OK
    assert resp.header["Content-Type"] == "text/html"
    assert resp.header["Content-Length"] == str(len(HELLO_BODY))
    assert resp.body == HELLO_BODY


def test_connection_is_kept_alive(serve):
    port = serve(make_app())
    with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
        for _ in range(2):
            client.sendall(b"GET /hello HTTP/1.1\r\nHost: localhost\r\n\r\n")
            assert recv_response(client).body == HELLO_BODY


def test_post_body_is_read(serve):
    port = serve(make_app())
    with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
        client.sendall(b"POST /echo HTTP/1.1\r\nContent-Length: 5\r\n\r\nhello")
        resp = recv_response(client)
    assert resp.body == "hello"


def test_query_parameters_reach_handler(serve):
    port = serve(make_app())
    with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
        client.sendall(b"GET /greet?name=web HTTP/1.1\r\n\r\n")
        resp = recv_response(client)
    assert resp.body == "hi web"


def test_unknown_route_gets_empty_response(serve):
    port = serve(make_app())
    with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
        client.sendall(b"GET /missing HTTP/1.1\r\n\r\n")
        assert recv_exactly(client, len(EMPTY_RESPONSE)) == EMPTY_RESPONSE


def test_wrong_method_gets_empty_response(serve):
    port = serve(make_app())
    with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
        client.sendall(b"POST /hello HTTP/1.1\r\nContent-Length: 0\r\n\r\n")
        assert recv_exactly(client, len(EMPTY_RESPONSE)) == EMPTY_RESPONSE


def test_post_without_content_length_closes_connection(serve):
    port = serve(make_app())
    with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
        client.sendall(b"POST /echo HTTP/1.1\r\n\r\n")
        assert client.recv(1) == b""


def test_stop_closes_listener_and_run_is_single_use():
    app = make_app()
    thread = threading.Thread(target=app.run, args=(0,), daemon=True)
    thread.start()
    assert app.ready.wait(5)
    port = app.port
    app.stop()
    thread.join(5)
    assert not thread.is_alive()
    with pytest.raises(OSError):
        socket.create_connection(("127.0.0.1", port), timeout=5)
    with pytest.raises(RuntimeError):
        app.run(0)


def test_port_before_run_raises():
    with pytest.raises(RuntimeError):
        HttpServer().port