# xweb

A compact multi-threaded HTTP server for POSIX systems, written with the
standard library only. It provides:

- a reactor (`xweb.eventloop.EventLoop` over `xweb.poller.Poller`, which uses
  `selectors`) that accepts connections and hands each one to a pool of
  event-loop threads in turn (`xweb.loopthread.EventLoopThreadPool`);
- a worker pool (`xweb.threadpool.ThreadPool`) that grows and shrinks between
  a minimum and a maximum number of threads;
- routing on a character trie, grouped under a common prefix, with per-route
  filters (the HTTP method filter is always checked first);
- parsers and builders for requests, responses, headers, request targets with
  query parameters, methods, versions and status codes;
- an asynchronous, double-buffered file logger.

## Serving requests

```python
from xweb.httpserver import HttpServer
from xweb.status import StatusCode

server = HttpServer()


def hello(ctx):
    body = "<h1>Run, Success!</h1>"
    ctx.resp.body = body
    ctx.resp.code = StatusCode.OK
    ctx.resp.set_content_type("text/html")
    ctx.resp.set_content_length(len(body))


server.get("/hello", hello)
server.run(8080)
```

`run(port)` blocks in the accepting loop; call `server.stop()` from another
thread to stop listening, stop the worker threads and close open connections.
`server.ready` is set once the server is about to start accepting, and
`server.port` gives the port actually bound (useful with port `0`).

Each request is read on a worker of the thread pool: the head up to the blank
line, then, for methods other than GET, a single read of up to
`Content-Length` bytes. A request whose path is not registered, or whose route
filters do not all match, gets the default response (`HTTP/1.1 200 OK` with no
headers and no body). A malformed request, a bad `Content-Length` or a handler
that raises closes the connection.

`HttpServer(route="", thread_num=5, pool=None, poll_timeout=1.0)` takes a
route prefix, the number of event-loop threads, an optional `ThreadPool` and
the poll timeout in seconds.

## Groups and filters

```python
from xweb.context import HttpContext
from xweb.group import HttpGroup
from xweb.request import HttpRequest

group = HttpGroup("/hello")
group.get("/world", lambda ctx: ctx.resp.set_content_type("text/plain"))

ctx = HttpContext(req=HttpRequest.parse("GET /hello/world HTTP/1.1\r\nHost: localhost\r\n\r\n"))
print(group.handle(ctx))  # True: the handler ran
```

Handlers are stored under the full path (`/hello/world` above). `get` and
`post` register for one method; `register_handler(path, method, callback,
filters)` takes any `xweb.method.Method`. Extra filters are instances of
`xweb.filters.HttpFilter` subclasses implementing `is_match(ctx)`.
`group.handle(ctx)` runs the handler when the path is registered and every
filter matches, and returns whether it did.

## Parsing and building messages

```python
from xweb.request import HttpRequest
from xweb.response import HttpResponse
from xweb.route import HttpRoute

req = HttpRequest.parse(
    "POST /submit?key1=value1 HTTP/1.1\r\n"
    "Content-Length: 5\r\n"
    "\r\n"
    "hello"
)
print(req.content_length())   # 5
print(str(req))               # the request written out again

resp = HttpResponse.parse("HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n\r\n<p>hi</p>")
print(resp.header["Content-Type"])  # text/html
print(str(resp))

route = HttpRoute()
route.parse("/hello/hello?key1=value1&key2=value2")
print(route.get_param("key1"))  # value1
route.set_param("key4", "value4")
print(str(route))               # /hello/hello?key1=value1&key2=value2&key4=value4
```

`HttpRequest.parse` and `HttpResponse.parse` raise `ValueError` for messages
without the blank line after the headers or with a malformed first line.
`Method.parse`, `Version.parse`, `StatusCode.from_code` and
`StatusCode.from_reason` return an `UNKNOWN` member for unrecognised input.

## Logging

```python
from xweb.logger import Level, Logger, log, set_log_file_name, shutdown

set_log_file_name("./WebServer.log")
log(Level.INFO, "hello ", "world ", 42)

with Logger(__file__, 10, Level.WARN) as stream:
    stream << "disk at " << 93.5 << "%"

shutdown()
```

Each record holds its level, a local timestamp, the message and its origin
(file name and line). Records below the threshold (`INFO` by default) come
out empty. Records go to a shared `xweb.asynclogger.AsyncLogger`, started on
first use, which writes them to the file from a background thread at least
every two seconds; `shutdown()` stops it and writes what is left.

## Utilities

- `xweb.trie.Trie`: `add`, `get` (raises `KeyError`), `search(key, predicate)`
  and `reset`; keys must be ASCII.
- `xweb.threadpool.ThreadPool`: `start`, `submit` returning a
  `concurrent.futures.Future`, `shutdown`; usable as a context manager.

  ```python
  from xweb.threadpool import ThreadPool

  with ThreadPool(min_threads=2, max_threads=4) as pool:
      print(pool.submit(pow, 3, 4).result())  # 81
  ```
- `xweb.latch.CountDownLatch`, `xweb.strutils.split` / `join`,
  `xweb.socketutils` and `xweb.ioutils` for descriptor reads and writes.

## What it does not do

There is no command-line program; the server is started from Python code.
It does not serve static files, parse chunked bodies, speak TLS or HTTP/2, or
rotate log files. The body of a request is taken from one read, so a body
that arrives in several pieces is cut short.