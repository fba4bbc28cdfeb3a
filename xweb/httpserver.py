"""An HTTP server dispatching requests to the handlers of an HttpGroup."""

from __future__ import annotations

import functools
import threading

from xweb.channel import Channel, Events
from xweb.context import HttpContext
from xweb.eventloop import EventLoop
from xweb.group import HttpGroup
from xweb.logger import Level, log
from xweb.method import Method
from xweb.request import HttpRequest
from xweb.socketutils import read, read_until, write
from xweb.tcpserver import TcpServer
from xweb.threadpool import ThreadPool

DEFAULT_THREAD_NUM = 5

_HEAD_END = b"\r\n\r\n"


class HttpServer(HttpGroup):
    """Serves registered routes over TCP; requests are handled on a thread pool."""

    def __init__(
        self,
        route: str = "",
        thread_num: int = DEFAULT_THREAD_NUM,
        pool: ThreadPool | None = None,
        poll_timeout: float = 1.0,
    ) -> None:
        super().__init__(route)
        self.thread_num = thread_num
        self.poll_timeout = poll_timeout
        self.pool = pool if pool is not None else ThreadPool()
        self.server: TcpServer | None = None
        self.ready = threading.Event()
        self._channels: set[Channel] = set()
        self._lock = threading.Lock()

    @property
    def port(self) -> int:
        """The port being listened on; RuntimeError before ``run``."""
        if self.server is None:
            raise RuntimeError("server is not running")
        return self.server.port

    def run(self, port: int) -> None:
        """Listen on ``port`` and serve until ``stop`` is called."""
        if self.server is not None:
            raise RuntimeError("server already run")
        self.server = TcpServer(port, self.thread_num, poll_timeout=self.poll_timeout)
        self.server.set_callback(self._new_event)
        self.pool.start()
        self.ready.set()
        self.server.start()

    def stop(self) -> None:
        """Stop listening, stop the workers and close open connections."""
        if self.server is not None:
            self.server.stop()
        self.pool.shutdown()
        with self._lock:
            channels = list(self._channels)
            self._channels.clear()
        for channel in channels:
            channel.close()

    def _new_event(self, fd: int, loop: EventLoop) -> None:
        channel = Channel(loop, fd)
        channel.events = Events.IN | Events.ET
        channel.read_handler = functools.partial(self._handle_read, channel)
        channel.error_handler = self._handle_error
        channel.write_handler = self._handle_write
        channel.conn_handler = functools.partial(self._handle_conn, channel)
        with self._lock:
            self._channels.add(channel)
        loop.poller_add(channel)

    def _handle_read(self, channel: Channel) -> None:
        # Stop watching until the worker is done, so the request is read once.
        channel.events = Events.NONE
        self._update(channel)
        try:
            self.pool.submit(self._real_handler, channel)
        except RuntimeError:
            self._close(channel)

    def _handle_write(self) -> None:
        log(Level.INFO, "write event comes")

    def _handle_error(self) -> None:
        log(Level.ERROR, "error comes")

    def _handle_conn(self, channel: Channel) -> None:
        if channel.fd >= 0:
            self._update(channel)

    def _update(self, channel: Channel) -> None:
        if channel.loop is None:
            return
        try:
            channel.loop.poller_mod(channel)
        except (KeyError, OSError):
            pass

    def _close(self, channel: Channel) -> None:
        with self._lock:
            if channel not in self._channels:
                return
            self._channels.discard(channel)
        channel.close()

    def _real_handler(self, channel: Channel) -> None:
        fd = channel.fd
        if fd < 0:
            return
        try:
            head = read_until(fd, _HEAD_END)
        except OSError:
            log(Level.ERROR, "read failed!")
            self._close(channel)
            return
        if not head.endswith(_HEAD_END):
            log(Level.ERROR, "the connection is close")
            self._close(channel)
            return

        text = head.decode("utf-8", "replace")
        log(Level.INFO, text)
        try:
            req = HttpRequest.parse(text)
        except ValueError:
            log(Level.ERROR, "malformed request!")
            self._close(channel)
            return
        log(Level.INFO, str(req.method))
        log(Level.INFO, req.route.path)
        log(Level.INFO, str(req.version))

        length = 0
        if req.method is not Method.GET:
            try:
                length = req.content_length()
            except ValueError:
                length = -1
        if length < 0:
            log(Level.ERROR, "content length error!")
            self._close(channel)
            return

        body = ""
        if length:
            try:
                data = read(fd, length)
            except OSError:
                log(Level.ERROR, "read failed!")
                self._close(channel)
                return
            if not data:
                log(Level.WARN, "body is empty!")
            body = data.decode("utf-8", "replace")
        req.body = body

        ctx = HttpContext(req=req)
        try:
            self.handle(ctx)
        except Exception as exc:
            log(Level.ERROR, "handler failed: ", str(exc))
            self._close(channel)
            return

        payload = str(ctx.resp).encode("utf-8")
        try:
            written = write(fd, payload)
        except OSError:
            written = -1
        if written <= 0:
            log(Level.ERROR, "write failed!")
            self._close(channel)
            return

        channel.events = Events.IN | Events.ET
        self._update(channel)