"""A listening TCP server that hands new connections to a pool of event loops."""

from __future__ import annotations

import os
import threading
from collections.abc import Callable

from xweb.channel import Channel, Events
from xweb.eventloop import EventLoop
from xweb.logger import Level, log
from xweb.loopthread import EventLoopThreadPool
from xweb.socketutils import ignore_sigpipe, set_nonblocking, socket_bind_listen

ConnectionCallback = Callable[[int, EventLoop], None]


class TcpServer:
    """Accepts connections on ``port`` and passes each descriptor to a callback.

    Each accepted descriptor is made non-blocking and given, with the next
    worker loop in turn, to the callback. Without a callback it is closed.
    """

    MAX_FDS = 100000

    def __init__(
        self,
        port: int,
        thread_num: int,
        loop: EventLoop | None = None,
        poll_timeout: float = 1.0,
    ) -> None:
        self.loop = loop if loop is not None else EventLoop(poll_timeout=poll_timeout)
        self.thread_num = thread_num
        self.loop_pool = EventLoopThreadPool(self.loop, thread_num, poll_timeout)
        self._listener = socket_bind_listen(port)
        self._listener.setblocking(False)
        self.port: int = self._listener.getsockname()[1]
        self.accept_channel = Channel(self.loop, self._listener.fileno())
        ignore_sigpipe()
        self._callback: ConnectionCallback | None = None
        self._state_lock = threading.Lock()
        self._started = False
        self._stopped = False
        self._loop_ident: int | None = None
        self._finished = threading.Event()

    def set_callback(self, callback: ConnectionCallback | None) -> None:
        self._callback = callback

    def start(self) -> None:
        """Start the worker loops and run the accepting loop until stopped."""
        with self._state_lock:
            if self._stopped:
                raise RuntimeError("server has been stopped")
            if self._started:
                raise RuntimeError("server already started")
            self._loop_ident = threading.get_ident()
            self._started = True
            self.loop_pool.start()
        channel = self.accept_channel
        channel.events = Events.IN | Events.ET
        channel.read_handler = self.handle_new_conn
        channel.conn_handler = self.handle_this_conn
        try:
            self.loop.poller_add(channel)
            self.loop.loop()
        finally:
            self._close_listener()
            self._finished.set()

    def stop(self) -> None:
        """Stop accepting, stop the worker loops and close the listening socket."""
        with self._state_lock:
            self._stopped = True
            started = self._started
            self.loop.stop_loop()
            self.loop_pool.stop()
        if not started:
            self._close_listener()
        elif threading.get_ident() != self._loop_ident:
            self._finished.wait()

    def handle_new_conn(self) -> None:
        """Accept every pending connection."""
        while True:
            try:
                conn, address = self._listener.accept()
            except (BlockingIOError, InterruptedError):
                return
            except OSError as exc:
                log(Level.ERROR, "accept failed: ", str(exc))
                return
            loop = self.loop_pool.get_next_loop()
            log(Level.INFO, "New connection from ", address[0], ":", address[1])
            fd = conn.detach()
            if fd >= self.MAX_FDS:
                os.close(fd)
                continue
            try:
                set_nonblocking(fd)
            except OSError:
                log(Level.ERROR, "set no block failed!")
                os.close(fd)
                return
            callback = self._callback
            if callback is None:
                os.close(fd)
                continue
            callback(fd, loop)

    def handle_this_conn(self) -> None:
        self.loop.poller_mod(self.accept_channel)

    def _close_listener(self) -> None:
        channel = self.accept_channel
        if channel.fd < 0:
            return
        self.loop.poller_del(channel)
        channel.fd = -1
        self._listener.close()