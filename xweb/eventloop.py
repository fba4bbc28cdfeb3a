"""The reactor loop: poll, dispatch ready channels, expire timers."""

from __future__ import annotations

import socket
import threading

from xweb.channel import Channel
from xweb.poller import Poller


class EventLoop:
    """Runs the poll-and-dispatch cycle until ``stop_loop`` is called.

    A stop requested before ``loop`` starts makes the next run return at once.
    """

    def __init__(self, poller: Poller | None = None, poll_timeout: float = 1.0) -> None:
        self.poller = poller if poller is not None else Poller()
        self.poll_timeout = poll_timeout
        self._lock = threading.Lock()
        self._looping = False
        self._quit = False
        self._handling = False

    @property
    def looping(self) -> bool:
        return self._looping

    @property
    def event_handling(self) -> bool:
        return self._handling

    def loop(self) -> None:
        """Dispatch events until stopped; RuntimeError if already looping."""
        with self._lock:
            if self._looping:
                raise RuntimeError("event loop is already running")
            self._looping = True
        try:
            while not self._quit:
                ready = self.poller.poll(self.poll_timeout)
                self._handling = True
                for channel in ready:
                    channel.handle_events()
                self._handling = False
                self.poller.handle_expired()
        finally:
            self._handling = False
            self._quit = False
            self._looping = False

    def stop_loop(self) -> None:
        self._quit = True

    def poller_add(self, channel: Channel, timeout: int = 0) -> None:
        self.poller.add(channel, timeout)

    def poller_mod(self, channel: Channel, timeout: int = 0) -> None:
        self.poller.modify(channel, timeout)

    def poller_del(self, target: Channel | int) -> bool:
        """Stop watching a channel or descriptor; report whether it was watched."""
        fd = target if isinstance(target, int) else target.fd
        return self.poller.remove(fd)

    def shut_down(self, channel: Channel) -> None:
        """Shut down the writing side of the channel's socket."""
        sock = socket.socket(fileno=channel.fd)
        try:
            sock.shutdown(socket.SHUT_WR)
        finally:
            sock.detach()

    def close(self) -> None:
        self.poller.close()