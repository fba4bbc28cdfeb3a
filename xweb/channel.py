"""A file descriptor together with the events it watches and their handlers."""

from __future__ import annotations

import os
from collections.abc import Callable
from enum import IntFlag
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xweb.eventloop import EventLoop

Handler = Callable[[], None]


class Events(IntFlag):
    """Readiness flags, with the same bit values as epoll."""

    NONE = 0
    IN = 0x001
    PRI = 0x002
    OUT = 0x004
    ERR = 0x008
    HUP = 0x010
    RDHUP = 0x2000
    ET = 1 << 31


class Channel:
    """Dispatches the events reported for one descriptor to its handlers.

    ``events`` are the events of interest, ``revents`` those that were
    reported, and ``last_events`` what the poller was last told.
    """

    def __init__(self, loop: EventLoop | None = None, fd: int = -1) -> None:
        self.loop = loop
        self.fd = fd
        self.events = Events.NONE
        self.revents = Events.NONE
        self.last_events = Events.NONE
        self.read_handler: Handler | None = None
        self.write_handler: Handler | None = None
        self.error_handler: Handler | None = None
        self.conn_handler: Handler | None = None

    def handle_events(self) -> None:
        """Run the handlers that match ``revents``.

        A hang-up without pending input clears the events of interest and
        runs nothing. Otherwise the error, write and read handlers run in
        that order, as their events apply, and the connection handler last.
        """
        revents = self.revents
        if revents & Events.HUP and not revents & Events.IN:
            self.events = Events.NONE
            return
        if revents & Events.ERR:
            _call(self.error_handler)
        if revents & Events.OUT:
            _call(self.write_handler)
        if revents & (Events.IN | Events.PRI | Events.RDHUP):
            _call(self.read_handler)
        _call(self.conn_handler)

    def equal_and_update_last_events(self) -> bool:
        """Whether ``events`` is unchanged since last time; records it either way."""
        same = self.events == self.last_events
        self.last_events = self.events
        return same

    def close(self) -> None:
        """Stop watching the descriptor and close it."""
        fd, self.fd = self.fd, -1
        if fd < 0:
            return
        if self.loop is not None:
            self.loop.poller_del(fd)
        os.close(fd)

    def __enter__(self) -> "Channel":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Channel(fd={self.fd}, events={self.events!r})"


def _call(handler: Handler | None) -> None:
    if handler is not None:
        handler()