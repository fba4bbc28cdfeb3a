"""Readiness polling for channels, with per-channel timers."""

from __future__ import annotations

import selectors
import threading
import time

from xweb.channel import Channel, Events
from xweb.timer import Clock, TimerManager, TimerNode

_READ_EVENTS = Events.IN | Events.PRI | Events.RDHUP


def _selector_mask(events: Events) -> int:
    mask = 0
    if events & _READ_EVENTS:
        mask |= selectors.EVENT_READ
    if events & Events.OUT:
        mask |= selectors.EVENT_WRITE
    return mask


class Poller:
    """Watches channel descriptors and reports the ready channels."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._selector = selectors.DefaultSelector()
        self._channels: dict[int, Channel] = {}
        self._lock = threading.Lock()
        self.timers = TimerManager(clock)

    def add(self, channel: Channel, timeout: int = 0) -> None:
        """Watch ``channel``; with a positive ``timeout`` (ms) also start a timer.

        Raises OSError if the descriptor cannot be watched.
        """
        fd = channel.fd
        if timeout > 0:
            self.add_timer(channel, timeout)
        with self._lock:
            self._channels[fd] = channel
            channel.equal_and_update_last_events()
            try:
                self._sync(fd, channel.events)
            except (OSError, ValueError) as exc:
                del self._channels[fd]
                raise OSError(f"cannot watch descriptor {fd}") from exc

    def modify(self, channel: Channel, timeout: int = 0) -> None:
        """Apply a change in ``channel.events``; KeyError if it is not watched."""
        if timeout > 0:
            self.add_timer(channel, timeout)
        fd = channel.fd
        with self._lock:
            watched = self._channels.get(fd)
            if watched is None:
                raise KeyError(fd)
            if channel.equal_and_update_last_events():
                return
            watched.events = channel.events
            try:
                self._sync(fd, channel.events)
            except (OSError, ValueError) as exc:
                del self._channels[fd]
                raise OSError(f"cannot modify descriptor {fd}") from exc

    def remove(self, fd: int) -> bool:
        """Stop watching ``fd``; report whether it was watched."""
        with self._lock:
            channel = self._channels.pop(fd, None)
            try:
                self._selector.unregister(fd)
            except (KeyError, ValueError):
                pass
        return channel is not None

    def poll(self, timeout: float = 1.0) -> list[Channel]:
        """Wait up to ``timeout`` seconds; return the ready channels with ``revents`` set."""
        if not self._selector.get_map():
            time.sleep(timeout)
            return []
        selected = self._selector.select(timeout)
        ready: list[Channel] = []
        with self._lock:
            for key, mask in selected:
                channel = self._channels.get(key.fd)
                if channel is None:
                    continue
                revents = Events.NONE
                if mask & selectors.EVENT_READ:
                    revents |= Events.IN
                if mask & selectors.EVENT_WRITE:
                    revents |= Events.OUT
                channel.revents = revents
                ready.append(channel)
        return ready

    def handle_expired(self) -> None:
        self.timers.handle_expired_event()

    def add_timer(self, channel: Channel | None, timeout: int) -> TimerNode:
        """Start a ``timeout`` ms timer for ``channel``; ValueError without one."""
        if channel is None:
            raise ValueError("timer needs a channel")
        return self.timers.add_timer(channel, timeout)

    def close(self) -> None:
        with self._lock:
            self._channels.clear()
            self._selector.close()

    def __contains__(self, fd: object) -> bool:
        with self._lock:
            return fd in self._channels

    def __len__(self) -> int:
        with self._lock:
            return len(self._channels)

    def _sync(self, fd: int, events: Events) -> None:
        mask = _selector_mask(events)
        try:
            self._selector.get_key(fd)
            registered = True
        except KeyError:
            registered = False
        if not mask:
            if registered:
                self._selector.unregister(fd)
        elif registered:
            self._selector.modify(fd, mask)
        else:
            self._selector.register(fd, mask)