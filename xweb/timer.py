"""Timeouts for channels, kept in a min-heap by expiry time."""

from __future__ import annotations

import heapq
import itertools
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xweb.channel import Channel

Clock = Callable[[], float]


def _now_ms(clock: Clock) -> int:
    return int(clock() * 1000)


class TimerNode:
    """A deadline, in milliseconds, attached to a channel."""

    def __init__(self, channel: Channel | None, timeout: int, clock: Clock = time.monotonic) -> None:
        self.channel = channel
        self.deleted = False
        self._clock = clock
        self.expire_time = _now_ms(clock) + timeout

    def update(self, timeout: int) -> None:
        """Move the deadline to ``timeout`` milliseconds from now."""
        self.expire_time = _now_ms(self._clock) + timeout

    def is_valid(self) -> bool:
        """True before the deadline; afterwards marks the node deleted."""
        if _now_ms(self._clock) < self.expire_time:
            return True
        self.deleted = True
        return False

    def clear_req(self) -> None:
        """Detach the channel and mark the node deleted."""
        self.channel = None
        self.deleted = True


class TimerManager:
    """Holds timer nodes and drops the expired ones from the front."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._heap: list[tuple[int, int, TimerNode]] = []
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def add_timer(self, channel: Channel | None, timeout: int) -> TimerNode:
        """Start a timer of ``timeout`` milliseconds for ``channel``."""
        node = TimerNode(channel, timeout, self._clock)
        with self._lock:
            heapq.heappush(self._heap, (node.expire_time, next(self._seq), node))
        return node

    def handle_expired_event(self) -> None:
        """Pop deleted and expired nodes until the earliest one is still live."""
        with self._lock:
            while self._heap:
                node = self._heap[0][2]
                if node.deleted or not node.is_valid():
                    heapq.heappop(self._heap)
                else:
                    break

    def __len__(self) -> int:
        with self._lock:
            return len(self._heap)