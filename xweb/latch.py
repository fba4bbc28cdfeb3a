"""A count-down latch for one-shot thread synchronisation."""

from __future__ import annotations

import threading


class CountDownLatch:
    """Blocks waiters until ``count_down`` has been called ``count`` times."""

    def __init__(self, count: int) -> None:
        self._count = count
        self._cond = threading.Condition()

    @property
    def count(self) -> int:
        with self._cond:
            return self._count

    def wait(self, timeout: float | None = None) -> bool:
        """Wait until the count reaches zero; False if ``timeout`` ran out."""
        with self._cond:
            return self._cond.wait_for(lambda: self._count <= 0, timeout)

    def count_down(self) -> None:
        """Decrement the count, waking waiters when it reaches zero."""
        with self._cond:
            self._count -= 1
            if self._count <= 0:
                self._cond.notify_all()