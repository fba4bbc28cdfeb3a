"""Event loops running on their own threads, and a round-robin pool of them."""

from __future__ import annotations

import threading

from xweb.eventloop import EventLoop


class EventLoopThread:
    """Runs one event loop on a background thread."""

    def __init__(self, loop: EventLoop | None = None) -> None:
        self.loop = loop if loop is not None else EventLoop()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the loop's thread; RuntimeError if already started."""
        if self._thread is not None:
            raise RuntimeError("event loop thread already started")
        self._thread = threading.Thread(target=self.loop.loop, name="event-loop", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the loop and wait for its thread."""
        thread, self._thread = self._thread, None
        if thread is None:
            return
        self.loop.stop_loop()
        thread.join()


class EventLoopThreadPool:
    """A fixed set of loop threads handed out in turn."""

    def __init__(self, base_loop: EventLoop | None, num_threads: int, poll_timeout: float = 1.0) -> None:
        if num_threads <= 0:
            raise ValueError("the number of threads must be positive")
        self.base_loop = base_loop
        self._threads = [
            EventLoopThread(EventLoop(poll_timeout=poll_timeout)) for _ in range(num_threads)
        ]
        self._index = 0
        self._lock = threading.Lock()

    @property
    def loops(self) -> list[EventLoop]:
        return [thread.loop for thread in self._threads]

    def start(self) -> None:
        for thread in self._threads:
            thread.start()

    def get_next_loop(self) -> EventLoop:
        """The next loop in turn, starting from the second."""
        with self._lock:
            self._index = (self._index + 1) % len(self._threads)
            return self._threads[self._index].loop

    def stop(self) -> None:
        for thread in self._threads:
            thread.stop()