"""Double-buffered logger that writes to disk from a background thread."""

from __future__ import annotations

import threading

from xweb.latch import CountDownLatch
from xweb.logfile import LogFile
from xweb.logstream import K_LARGE_BUFFER_SIZE, FixedBuffer

# Past this many pending buffers, all but the first two are dropped.
_MAX_PENDING_BUFFERS = 25


class AsyncLogger:
    """Collects log lines from producer threads and writes them in batches."""

    def __init__(
        self,
        base_name: str,
        flush_interval: float = 2,
        buffer_size: int = K_LARGE_BUFFER_SIZE,
    ) -> None:
        if len(str(base_name)) <= 1:
            raise ValueError("log file name is too short")
        self.base_name = base_name
        self.flush_interval = flush_interval
        self._buffer_size = buffer_size
        self._cond = threading.Condition()
        self._current = FixedBuffer(buffer_size)
        self._next: FixedBuffer | None = FixedBuffer(buffer_size)
        self._buffers: list[FixedBuffer] = []
        self._running = False
        self._thread: threading.Thread | None = None
        self._latch = CountDownLatch(1)

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start the writer thread and wait until it runs."""
        if self._running:
            raise RuntimeError("logger already started")
        self._running = True
        self._latch = CountDownLatch(1)
        self._thread = threading.Thread(target=self._run, name="async-logger", daemon=True)
        self._thread.start()
        self._latch.wait()

    def stop(self) -> None:
        """Stop the writer thread after it writes what is pending."""
        with self._cond:
            if not self._running:
                return
            self._running = False
            self._cond.notify()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def append(self, data: bytes) -> None:
        """Queue ``data`` for writing."""
        with self._cond:
            if self._current.available() > len(data):
                self._current.append(data)
                return
            self._buffers.append(self._current)
            if self._next is not None:
                self._current, self._next = self._next, None
            else:
                self._current = FixedBuffer(self._buffer_size)
            self._current.append(data)
            self._cond.notify()

    def __enter__(self) -> "AsyncLogger":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _run(self) -> None:
        self._latch.count_down()
        spare1: FixedBuffer | None = FixedBuffer(self._buffer_size)
        spare2: FixedBuffer | None = FixedBuffer(self._buffer_size)
        with LogFile(self.base_name) as output:
            running = True
            while running:
                with self._cond:
                    if not self._buffers and self._running:
                        self._cond.wait(self.flush_interval)
                    self._buffers.append(self._current)
                    self._current, spare1 = spare1, None
                    to_write, self._buffers = self._buffers, []
                    if self._next is None:
                        self._next, spare2 = spare2, None
                    running = self._running

                if len(to_write) > _MAX_PENDING_BUFFERS:
                    del to_write[2:]
                for buffer in to_write:
                    output.append(buffer.data())
                del to_write[2:]

                if spare1 is None:
                    spare1 = to_write.pop()
                    spare1.reset()
                if spare2 is None:
                    spare2 = to_write.pop()
                    spare2.reset()
                output.flush()