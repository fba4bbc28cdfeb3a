"""A worker pool that grows when busy and shrinks when idle."""

from __future__ import annotations

import os
import threading
from collections import deque
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

# Most workers let go in one management round.
_SHRINK_STEP = 2


class ThreadPool:
    """Runs submitted callables on between ``min_threads`` and ``max_threads`` threads.

    A manager thread checks the load every ``manage_interval`` seconds:
    it adds a worker when none is idle and lets up to two go when more
    than half are idle.
    """

    def __init__(
        self,
        min_threads: int = 5,
        max_threads: int | None = None,
        manage_interval: float = 2.0,
    ) -> None:
        if min_threads < 0:
            raise ValueError("min_threads must not be negative")
        self.min_threads = min_threads
        self.max_threads = max_threads if max_threads is not None else (os.cpu_count() or 1)
        self.manage_interval = manage_interval
        self._cond = threading.Condition()
        self._tasks: deque[Callable[[], None]] = deque()
        self._pending: deque[Future] = deque()
        self._workers: dict[int, threading.Thread] = {}
        self._exited: list[int] = []
        self._current = 0
        self._idle = 0
        self._exit_count = 0
        self._started = False
        self._stopped = False
        self._wake_manager = threading.Event()
        self._manager: threading.Thread | None = None

    @property
    def current_threads(self) -> int:
        with self._cond:
            return self._current

    @property
    def idle_threads(self) -> int:
        with self._cond:
            return self._idle

    def start(self) -> None:
        """Start the minimum number of workers and the manager."""
        with self._cond:
            if self._stopped:
                raise RuntimeError("pool has been shut down")
            if self._started:
                raise RuntimeError("pool already started")
            self._started = True
            for _ in range(self.min_threads):
                self._spawn_locked()
        self._manager = threading.Thread(target=self._manage, name="pool-manager", daemon=True)
        self._manager.start()

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue ``fn(*args, **kwargs)``; return a future for its result."""
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = fn(*args, **kwargs)
            except BaseException as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

        with self._cond:
            if self._stopped:
                raise RuntimeError("cannot submit to a pool that has been shut down")
            self._tasks.append(run)
            self._pending.append(future)
            self._cond.notify_all()
        return future

    def shutdown(self) -> None:
        """Stop every thread; queued tasks that never started are cancelled."""
        with self._cond:
            if self._stopped:
                return
            self._stopped = True
            self._tasks.clear()
            pending, self._pending = list(self._pending), deque()
            workers = list(self._workers.values())
            self._workers.clear()
            self._cond.notify_all()
        self._wake_manager.set()
        for future in pending:
            future.cancel()
        for worker in workers:
            worker.join()
        if self._manager is not None:
            self._manager.join()
            self._manager = None

    def __enter__(self) -> "ThreadPool":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _spawn_locked(self) -> None:
        worker = threading.Thread(target=self._work, name="pool-worker", daemon=True)
        self._current += 1
        self._idle += 1
        worker.start()
        self._workers[worker.ident] = worker

    def _work(self) -> None:
        me = threading.get_ident()
        while True:
            with self._cond:
                self._cond.wait_for(
                    lambda: self._stopped or bool(self._tasks) or self._exit_count > 0
                )
                if self._stopped:
                    return
                if self._exit_count > 0:
                    self._exit_count -= 1
                    self._current -= 1
                    self._idle -= 1
                    self._exited.append(me)
                    return
                task = self._tasks.popleft()
                self._pending.popleft()
                self._idle -= 1
            try:
                task()
            finally:
                with self._cond:
                    self._idle += 1

    def _manage(self) -> None:
        while not self._wake_manager.wait(self.manage_interval):
            with self._cond:
                if self._stopped:
                    return
                idle, current = self._idle, self._current
                if idle > current // 2 and current > self.min_threads:
                    self._exit_count = min(_SHRINK_STEP, current - self.min_threads)
                    self._cond.notify_all()
                elif idle == 0 and current < self.max_threads:
                    self._spawn_locked()
                finished = [self._workers.pop(ident) for ident in self._exited if ident in self._workers]
                self._exited.clear()
            for worker in finished:
                worker.join()