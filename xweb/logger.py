"""Leveled log lines sent to a shared background file writer."""

from __future__ import annotations

import atexit
import inspect
import threading
import time
from enum import IntEnum

from xweb.asynclogger import AsyncLogger
from xweb.logstream import LogStream


class Level(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4


_log_file_name = "./WebServer.log"
_lock = threading.Lock()
_async_logger: AsyncLogger | None = None
_atexit_registered = False


def set_log_file_name(name: str) -> None:
    """Choose the file the shared writer opens when it next starts."""
    global _log_file_name
    _log_file_name = name


def get_log_file_name() -> str:
    return _log_file_name


def output(data: bytes) -> None:
    """Send ``data`` to the shared writer, starting it on first use."""
    global _async_logger, _atexit_registered
    with _lock:
        if _async_logger is None:
            _async_logger = AsyncLogger(_log_file_name)
            _async_logger.start()
            if not _atexit_registered:
                atexit.register(shutdown)
                _atexit_registered = True
        writer = _async_logger
    writer.append(data)


def shutdown() -> None:
    """Stop the shared writer, writing out everything pending."""
    global _async_logger
    with _lock:
        writer, _async_logger = _async_logger, None
    if writer is not None:
        writer.stop()


class Logger:
    """One log line: a level tag and timestamp, the message, then the source location.

    Lines below ``max_level`` are formatted into nothing.
    """

    def __init__(
        self,
        file_name: str,
        line: int,
        cur_level: Level = Level.INFO,
        max_level: Level = Level.INFO,
    ) -> None:
        self._stream = LogStream()
        self._basename = file_name
        self._line = line
        self.level = cur_level
        self._finished = False
        if cur_level >= max_level:
            self._stream << f"[{cur_level.name}]" << "\t"
        else:
            self._stream.show = False
        self._stream << time.strftime("%Y-%m-%d %H:%M:%S\t\t", time.localtime())

    def stream(self) -> LogStream:
        return self._stream

    def finish(self) -> bytes:
        """Complete the line and send it; return the bytes sent.

        Only the first call sends anything.
        """
        if self._finished:
            return b""
        self._finished = True
        self._stream << "\t\t" << self._basename << self._line << "\n"
        data = self._stream.buffer().data()
        output(data)
        return data

    def __enter__(self) -> LogStream:
        return self._stream

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finish()


def log(level: Level, *args: object) -> bytes:
    """Log ``args`` at ``level`` from the caller's location; return the bytes sent."""
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    file_name = caller.f_code.co_filename if caller is not None else "<unknown>"
    line = caller.f_lineno if caller is not None else 0
    del frame, caller
    logger = Logger(file_name, line, level)
    stream = logger.stream()
    for arg in args:
        stream << arg
    return logger.finish()