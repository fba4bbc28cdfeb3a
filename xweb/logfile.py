"""Buffered append-only log files."""

from __future__ import annotations

import os
import threading

_FILE_BUFFER_SIZE = 64 * 1024


class AppendFile:
    """A file opened for appending through a 64 KiB buffer."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file = open(path, "ab", buffering=_FILE_BUFFER_SIZE)

    def append(self, data: bytes) -> None:
        """Write ``data`` into the file buffer."""
        self._file.write(data)

    def flush(self) -> None:
        """Push buffered data to the file."""
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "AppendFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class LogFile:
    """Thread-safe log file that flushes after every ``flush_every_n`` appends."""

    def __init__(self, base_name: str | os.PathLike[str], flush_every_n: int = 1024) -> None:
        self.base_name = base_name
        self.flush_every_n = flush_every_n
        self._count = 0
        self._lock = threading.Lock()
        self._file = AppendFile(base_name)

    def append(self, data: bytes) -> None:
        with self._lock:
            self._file.append(data)
            self._count += 1
            if self._count >= self.flush_every_n:
                self._count = 0
                self._file.flush()

    def flush(self) -> None:
        with self._lock:
            self._file.flush()

    def close(self) -> None:
        with self._lock:
            self._file.close()

    def __enter__(self) -> "LogFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()