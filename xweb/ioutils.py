"""Reading and writing whole buffers on descriptors."""

from __future__ import annotations

import os

_CHUNK = 4096


def readn(fd: int, n: int) -> bytes:
    """Read up to ``n`` bytes, stopping early at end of stream or when nothing is ready."""
    data = bytearray()
    while len(data) < n:
        try:
            chunk = os.read(fd, n - len(data))
        except BlockingIOError:
            break
        if not chunk:
            break
        data += chunk
    return bytes(data)


def read_available(fd: int) -> tuple[bytes, bool]:
    """Read everything ready on a non-blocking ``fd``.

    Returns the data and whether the end of the stream was reached.
    """
    data = bytearray()
    while True:
        try:
            chunk = os.read(fd, _CHUNK)
        except BlockingIOError:
            return bytes(data), False
        if not chunk:
            return bytes(data), True
        data += chunk


def writen(fd: int, data: bytes) -> int:
    """Write ``data`` until done or the descriptor would block; return bytes written."""
    view = memoryview(data)
    written = 0
    while written < len(view):
        try:
            written += os.write(fd, view[written:])
        except BlockingIOError:
            break
    return written