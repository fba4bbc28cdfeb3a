"""Socket setup and simple reads and writes on descriptors."""

from __future__ import annotations

import os
import select
import signal
import socket
import threading

LISTEN_BACKLOG = 2048

# Seconds a read waits for a non-blocking descriptor to become readable.
_READ_WAIT = 5.0


def ignore_sigpipe() -> None:
    """Ignore SIGPIPE so that writing to a closed peer fails with an error.

    Signal handlers can only be installed from the main thread; elsewhere
    this does nothing, since the interpreter already ignores SIGPIPE.
    """
    if not hasattr(signal, "SIGPIPE"):
        return
    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGPIPE, signal.SIG_IGN)


def set_nonblocking(fd: int) -> None:
    """Put ``fd`` in non-blocking mode; OSError if that fails."""
    os.set_blocking(fd, False)


def socket_bind_listen(port: int) -> socket.socket:
    """Return a TCP socket listening on ``port`` on every IPv4 address.

    Raises ValueError for a port outside 0..65535 and OSError if the
    socket cannot be set up.
    """
    if not 0 <= port <= 65535:
        raise ValueError(f"port {port} is not in range")
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("", port))
        sock.listen(LISTEN_BACKLOG)
    except OSError:
        sock.close()
        raise
    return sock


def _wait_readable(fd: int) -> None:
    readable, _, _ = select.select([fd], [], [], _READ_WAIT)
    if not readable:
        raise TimeoutError(f"descriptor {fd} stayed unreadable")


def _read_some(fd: int, size: int) -> bytes:
    while True:
        try:
            return os.read(fd, size)
        except BlockingIOError:
            _wait_readable(fd)


def read(fd: int, size: int) -> bytes:
    """Read once, at most ``size`` bytes; empty at end of stream."""
    return _read_some(fd, size)


def write(fd: int, data: bytes) -> int:
    """Write once; return the number of bytes written."""
    return os.write(fd, data)


def read_until(fd: int, delimiter: bytes | str) -> bytes:
    """Read byte by byte until the data ends with ``delimiter``.

    The result includes the delimiter. If the stream ends first, what was
    read is returned without it.
    """
    if isinstance(delimiter, str):
        delimiter = delimiter.encode("utf-8")
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    buffer = bytearray()
    while not buffer.endswith(delimiter):
        chunk = _read_some(fd, 1)
        if not chunk:
            break
        buffer += chunk
    return bytes(buffer)