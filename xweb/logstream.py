"""Fixed-capacity byte buffers and the stream that formats log lines into them."""

from __future__ import annotations

K_SMALL_BUFFER_SIZE = 4096
K_LARGE_BUFFER_SIZE = 4096 * 1024

# Room a formatted number may need; numbers are dropped when less is left.
K_MAX_NUMERIC_SIZE = 32


class FixedBuffer:
    """A byte buffer that never grows beyond ``size`` bytes."""

    def __init__(self, size: int = K_SMALL_BUFFER_SIZE) -> None:
        if size <= 0:
            raise ValueError("buffer size must be positive")
        self.size = size
        self._data = bytearray()

    def append(self, data: bytes) -> bool:
        """Append ``data`` if it fits with room to spare; report whether it did."""
        if self.available() > len(data):
            self._data += data
            return True
        return False

    def _extend(self, data: bytes) -> None:
        self._data += data[: self.available()]

    def reset(self) -> None:
        """Forget the contents, keeping the capacity."""
        self._data.clear()

    def available(self) -> int:
        """Bytes still free."""
        return self.size - len(self._data)

    def data(self) -> bytes:
        """The bytes written so far."""
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)


class LogStream:
    """Formats values into a small fixed buffer, one log line at a time.

    When ``show`` is false every formatted value is discarded; raw bytes
    handed to ``append`` are still kept.
    """

    def __init__(self, size: int = K_SMALL_BUFFER_SIZE) -> None:
        self._buffer = FixedBuffer(size)
        self.show = True

    def __lshift__(self, value: object) -> "LogStream":
        if not self.show:
            return self
        if value is None:
            self._buffer.append(b"(null)")
        elif isinstance(value, bool):
            self._buffer.append(b"1" if value else b"0")
        elif isinstance(value, int):
            self._append_number(str(value))
        elif isinstance(value, float):
            self._append_number("%.12g" % value)
        elif isinstance(value, str):
            self._buffer.append(value.encode("utf-8"))
        elif isinstance(value, (bytes, bytearray)):
            self._buffer.append(bytes(value))
        else:
            raise TypeError(f"cannot log a value of type {type(value).__name__}")
        return self

    def _append_number(self, text: str) -> None:
        if self._buffer.available() >= K_MAX_NUMERIC_SIZE:
            self._buffer._extend(text.encode("ascii")[: K_MAX_NUMERIC_SIZE - 1])

    def append(self, data: bytes) -> None:
        """Append raw bytes, whether or not the stream is shown."""
        self._buffer.append(data)

    def reset_buffer(self) -> None:
        self._buffer.reset()

    def buffer(self) -> FixedBuffer:
        return self._buffer