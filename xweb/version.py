"""HTTP protocol versions."""

from __future__ import annotations

from enum import Enum


class Version(Enum):
    """An HTTP version as it appears on the request or status line."""

    HTTP_1_0 = "HTTP/1.0"
    HTTP_1_1 = "HTTP/1.1"
    HTTP_2_0 = "HTTP/2.0"
    UNKNOWN = ""

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Return the version named by ``text``, or UNKNOWN."""
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value