"""HTTP header block."""

from __future__ import annotations

from collections.abc import Iterator

from xweb.strutils import join, split


class HttpHeader:
    """Ordered map of header names to values."""

    def __init__(self, fields: dict[str, str] | None = None) -> None:
        self.fields: dict[str, str] = dict(fields or {})

    def parse(self, text: str) -> None:
        """Add the CRLF-separated ``Name: value`` lines of ``text``.

        A line without a colon is stored with the line itself as both name
        and value. Raises ValueError on empty input.
        """
        if not text:
            raise ValueError("the header is empty")
        for line in split(text, "\r\n"):
            key, colon, rest = line.partition(":")
            value = rest if colon else line
            self.fields[key] = value.lstrip(" ")

    def set(self, key: str, value: str) -> None:
        self.fields[key] = value

    def get(self, key: str) -> str:
        """The value for ``key``, or an empty string."""
        return self.fields.get(key, "")

    def __getitem__(self, key: str) -> str:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpHeader):
            return NotImplemented
        return self.fields == other.fields

    def __repr__(self) -> str:
        return f"HttpHeader({self.fields!r})"

    def __str__(self) -> str:
        return join((f"{key}: {value}" for key, value in self.fields.items()), "\r\n")