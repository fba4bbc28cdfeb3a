"""HTTP request methods."""

from __future__ import annotations

from enum import Enum


class Method(Enum):
    """An HTTP request method."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    TRACE = "TRACE"
    CONNECT = "CONNECT"
    UNKNOWN = "UNKNOW"

    @classmethod
    def parse(cls, text: str) -> "Method":
        """Return the method named by ``text``, or UNKNOWN.

        TRACE is rendered but never recognised when parsing.
        """
        method = cls.__members__.get(text)
        if method is None or method in _UNPARSEABLE:
            return cls.UNKNOWN
        return method

    def __str__(self) -> str:
        return self.value


_UNPARSEABLE = frozenset({Method.TRACE, Method.UNKNOWN})