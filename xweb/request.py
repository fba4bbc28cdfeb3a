"""HTTP requests: parsing from and rendering to wire text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from xweb.header import HttpHeader
from xweb.method import Method
from xweb.route import HttpRoute
from xweb.strutils import split
from xweb.version import Version

_CRLF = "\r\n"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return int(match.group(1))


@dataclass
class HttpRequest:
    """A request line, its headers and a body."""

    method: Method = Method.UNKNOWN
    version: Version = Version.UNKNOWN
    route: HttpRoute = field(default_factory=HttpRoute)
    header: HttpHeader = field(default_factory=HttpHeader)
    body: str = ""

    @classmethod
    def parse(cls, text: str) -> "HttpRequest":
        """Build a request from its wire text.

        Raises ValueError when the blank line ending the headers is missing
        or the request line does not hold a method, a target and a version.
        """
        head, blank, body = text.partition(_CRLF + _CRLF)
        if not blank:
            raise ValueError("request has no blank line after its headers")
        request_line, _, header_text = head.partition(_CRLF)
        parts = split(request_line, " ")
        if len(parts) < 3:
            raise ValueError(f"malformed request line: {request_line!r}")
        request = cls(
            method=Method.parse(parts[0]),
            version=Version.parse(parts[2]),
            body=body,
        )
        request.route.parse(parts[1])
        if header_text:
            request.header.parse(header_text)
        return request

    def content_length(self) -> int:
        """The Content-Length header as a number; ValueError if it is not one."""
        value = self.header["Content-Length"]
        try:
            return _leading_int(value)
        except ValueError:
            raise ValueError(f"invalid Content-Length: {value!r}") from None

    def __str__(self) -> str:
        request_line = f"{self.method} {self.route} {self.version}{_CRLF}"
        return request_line + str(self.header) + _CRLF + _CRLF + self.body