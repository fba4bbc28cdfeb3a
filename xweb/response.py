"""HTTP responses: parsing from and rendering to wire text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from xweb.header import HttpHeader
from xweb.status import StatusCode
from xweb.strutils import split
from xweb.version import Version

_CRLF = "\r\n"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class HttpResponse:
    """A status line, its headers and a body."""

    version: Version = Version.HTTP_1_1
    code: StatusCode = StatusCode.OK
    header: HttpHeader = field(default_factory=HttpHeader)
    body: str = ""

    @classmethod
    def parse(cls, text: str) -> "HttpResponse":
        """Build a response from its wire text.

        Raises ValueError when the blank line ending the headers is missing
        or the status line has no numeric code.
        """
        head, blank, body = text.partition(_CRLF + _CRLF)
        if not blank:
            raise ValueError("response has no blank line after its headers")
        status_line, _, header_text = head.partition(_CRLF)
        parts = split(status_line, " ")
        if len(parts) < 2:
            raise ValueError(f"malformed status line: {status_line!r}")
        match = _LEADING_INT.match(parts[1])
        if match is None:
            raise ValueError(f"status is not a number: {parts[1]!r}")
        response = cls(
            version=Version.parse(parts[0]),
            code=StatusCode.from_code(int(match.group(1))),
            body=body,
        )
        if header_text:
            response.header.parse(header_text)
        return response

    def set_content_length(self, length: int) -> None:
        self.header.set("Content-Length", str(length))

    def set_content_type(self, content_type: str) -> None:
        self.header.set("Content-Type", content_type)

    def __str__(self) -> str:
        status_line = f"{self.version} {int(self.code)} {self.code.reason()}"
        return status_line + _CRLF + str(self.header) + _CRLF + _CRLF + self.body