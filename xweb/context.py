"""Per-request state handed to route handlers."""

from __future__ import annotations

from dataclasses import dataclass, field

from xweb.request import HttpRequest
from xweb.response import HttpResponse


@dataclass
class HttpContext:
    """The request being served, the response being built, and a go-on flag."""

    req: HttpRequest = field(default_factory=HttpRequest)
    resp: HttpResponse = field(default_factory=HttpResponse)
    _proceed: bool = field(default=True, init=False, repr=False)

    def next(self) -> None:
        """Let processing go on."""
        self._proceed = True

    def abort(self) -> None:
        """Stop further processing."""
        self._proceed = False

    def is_continue(self) -> bool:
        return self._proceed