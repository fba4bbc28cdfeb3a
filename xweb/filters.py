"""Predicates deciding whether a route handler applies to a request."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from xweb.context import HttpContext
from xweb.method import Method


class HttpFilter(ABC):
    """A test a request must pass for a handler to run."""

    @abstractmethod
    def is_match(self, ctx: HttpContext) -> bool:
        """True if the handler may serve ``ctx``."""


@dataclass
class HttpMethodFilter(HttpFilter):
    """Accepts requests made with one method."""

    method: Method

    def is_match(self, ctx: HttpContext) -> bool:
        return ctx.req.method is self.method