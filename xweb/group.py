"""Route registration and dispatch under a common path prefix."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from xweb.context import HttpContext
from xweb.filters import HttpFilter, HttpMethodFilter
from xweb.method import Method
from xweb.trie import Trie

HttpCallback = Callable[[HttpContext], None]


@dataclass
class RouteEntry:
    """A handler together with the filters a request must pass to reach it."""

    callback: HttpCallback | None
    filters: list[HttpFilter] = field(default_factory=list)

    def accepts(self, ctx: HttpContext) -> bool:
        return all(rule.is_match(ctx) for rule in self.filters)


class HttpGroup:
    """Handlers registered by path, every path prefixed with ``route``."""

    def __init__(self, route: str = "") -> None:
        self.route = route
        self.trie = Trie()

    def register_handler(
        self,
        path: str,
        method: Method,
        callback: HttpCallback,
        filters: Iterable[HttpFilter] = (),
    ) -> None:
        """Serve ``route + path`` with ``callback`` for ``method`` requests."""
        rules: list[HttpFilter] = [HttpMethodFilter(method), *filters]
        self.trie.add(self.route + path, RouteEntry(callback, rules))

    def get(self, path: str, callback: HttpCallback, filters: Iterable[HttpFilter] = ()) -> None:
        self.register_handler(path, Method.GET, callback, filters)

    def post(self, path: str, callback: HttpCallback, filters: Iterable[HttpFilter] = ()) -> None:
        self.register_handler(path, Method.POST, callback, filters)

    def handle(self, ctx: HttpContext) -> bool:
        """Run the handler for ``ctx``'s path if its filters pass; report whether one did."""
        path = ctx.req.route.path
        if not self.trie.search(path, lambda entry: entry.accepts(ctx)):
            return False
        entry: RouteEntry = self.trie.get(path)
        if entry.callback is not None:
            entry.callback(ctx)
        return True