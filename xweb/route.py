"""Request target: a path with optional query parameters."""

from __future__ import annotations

from xweb.strutils import join, split


class HttpRoute:
    """A URL path together with its ``key=value`` query parameters."""

    def __init__(self, path: str = "", params: dict[str, str] | None = None) -> None:
        self.path = path
        self.params: dict[str, str] = dict(params or {})

    def parse(self, url: str) -> None:
        """Read the path and query parameters from ``url``.

        A parameter without ``=`` is stored with itself as key and value.
        """
        path, question, query = url.partition("?")
        self.path = path
        if not question:
            return
        for pair in split(query, "&"):
            key, equals, value = pair.partition("=")
            self.params[key] = value if equals else pair

    def set_param(self, key: str, value: str) -> None:
        self.params[key] = value

    def get_param(self, key: str) -> str:
        """The value of parameter ``key``, or an empty string."""
        return self.params.get(key, "")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpRoute):
            return NotImplemented
        return self.path == other.path and self.params == other.params

    def __repr__(self) -> str:
        return f"HttpRoute({self.path!r}, {self.params!r})"

    def __str__(self) -> str:
        if not self.params:
            return self.path
        query = join((f"{key}={value}" for key, value in self.params.items()), "&")
        return f"{self.path}?{query}"