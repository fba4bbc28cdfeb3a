"""Prefix tree keyed by ASCII strings, holding one value per key."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass
class _Node:
    children: dict[str, "_Node"] = field(default_factory=dict)
    is_end: bool = False
    data: Any = None


class Trie:
    """Maps ASCII keys to values along a character tree."""

    def __init__(self) -> None:
        self._root: _Node | None = None

    def add(self, key: str, data: Any) -> None:
        """Store ``data`` under ``key``; an empty key stores nothing.

        Raises ValueError if the key holds a non-ASCII character.
        """
        if any(ord(ch) >= 128 for ch in key):
            raise ValueError(f"key {key!r} contains non-ASCII characters")
        if self._root is None:
            self._root = _Node()
        if not key:
            return
        node = self._root
        for ch in key:
            node = node.children.setdefault(ch, _Node())
        node.is_end = True
        node.data = data

    def _find(self, key: str) -> _Node | None:
        if not key or self._root is None:
            return None
        node = self._root
        for ch in key:
            node = node.children.get(ch)
            if node is None:
                return None
        return node if node.is_end else None

    def get(self, key: str) -> Any:
        """Return the value stored under ``key``; raise KeyError if absent."""
        node = self._find(key)
        if node is None:
            raise KeyError(key)
        return node.data

    def search(self, key: str, predicate: Callable[[Any], bool]) -> bool:
        """True if ``key`` is stored and ``predicate`` accepts its value."""
        node = self._find(key)
        return node is not None and bool(predicate(node.data))

    def reset(self) -> None:
        """Drop every stored key."""
        self._root = None