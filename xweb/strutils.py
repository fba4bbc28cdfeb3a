"""Small string helpers used by the HTTP parsers."""

from __future__ import annotations

from collections.abc import Iterable


def split(origin: str, delimiter: str, keep_delimiter: bool = False) -> list[str]:
    """Split ``origin`` on ``delimiter``.

    The piece after the last delimiter is always included, so a trailing
    delimiter yields a final empty string and an empty input yields ``[""]``.
    With ``keep_delimiter`` every piece but the last keeps its delimiter.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    pieces = origin.split(delimiter)
    if keep_delimiter:
        return [piece + delimiter for piece in pieces[:-1]] + [pieces[-1]]
    return pieces


def join(parts: Iterable[str], delimiter: str) -> str:
    """Join ``parts`` with ``delimiter`` between consecutive items."""
    return delimiter.join(parts)