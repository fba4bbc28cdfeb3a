"""HTTP response status codes."""

from __future__ import annotations

from enum import IntEnum


class StatusCode(IntEnum):
    """An HTTP status code; UNKNOWN stands for anything unrecognised."""

    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204
    PARTIAL_CONTENT = 206

    MOVED_PERMANENTLY = 301
    FOUND = 302

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405

    INTERNAL_SERVER_ERROR = 500

    UNKNOWN = -1

    @classmethod
    def from_code(cls, code: int) -> "StatusCode":
        """Return the member for a numeric code, or UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_reason(cls, reason: str) -> "StatusCode":
        """Return the member for a reason phrase, or UNKNOWN."""
        return _BY_REASON.get(reason, cls.UNKNOWN)

    def reason(self) -> str:
        """The standard reason phrase, or "Unknown"."""
        return _REASONS.get(self, "Unknown")


_REASONS = {
    StatusCode.OK: "OK",
    StatusCode.CREATED: "Created",
    StatusCode.ACCEPTED: "Accepted",
    StatusCode.NO_CONTENT: "No Content",
    StatusCode.PARTIAL_CONTENT: "Partial Content",
    StatusCode.MOVED_PERMANENTLY: "Moved Permanently",
    StatusCode.FOUND: "Found",
    StatusCode.BAD_REQUEST: "Bad Request",
    StatusCode.UNAUTHORIZED: "Unauthorized",
    StatusCode.FORBIDDEN: "Forbidden",
    StatusCode.NOT_FOUND: "Not Found",
    StatusCode.METHOD_NOT_ALLOWED: "Method Not Allowed",
    StatusCode.INTERNAL_SERVER_ERROR: "Internal Server Error",
}

_BY_REASON = {reason: code for code, reason in _REASONS.items()}