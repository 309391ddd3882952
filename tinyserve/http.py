"""HTTP request parsing and response serialization."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum

__all__ = [
    "HttpMethod",
    "HttpStatus",
    "Request",
    "Response",
    "convert_method",
    "deserialize_request",
    "status_to_string",
    "serialize_response",
]


class HttpMethod(Enum):
    """Request methods the server understands."""

    GET = "GET"
    POST = "POST"
    UNKNOWN = "UNKNOWN"


class HttpStatus(IntEnum):
    """Status codes the server produces."""

    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405


_KNOWN_METHODS = {
    "GET": HttpMethod.GET,
    "POST": HttpMethod.POST,
}

_REASON_PHRASES = {
    HttpStatus.OK: "OK",
    HttpStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HttpStatus.NOT_FOUND: "Not Found",
    HttpStatus.BAD_REQUEST: "Bad Request",
    HttpStatus.CREATED: "Created",
}

_WORD_PATTERN = re.compile(r"[^ \t\n\v\f\r]+")


@dataclass
class Request:
    """A parsed HTTP request."""

    method: HttpMethod = HttpMethod.UNKNOWN
    path: str = ""
    http_version: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass
class Response:
    """An HTTP response under construction."""

    status_code: int = HttpStatus.OK
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    def set_header(self, key: str, value: str) -> None:
        """Set a header, replacing any earlier value under the same key."""
        self.headers[key] = value


def convert_method(method: str) -> HttpMethod:
    """Map a method name to an HttpMethod; unrecognised names give UNKNOWN."""
    return _KNOWN_METHODS.get(method, HttpMethod.UNKNOWN)


def _header_lines(rest: str):
    """Yield the lines of ``rest`` the way a line reader would see them."""
    lines = rest.split("\n")
    if rest.endswith("\n"):
        lines.pop()
    yield from lines


def deserialize_request(source: str) -> Request:
    """Parse the request line and header lines of ``source``.

    The first three whitespace-separated words give the method, path and
    version. Header lines are read from the remainder of the request line
    onwards and reading stops at a line made of a lone carriage return.
    Header values have surrounding spaces removed.
    """
    words = []
    end = 0
    for match in _WORD_PATTERN.finditer(source):
        words.append(match.group())
        end = match.end()
        if len(words) == 3:
            break

    request = Request()
    padded = words + [""] * (3 - len(words))
    request.method = convert_method(padded[0])
    request.path = padded[1]
    request.http_version = padded[2]

    # Header reading only continues when the request line was complete and
    # the input did not end right after it.
    if len(words) < 3 or end >= len(source):
        return request

    for line in _header_lines(source[end:]):
        if line == "\r":
            break
        key, sep, value = line.partition(":")
        if sep:
            request.headers[key] = value.strip(" ")
    return request


def status_to_string(status: int) -> str | None:
    """Return the reason phrase for ``status``, or None if it has none."""
    try:
        return _REASON_PHRASES.get(HttpStatus(int(status)))
    except ValueError:
        return None


def serialize_response(response: Response) -> str:
    """Render ``response`` as HTTP/1.1 wire text, headers in key order."""
    reason = status_to_string(response.status_code) or "Unknown"
    parts = [f"HTTP/1.1 {int(response.status_code)} {reason}\r\n"]
    parts.extend(f"{key}: {value}\r\n" for key, value in sorted(response.headers.items()))
    parts.append("\r\n")
    parts.append(response.body)
    return "".join(parts)