"""Captured HTTP request and its wire-text rendering.

The surrounding listener owns parsing; this module only needs a faithful,
canonical text form of what arrived so it can be embedded in a prompt.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Tuple

from honeyllm.llm.errors import RequestSerializationError

HeaderItems = Tuple[Tuple[str, str], ...]

_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

# Rendered separately from the header list.
_SKIP_HEADERS = {"host"}


@dataclass(frozen=True)
class HTTPRequest:
    method: str
    target: str
    headers: HeaderItems = ()
    body: bytes = b""
    host: str = ""
    protocol: str = "HTTP/1.1"

    def __post_init__(self) -> None:
        # Accept a mapping or any iterable of pairs; store an ordered tuple.
        headers = self.headers
        if isinstance(headers, Mapping):
            headers = headers.items()
        object.__setattr__(
            self, "headers", tuple((str(k), str(v)) for k, v in headers)
        )
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))
        if not self.host:
            host = self.header("Host")
            if host:
                object.__setattr__(self, "host", host)

    def header(self, name: str) -> str | None:
        """First value of ``name`` (case-insensitive), or None."""
        wanted = name.lower()
        for k, v in self.headers:
            if k.lower() == wanted:
                return v
        return None

    @property
    def is_chunked(self) -> bool:
        te = self.header("Transfer-Encoding") or ""
        return "chunked" in te.lower()

    def dump(self) -> bytes:
        """Render the request as it would appear on the wire.

        Raises RequestSerializationError when the framing is inconsistent.
        """

        self._check_framing()

        lines = [f"{self.method} {self.target} {self.protocol}"]
        if self.host:
            lines.append(f"Host: {self.host}")
        lines.extend(
            f"{k}: {v}" for k, v in self.headers if k.lower() not in _SKIP_HEADERS
        )
        head = ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8")

        body = self.body
        if self.is_chunked:
            chunk = b"%x\r\n%s\r\n" % (len(body), body) if body else b""
            body = chunk + b"0\r\n\r\n"
        return head + body

    def text(self) -> str:
        return self.dump().decode("utf-8", errors="replace")

    def _check_framing(self) -> None:
        if not _TOKEN_RE.match(self.method or ""):
            raise RequestSerializationError(f"invalid request method: {self.method!r}")
        if not self.target or any(c.isspace() for c in self.target):
            raise RequestSerializationError(f"invalid request target: {self.target!r}")
        for k, v in self.headers:
            if not _TOKEN_RE.match(k):
                raise RequestSerializationError(f"invalid header name: {k!r}")
            if "\r" in v or "\n" in v:
                raise RequestSerializationError(f"invalid value for header {k}")
        if "\r" in self.host or "\n" in self.host:
            raise RequestSerializationError("invalid host")

        length = self.header("Content-Length")
        if length is None or self.is_chunked:
            return
        try:
            expected = int(length.strip())
        except ValueError:
            raise RequestSerializationError(
                f"invalid Content-Length: {length!r}"
            ) from None
        if expected != len(self.body):
            raise RequestSerializationError(
                f"Content-Length {expected} does not match body length {len(self.body)}"
            )
