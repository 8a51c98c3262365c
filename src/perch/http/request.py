"""Raw HTTP request as delivered by the ASGI transport.

Frozen metadata with async body access. Handlers receive this object
untouched; validated data lives on the ``Context`` instead.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from perch._internal.asgi import Receive, Scope
from perch.errors import PayloadTooLarge
from perch.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable view of one incoming request.

    ``path`` is the request target as sent, still percent-encoded and
    without the query string, so ``/files/a%2Fb`` stays one segment.
    ``method`` and ``path`` are ``None`` when the transport omitted them;
    the dispatcher rejects such requests before any route runs.

    The body is read lazily through ``stream()`` / ``body()`` and cached,
    so several handlers within one request may each read it.
    """

    method: str | None
    path: str | None
    query_string: bytes
    headers: Headers
    http_version: str
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for the body bytes
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def url(self) -> str | None:
        """Path plus query string, as it appeared on the request line."""
        if self.path is None:
            return None
        if self.query_string:
            return f"{self.path}?{self.query_string.decode('latin-1')}"
        return self.path

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    # -- Async body access --

    async def stream(self) -> AsyncGenerator[bytes]:
        """Yield body chunks until the transport signals end of stream."""
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def body(self, *, max_size: int | None = None) -> bytes:
        """Accumulate the full request body.

        The ASGI receive channel is consumed once; later calls return the
        cached bytes.

        Raises:
            PayloadTooLarge: If the body grows beyond *max_size* bytes.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks: list[bytes] = []
        size = 0
        async for chunk in self.stream():
            size += len(chunk)
            if max_size is not None and size > max_size:
                raise PayloadTooLarge(f"request body exceeds {max_size} bytes")
            chunks.append(chunk)
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def json(self, *, max_size: int | None = None) -> Any:
        """Read the body and parse it as JSON.

        Raises:
            ValueError: If the body is not valid JSON (``json.JSONDecodeError``)
                or not valid UTF-8 (``UnicodeDecodeError``).
        """
        raw = await self.body(max_size=max_size)
        return json.loads(raw)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        method = scope.get("method")
        return cls(
            method=method.upper() if method else None,
            path=_target_path(scope),
            query_string=scope.get("query_string", b""),
            headers=Headers(scope.get("headers", ())),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )


def _target_path(scope: Scope) -> str | None:
    """The undecoded path from ``raw_path``, else the decoded ``path``."""
    raw_path = scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1").partition("?")[0] or None
    return scope.get("path") or None
