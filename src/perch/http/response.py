"""Raw HTTP response writer over the ASGI ``send`` callable.

Handlers that want full control write through this object directly;
everyone else returns a value and lets the executor serialize it. The
writer tracks whether the response head has gone out, which is what the
dispatcher checks to decide whether processing must stop.
"""

import dataclasses
import json
from collections.abc import Iterable, Mapping
from typing import Any

from perch._internal.asgi import Send
from perch.http.headers import encode_headers

JSON_CONTENT_TYPE = "application/json"

type HeaderInput = Mapping[str, str] | Iterable[tuple[str, str]]


def json_default(obj: Any) -> Any:
    """Fallback encoder for values ``json.dumps`` cannot handle natively.

    Pydantic models (anything with ``model_dump``) and dataclass instances
    serialize to their field mappings.
    """
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    msg = f"Object of type {type(obj).__name__} is not JSON serializable"
    raise TypeError(msg)


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


class ResponseWriter:
    """Writes exactly one HTTP response through ASGI messages.

    Usage inside a handler::

        async def download(context, request, response):
            await response.write_head(200, {"Content-Type": "text/plain"})
            await response.write(b"chunk one\\n")
            await response.end(b"chunk two\\n")

    Once ``write_head()`` has run, ``headers_sent`` is True and stays True.
    """

    __slots__ = ("_finished", "_send", "_status")

    def __init__(self, send: Send) -> None:
        self._send = send
        self._status: int | None = None
        self._finished = False

    @property
    def headers_sent(self) -> bool:
        """True once the response head has been handed to the transport."""
        return self._status is not None

    @property
    def finished(self) -> bool:
        """True once the final body message has been sent."""
        return self._finished

    @property
    def status(self) -> int | None:
        """The status written with the head, or ``None`` before that."""
        return self._status

    async def write_head(self, status: int, headers: HeaderInput = ()) -> None:
        """Send the status line and headers.

        Raises:
            RuntimeError: If the head was already sent.
        """
        if self._status is not None:
            msg = f"Response head already sent (status {self._status})."
            raise RuntimeError(msg)
        self._status = status
        await self._send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": encode_headers(headers),
            }
        )

    async def write(self, chunk: bytes | str) -> None:
        """Send one body chunk, writing a default 200 head first if needed."""
        self._check_open()
        if self._status is None:
            await self.write_head(200)
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        await self._send({"type": "http.response.body", "body": chunk, "more_body": True})

    async def end(self, body: bytes | str = b"") -> None:
        """Send the final body chunk and close the response.

        Completes only after the transport has accepted the message.
        """
        self._check_open()
        if isinstance(body, str):
            body = body.encode("utf-8")
        if self._status is None:
            await self.write_head(200, {"Content-Length": str(len(body))})
        if not _body_allowed(self._status or 200):
            body = b""
        self._finished = True
        await self._send({"type": "http.response.body", "body": body, "more_body": False})

    async def json(
        self,
        status: int,
        payload: Any,
        *,
        headers: HeaderInput = (),
        indent: int | None = None,
    ) -> None:
        """Serialize *payload* and send it as a complete JSON response."""
        separators = (",", ":") if indent is None else None
        body = json.dumps(
            payload, indent=indent, separators=separators, default=json_default
        ).encode("utf-8")
        if not _body_allowed(status):
            body = b""
        pairs = list(headers.items() if isinstance(headers, Mapping) else headers)
        head = [
            ("Content-Type", JSON_CONTENT_TYPE),
            ("Content-Length", str(len(body))),
            *pairs,
        ]
        await self.write_head(status, head)
        await self.end(body)

    def _check_open(self) -> None:
        if self._finished:
            msg = "Response already finished."
            raise RuntimeError(msg)
