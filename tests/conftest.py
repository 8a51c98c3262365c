"""Shared fixtures and helpers for perch tests."""

import logging
from typing import Any

import pytest
from pydantic import BaseModel

from perch.http.request import Request
from perch.http.response import ResponseWriter


class UserParams(BaseModel):
    id: int


class UserOut(BaseModel):
    id: int


class ItemIn(BaseModel):
    name: str


class Recorder:
    """Captures ASGI messages sent by a ResponseWriter."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def starts(self) -> list[dict[str, Any]]:
        return [m for m in self.messages if m["type"] == "http.response.start"]

    @property
    def body(self) -> bytes:
        return b"".join(
            m.get("body", b"") for m in self.messages if m["type"] == "http.response.body"
        )

    @property
    def headers(self) -> dict[str, str]:
        (start,) = self.starts
        return {k.decode(): v.decode() for k, v in start["headers"]}


def make_request(
    method: str | None = "GET",
    path: str | None = "/",
    *,
    body: bytes = b"",
    chunks: list[bytes] | None = None,
    query_string: bytes = b"",
    headers: list[tuple[bytes, bytes]] | None = None,
    raw_path: bytes | None = None,
) -> Request:
    """Build a Request whose receive channel replays *body* (or *chunks*)."""
    parts = chunks if chunks is not None else [body]
    pending = [
        {"type": "http.request", "body": part, "more_body": i < len(parts) - 1}
        for i, part in enumerate(parts)
    ]

    async def receive() -> dict[str, Any]:
        if pending:
            return pending.pop(0)
        return {"type": "http.disconnect"}

    scope: dict[str, Any] = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query_string,
        "headers": headers or [],
    }
    if raw_path is not None:
        scope["raw_path"] = raw_path
    return Request.from_asgi(scope, receive)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def response(recorder: Recorder) -> ResponseWriter:
    return ResponseWriter(recorder)


@pytest.fixture(autouse=True)
def _restore_perch_logger():
    """Undo handlers and levels installed by ``configure_logging``."""
    logger = logging.getLogger("perch")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    yield
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)
