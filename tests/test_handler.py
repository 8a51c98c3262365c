"""Tests for perch.server.handler — the per-request ASGI pipeline."""

import json
from typing import Any

from perch.config import AppConfig
from perch.routing.route import Route
from perch.routing.router import Router
from perch.server.errors import ErrorMapper
from perch.server.handler import handle_request


async def _call(router: Router, scope: dict[str, Any]) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await handle_request(
        scope,
        receive,
        send,
        router=router,
        config=AppConfig(),
        error_mapper=ErrorMapper(),
    )
    return messages


class TestHandleRequest:
    async def test_success(self) -> None:
        router = Router([Route(r"^/$", {"GET": lambda **_: {"ok": True}})])
        messages = await _call(router, {"type": "http", "method": "GET", "path": "/"})
        assert messages[0]["status"] == 200
        assert json.loads(messages[1]["body"]) == {"ok": True}

    async def test_failure_mapped(self) -> None:
        messages = await _call(Router(), {"type": "http", "method": "GET", "path": "/x"})
        assert messages[0]["status"] == 404
        assert json.loads(messages[1]["body"]) == {"message": "GET /x"}

    async def test_non_http_scope_ignored(self) -> None:
        router = Router([Route(r"", {"*": lambda **_: {"ok": True}})])
        assert await _call(router, {"type": "websocket", "path": "/"}) == []
