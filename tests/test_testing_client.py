"""Tests for perch.testing — TestClient and TestResponse."""

from typing import Any

from perch.app import App
from perch.http.request import Request
from perch.testing import TestClient, TestResponse


def _echo_app() -> App:
    app = App()

    @app.route(r"^/echo$", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def echo(*, request: Request, **_: Any) -> dict[str, Any]:
        return {
            "method": request.method,
            "query": request.query_string.decode(),
            "body": (await request.body()).decode(),
            "content_type": request.content_type,
        }

    return app


class TestTestClient:
    async def test_get_with_query(self) -> None:
        async with TestClient(_echo_app()) as client:
            response = await client.get("/echo?a=1")
        assert isinstance(response, TestResponse)
        assert response.json()["query"] == "a=1"

    async def test_json_body(self) -> None:
        async with TestClient(_echo_app()) as client:
            response = await client.put("/echo", json={"k": 1})
        data = response.json()
        assert data["method"] == "PUT"
        assert data["body"] == '{"k": 1}'
        assert data["content_type"] == "application/json"

    async def test_raw_body(self) -> None:
        async with TestClient(_echo_app()) as client:
            response = await client.patch("/echo", body=b"raw")
        assert response.json()["body"] == "raw"

    async def test_chunks(self) -> None:
        async with TestClient(_echo_app()) as client:
            response = await client.request("POST", "/echo", chunks=[b"a", b"b", b"c"])
        assert response.json()["body"] == "abc"

    async def test_delete(self) -> None:
        async with TestClient(_echo_app()) as client:
            response = await client.delete("/echo")
        assert response.json()["method"] == "DELETE"

    async def test_messages_captured(self) -> None:
        async with TestClient(_echo_app()) as client:
            response = await client.get("/echo")
        assert response.start_count == 1
        assert response.messages[-1]["type"] == "http.response.body"
        assert response.headers["content-type"] == "application/json"

    async def test_lifespan_hooks(self) -> None:
        app = App()
        events: list[str] = []
        app.on_startup(lambda: events.append("start"))
        app.on_shutdown(lambda: events.append("stop"))

        async with TestClient(app):
            assert events == ["start"]
        assert events == ["start", "stop"]

    async def test_without_context_manager(self) -> None:
        response = await TestClient(_echo_app()).get("/echo")
        assert response.status == 200
