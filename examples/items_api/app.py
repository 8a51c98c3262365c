"""Items API — JSON CRUD over an ordered regex route table.

Demonstrates the pieces working together:

- a layering route on ``^/`` whose wildcard slot runs callback middleware
  for every request and fills ``context.user``
- typed path parameters, a validated JSON body, and a validated query
- a strict response schema guarding what goes back out

Run:
    cd examples/items_api && python app.py
"""

import threading
from typing import Any

from pydantic import BaseModel

from perch import App, AppConfig, Context, NotFound, TypeSchema, use_middleware
from perch.routing import Route
from perch.validation import Rules, integer

app = App(AppConfig.from_env())


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ItemIn(BaseModel):
    title: str
    done: bool = False


class Item(BaseModel):
    id: int
    title: str
    done: bool


class ItemParams(BaseModel):
    id: int


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


_items: dict[int, Item] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return n


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


def require_api_key(request, response, next):
    if request.headers.get("x-api-key") == "secret":
        next()
    else:
        next("missing or invalid API key")


async def remember_user(*, context: Context, request, **_: Any) -> None:
    context.user = request.headers.get("x-user", "anonymous")


app.add_route(Route(r"^/api/", {"*": use_middleware(require_api_key)}))
app.add_route(Route(r"^/api/", {"*": remember_user}))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.route(r"^/api/items$", query=Rules({"limit": [integer]}))
def list_items(*, context: Context, **_: Any) -> dict[str, Any]:
    limit = int(context.query.get("limit", "20"))
    with _lock:
        items = sorted(_items.values(), key=lambda item: item.id)[:limit]
    return {"data": items, "viewer": context.user}


@app.route(r"^/api/items$", methods=["POST"], body=TypeSchema(ItemIn), response=TypeSchema(Item))
def create_item(*, context: Context, **_: Any) -> Item:
    item = Item(id=_get_next_id(), title=context.body.title, done=context.body.done)
    with _lock:
        _items[item.id] = item
    return item


@app.route(
    r"^/api/items/(?P<id>\w+)$",
    params=TypeSchema(ItemParams),
    response=TypeSchema(Item),
)
def get_item(*, context: Context, **_: Any) -> Item:
    with _lock:
        item = _items.get(context.params.id)
    if item is None:
        raise NotFound(f"item {context.params.id} not found")
    return item


@app.route(r"^/api/items/(?P<id>\w+)$", methods=["DELETE"], params=TypeSchema(ItemParams))
async def delete_item(*, context: Context, response, **_: Any) -> None:
    with _lock:
        removed = _items.pop(context.params.id, None)
    if removed is None:
        raise NotFound(f"item {context.params.id} not found")
    await response.write_head(204)
    await response.end()


if __name__ == "__main__":
    app.run()
