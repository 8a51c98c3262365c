"""ASGI handler — translates ASGI scope/messages to perch types.

The only component that touches raw ASGI HTTP scopes directly. Wraps
``scope``/``receive`` in a ``Request`` and ``send`` in a
``ResponseWriter``, dispatches through the route table, and funnels
every failure into the error mapper.
"""

from perch._internal.asgi import Receive, Scope, Send
from perch.config import AppConfig
from perch.http.request import Request
from perch.http.response import ResponseWriter
from perch.routing.router import Router
from perch.server.dispatcher import dispatch
from perch.server.errors import ErrorMapper


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    config: AppConfig,
    error_mapper: ErrorMapper,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = ResponseWriter(send)

    try:
        await dispatch(request, response, router, config)
    except Exception as exc:
        await error_mapper.handle(exc, request, response)
