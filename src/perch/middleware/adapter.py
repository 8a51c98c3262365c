"""Run callback-style middleware as an ordinary route handler.

``use_middleware()`` converts the middleware's completion callback into
a suspension point: the returned handler waits until ``next`` fires,
then either returns (letting the dispatcher move on) or raises.
"""

import logging
from typing import Any

import anyio

from perch._internal.invoke import invoke
from perch.context import Context
from perch.errors import InternalServerError
from perch.http.request import Request
from perch.http.response import ResponseWriter
from perch.middleware.protocol import CallbackMiddleware, MiddlewareErrorHandler
from perch.routing.route import Handler

logger = logging.getLogger("perch.middleware")


def use_middleware(
    middleware: CallbackMiddleware,
    error_handler: MiddlewareErrorHandler | None = None,
) -> Handler:
    """Wrap *middleware* as a schema-less route handler.

    Args:
        middleware: Called as ``middleware(request, response, next)``.
        error_handler: Called (and awaited) with the value passed to
            ``next(err)`` when that value is truthy. Without one, an error
            becomes a 500 whose message is ``"Middleware error: <err>"``.

    Returns:
        A handler usable as a ``Route`` value, typically under ``"*"``::

            Route(r"^/", {"*": use_middleware(cors)})

    A middleware that finishes the response without calling ``next``
    ends the wait too. One that does neither suspends the request.
    """

    async def run_middleware(
        *,
        context: Context,
        request: Request,
        response: ResponseWriter,
    ) -> None:
        done = anyio.Event()
        outcome: list[Any] = [None]

        def next_(err: Any = None) -> None:
            if done.is_set():
                logger.warning("%s called next() more than once", _name(middleware))
                return
            outcome[0] = err
            done.set()

        await invoke(middleware, request, response, next_)
        if not done.is_set() and response.finished:
            return
        await done.wait()

        err = outcome[0]
        # Any falsy value counts as success
        if not err:
            return
        if error_handler is None:
            raise InternalServerError(f"Middleware error: {err}")
        await invoke(error_handler, err)

    run_middleware.__qualname__ = f"use_middleware({_name(middleware)})"
    return run_middleware


def _name(middleware: Any) -> str:
    return getattr(middleware, "__qualname__", None) or type(middleware).__name__
