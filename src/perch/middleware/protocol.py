"""Callback-style middleware protocol.

A callback middleware is any callable matching::

    def mw(request: Request, response: ResponseWriter, next: NextCallback) -> None: ...

It signals completion by calling ``next()`` (success) or ``next(err)``
(failure). ``async def`` middleware is accepted too. No base class
required; the adapter checks the shape, not the lineage.
"""

from collections.abc import Callable
from typing import Any, Protocol

from perch.http.request import Request
from perch.http.response import ResponseWriter

# Completion callback handed to the middleware
type NextCallback = Callable[..., None]

# Receives whatever the middleware passed to ``next(err)``
type MiddlewareErrorHandler = Callable[[Any], Any]


class CallbackMiddleware(Protocol):
    """Protocol for middleware adapted with ``use_middleware()``.

    Accepts both functions and callable objects::

        def add_request_id(request, response, next):
            request_ids.append(request.headers.get("x-request-id"))
            next()

        class RequireJSON:
            def __call__(self, request, response, next):
                if request.content_type != "application/json":
                    next(ValueError("expected JSON"))
                else:
                    next()
    """

    def __call__(self, request: Request, response: ResponseWriter, next: NextCallback) -> Any: ...
