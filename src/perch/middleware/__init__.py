"""Middleware — connect-style callbacks adapted into route handlers.

A middleware here is any callable matching:
    def mw(request: Request, response: ResponseWriter, next: NextCallback) -> None

``use_middleware()`` turns one into a handler that can sit in a route's
``"*"`` slot like any other.
"""

from perch.middleware.adapter import use_middleware
from perch.middleware.protocol import CallbackMiddleware, MiddlewareErrorHandler, NextCallback

__all__ = [
    "CallbackMiddleware",
    "MiddlewareErrorHandler",
    "NextCallback",
    "use_middleware",
]
