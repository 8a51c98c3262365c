"""Route dispatch — walk the route table for one request.

Every matching route gets its wildcard handler and then its
method-specific handler, in declaration order, until one of them sends
a response. The ``Context`` created here is shared by all of them.
"""

import logging

from perch.config import AppConfig
from perch.context import Context
from perch.errors import ImATeapot, NotFound
from perch.http.request import Request
from perch.http.response import ResponseWriter
from perch.routing.router import Router
from perch.server.executor import execute

logger = logging.getLogger("perch.server")


async def dispatch(
    request: Request,
    response: ResponseWriter,
    router: Router,
    config: AppConfig,
) -> Context:
    """Run matching routes until one sends a response.

    Returns the request's ``Context`` once a response has been written.

    Raises:
        ImATeapot: The transport gave no path or method.
        NotFound: No route sent a response; the detail is ``"METHOD path"``.
        Exception: Anything raised while executing a handler.
    """
    path = request.path
    method = request.method
    if not path or not method:
        raise ImATeapot()

    context = Context()
    limits = {"max_body_size": config.max_body_size, "json_indent": config.json_indent}

    for match in router.matches(path):
        route = match.route
        logger.debug("%s %s matched %r", method, path, route.pattern.pattern)

        wildcard = route.wildcard
        if wildcard is not None:
            await execute(wildcard, request, response, match, context, **limits)
        if response.headers_sent:
            return context

        specific = route.handler_for(method)
        if specific is None:
            continue

        await execute(specific, request, response, match, context, **limits)
        if response.headers_sent:
            return context

    raise NotFound(f"{method} {path}")
