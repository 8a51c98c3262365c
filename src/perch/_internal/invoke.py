"""Invoke helpers — call sync or async callables uniformly.

Route handlers, middleware, error handlers, and lifespan hooks can be
``def`` or ``async def``. Any code that calls a user-provided callable
must handle both cases; the check lives here, in one place.

Usage::

    from perch._internal.invoke import invoke

    result = await invoke(handler, context=ctx, request=req, response=res)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def show(context, request, response):
            return {"id": context.params["id"]}

        # async: coroutine awaited automatically
        async def show(context, request, response):
            return await load(context.params["id"])
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
