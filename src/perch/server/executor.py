"""Request handler executor — validate, invoke, respond.

Runs one ``RequestHandler`` for one request. Every step is gated on the
matching schema slot; the steps always run in the same order::

    PENDING -> VALIDATING_BODY -> VALIDATING_PARAMS -> VALIDATING_QUERY
            -> INVOKING -> RESPONDING -> DONE

Any step may raise instead (the ERROR stage); nothing is handled here,
failures propagate to the dispatcher's caller.
"""

import enum
import logging
from typing import Any

from perch._internal.invoke import invoke
from perch.context import Context
from perch.errors import UnprocessableEntity
from perch.http.query import parse_query
from perch.http.request import Request
from perch.http.response import ResponseWriter
from perch.routing.route import RequestHandler, RouteMatch
from perch.schema import Schema

logger = logging.getLogger("perch.server")


class ExecutionStage(enum.Enum):
    """Where an execution currently is, for diagnostics."""

    PENDING = "pending"
    VALIDATING_BODY = "validating_body"
    VALIDATING_PARAMS = "validating_params"
    VALIDATING_QUERY = "validating_query"
    INVOKING = "invoking"
    RESPONDING = "responding"
    DONE = "done"
    ERROR = "error"


def _validate(schema: Schema, value: Any) -> Any:
    """Run a client-facing schema, mapping failures to 422."""
    try:
        return schema.validate(value)
    except (ValueError, TypeError) as exc:
        raise UnprocessableEntity(str(exc)) from exc


async def execute(
    request_handler: RequestHandler,
    request: Request,
    response: ResponseWriter,
    match: RouteMatch | None,
    context: Context,
    *,
    max_body_size: int | None = None,
    json_indent: int | None = None,
) -> ExecutionStage:
    """Execute *request_handler* against one request.

    Mutates *context* in place and may write *response*. Returns the
    terminal stage (always ``DONE``; failures raise).

    Raises:
        UnprocessableEntity: Body, params, or query failed to parse or
            validate. The handler is not invoked.
        PayloadTooLarge: The body exceeded *max_body_size*.
        Exception: Whatever the handler or the strict response schema
            raised, unchanged.
    """
    stage = ExecutionStage.PENDING
    try:
        if request_handler.body_schema is not None:
            stage = _enter(ExecutionStage.VALIDATING_BODY, request_handler)
            try:
                raw_body = await request.json(max_size=max_body_size)
            except ValueError as exc:
                raise UnprocessableEntity(str(exc)) from exc
            context.body = _validate(request_handler.body_schema, raw_body)

        if request_handler.params_schema is not None:
            stage = _enter(ExecutionStage.VALIDATING_PARAMS, request_handler)
            if match is None:
                raise UnprocessableEntity("no url parameters found")
            context.params = _validate(request_handler.params_schema, match.path_params)

        if request_handler.query_schema is not None:
            stage = _enter(ExecutionStage.VALIDATING_QUERY, request_handler)
            query = parse_query(request.query_string)
            context.query = _validate(request_handler.query_schema, query)

        stage = _enter(ExecutionStage.INVOKING, request_handler)
        result = await invoke(
            request_handler.handler,
            context=context,
            request=request,
            response=response,
        )

        stage = _enter(ExecutionStage.RESPONDING, request_handler)
        # The handler wrote the response itself; its return value is ignored.
        if response.headers_sent:
            return _enter(ExecutionStage.DONE, request_handler)

        # No value means middleware-like: leave the response to a later route.
        if result is None:
            return _enter(ExecutionStage.DONE, request_handler)

        if request_handler.response_schema is not None:
            # Responses must already be well-formed; a mismatch is a server bug.
            result = request_handler.response_schema.validate(result, strict=True)

        await response.json(200, result, indent=json_indent)
        return _enter(ExecutionStage.DONE, request_handler)
    except Exception:
        logger.debug("%s failed during %s", request_handler.name, stage.value)
        raise


def _enter(stage: ExecutionStage, request_handler: RequestHandler) -> ExecutionStage:
    logger.debug("%s -> %s", request_handler.name, stage.value)
    return stage
