"""Error mapping — the single failure boundary per request.

Maps ``HTTPError`` exceptions and unexpected failures to a JSON
``{"message": ...}`` response. Server-side messages are redacted in
production; client errors (4xx) always keep their text so callers get
actionable validation feedback.
"""

import logging
from dataclasses import dataclass
from http import HTTPStatus

from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import ResponseWriter

logger = logging.getLogger("perch.server")

GENERIC_SERVER_ERROR = "internal server error"


@dataclass(frozen=True, slots=True)
class MappedError:
    """Status, message, and extra headers for one failure."""

    status: int
    message: str
    headers: tuple[tuple[str, str], ...] = ()


class ErrorMapper:
    """Turns any exception into an HTTP error response.

    Built once per app from ``AppConfig.production``; holds no
    per-request state.
    """

    __slots__ = ("production",)

    def __init__(self, *, production: bool = False) -> None:
        self.production = production

    def map(self, exc: BaseException) -> MappedError:
        """Compute the response for *exc* without writing anything."""
        if isinstance(exc, HTTPError):
            status = exc.status
            message = exc.detail or _phrase(status)
            headers = exc.headers
        else:
            status = 500
            message = str(exc) or type(exc).__name__
            headers = ()

        if status >= 500 and self.production:
            message = GENERIC_SERVER_ERROR
        return MappedError(status=status, message=message, headers=headers)

    async def handle(
        self,
        exc: Exception,
        request: Request,
        response: ResponseWriter,
    ) -> None:
        """Report *exc* and write the error response, if still possible.

        When the response head has already gone out the failure is
        dropped: the client has its answer and it cannot be replaced.
        """
        if self.production:
            logger.debug("%s %s failed: %r", request.method, request.path, exc)
        else:
            logger.error(
                "%s %s failed: %s", request.method, request.path, exc, exc_info=exc
            )

        if response.headers_sent:
            return

        mapped = self.map(exc)
        await response.json(
            mapped.status,
            {"message": mapped.message},
            headers=mapped.headers,
        )


def _phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Error {status}"
