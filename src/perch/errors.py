"""Perch exception hierarchy.

Shared across Router, Executor, Dispatcher, and the middleware adapter so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a route declaration or app configuration is invalid.

    Typically raised while building ``Route`` records or registering them
    on a frozen app.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by the dispatcher, the executor, middleware, or handlers. The
    error mapper turns it into a ``{"message": detail}`` JSON response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route produced a response for the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class ImATeapot(HTTPError):  # noqa: N818
    """418 — the transport delivered a request without a path or method."""

    def __init__(self, detail: str = "I'm a teapot") -> None:
        super().__init__(status=418, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — the request body exceeded ``AppConfig.max_body_size``."""

    def __init__(self, detail: str = "Payload Too Large") -> None:
        super().__init__(status=413, detail=detail)


class UnprocessableEntity(HTTPError):  # noqa: N818
    """422 — the body, path parameters, or query string failed validation.

    ``detail`` carries the validator's own message so clients get
    actionable feedback.
    """

    def __init__(self, detail: str = "Unprocessable Entity") -> None:
        super().__init__(status=422, detail=detail)


class InternalServerError(HTTPError):
    """500 — a server-side failure with an explicit message."""

    def __init__(self, detail: str = "Internal Server Error") -> None:
        super().__init__(status=500, detail=detail)
