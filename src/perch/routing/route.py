"""Route, RequestHandler, and RouteMatch frozen dataclasses."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from perch.errors import ConfigurationError
from perch.schema import Schema

# Route handler, called as handler(context=..., request=..., response=...)
type Handler = Callable[..., Any]

WILDCARD = "*"
"""Handler key that runs for every method, before the method-specific one."""

HTTP_METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"})

# ``(?<name>...)`` is accepted as a spelling of ``(?P<name>...)``;
# lookbehinds ``(?<=`` / ``(?<!`` and escaped parens are left alone.
_ANGLE_GROUP_RE = re.compile(r"(?<!\\)\(\?<(?![=!])")


def compile_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile a route pattern, accepting ``(?<name>...)`` named groups.

    Raises:
        ConfigurationError: If the pattern is not a valid regular expression.
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(_ANGLE_GROUP_RE.sub("(?P<", pattern))
    except re.error as exc:
        msg = f"Invalid route pattern {pattern!r}: {exc}"
        raise ConfigurationError(msg) from exc


@dataclass(frozen=True, slots=True)
class RequestHandler:
    """A handler plus the schemas that gate it.

    Each schema slot is optional. A present slot means the executor
    validates that part of the request (or, for ``response_schema``, the
    handler's return value) and stores the result on the ``Context``; an
    empty slot leaves the matching ``Context`` attribute as ``None``.
    """

    handler: Handler
    body_schema: Schema | None = None
    params_schema: Schema | None = None
    query_schema: Schema | None = None
    response_schema: Schema | None = None

    @property
    def name(self) -> str:
        """Best-effort display name of the wrapped callable."""
        return getattr(self.handler, "__qualname__", None) or repr(self.handler)


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Binds a compiled path pattern to at most one ``RequestHandler`` per
    HTTP method, plus an optional wildcard (``"*"``) handler that runs
    first for every method::

        Route(r"^/users/(?P<id>\\d+)$", {
            "*": RequestHandler(load_user),
            "GET": RequestHandler(show_user, params_schema=TypeSchema(UserParams)),
        })

    The pattern is tested with ``re.search``: anchor it (``^...$``) unless
    the route is meant to layer over many paths. Plain callables are
    accepted as handler values and wrapped in a schema-less
    ``RequestHandler``. Method keys are case-insensitive.
    """

    pattern: re.Pattern[str]
    handlers: Mapping[str, RequestHandler] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", compile_pattern(self.pattern))

        normalized: dict[str, RequestHandler] = {}
        for key, value in self.handlers.items():
            method = key.upper()
            if method != WILDCARD and method not in HTTP_METHODS:
                msg = (
                    f"Unknown HTTP method {key!r} on route {self.pattern.pattern!r}. "
                    f"Expected one of: {', '.join(sorted(HTTP_METHODS))} or {WILDCARD!r}"
                )
                raise ConfigurationError(msg)
            if method in normalized:
                msg = f"Duplicate handler for {method} on route {self.pattern.pattern!r}"
                raise ConfigurationError(msg)
            if not isinstance(value, RequestHandler):
                if not callable(value):
                    msg = (
                        f"Handler for {method} on route {self.pattern.pattern!r} "
                        f"must be a RequestHandler or callable, got {type(value).__name__}"
                    )
                    raise ConfigurationError(msg)
                value = RequestHandler(value)
            normalized[method] = value

        object.__setattr__(self, "handlers", MappingProxyType(normalized))

    @property
    def wildcard(self) -> RequestHandler | None:
        """The handler that runs for every method, if declared."""
        return self.handlers.get(WILDCARD)

    @property
    def methods(self) -> frozenset[str]:
        """Declared method keys, including ``"*"`` when present."""
        return frozenset(self.handlers)

    def handler_for(self, method: str) -> RequestHandler | None:
        """The method-specific handler for *method*, if declared."""
        if method == WILDCARD:
            return None
        return self.handlers.get(method.upper())

    def match(self, path: str) -> RouteMatch | None:
        """Test *path* against the pattern, capturing named groups."""
        found = self.pattern.search(path)
        if found is None:
            return None
        params = {k: v for k, v in found.groupdict().items() if v is not None}
        return RouteMatch(route=self, path_params=params)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``path_params`` holds the named groups that participated in the
    match. It is captured once, by the dispatcher, and reused for
    params validation.
    """

    route: Route
    path_params: dict[str, str]
