"""Ordered route table.

Routes are registered during setup and frozen when the app starts
serving. After ``compile()`` the table is read-only and shared by every
concurrent request without locking.
"""

import logging
from collections.abc import Iterable, Iterator

from perch.errors import ConfigurationError
from perch.routing.route import Route, RouteMatch

logger = logging.getLogger("perch.routing")


class Router:
    """An ordered list of routes, matched in declaration order.

    Order is part of the contract: several routes may match one path and
    each is tried in turn until one writes a response. Put layering
    routes (authentication, request logging) before the resource routes
    that depend on them::

        router = Router([
            Route(r"^/", {"*": authenticate}),
            Route(r"^/users/(?P<id>\\d+)$", {"GET": show_user}),
        ])
        router.compile()
        for match in router.matches("/users/42"):
            ...
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: list[Route] = []
        self._compiled = False
        for route in routes:
            self.add(route)

    def add(self, route: Route) -> None:
        """Append a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise ConfigurationError(msg)
        if not isinstance(route, Route):
            msg = f"Expected a Route, got {type(route).__name__}"
            raise ConfigurationError(msg)
        self._routes.append(route)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        if not self._compiled:
            logger.debug("Compiled %d route(s)", len(self._routes))
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in declaration order."""
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def matches(self, path: str) -> Iterator[RouteMatch]:
        """Yield a ``RouteMatch`` for every route whose pattern matches *path*.

        Lazy: the dispatcher stops consuming as soon as a response is
        sent, so later patterns are never evaluated.
        """
        for route in self._routes:
            match = route.match(path)
            if match is not None:
                yield match
