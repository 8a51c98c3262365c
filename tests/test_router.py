"""Tests for perch.routing.router — ordered route table."""

import pytest

from perch.errors import ConfigurationError
from perch.routing.route import Route
from perch.routing.router import Router


def _handler(**_: object) -> None:
    return None


class TestRouterRegistration:
    def test_initial_routes(self) -> None:
        a = Route(r"^/a$", {"GET": _handler})
        b = Route(r"^/b$", {"GET": _handler})
        router = Router([a, b])
        assert router.routes == (a, b)
        assert len(router) == 2

    def test_add_preserves_order(self) -> None:
        router = Router()
        routes = [Route(f"^/{n}$", {"GET": _handler}) for n in "xyz"]
        for route in routes:
            router.add(route)
        assert list(router) == routes

    def test_add_after_compile(self) -> None:
        router = Router()
        router.compile()
        assert router.compiled
        with pytest.raises(ConfigurationError, match="after compilation"):
            router.add(Route(r"^/$", {"GET": _handler}))

    def test_rejects_non_route(self) -> None:
        with pytest.raises(ConfigurationError, match="Expected a Route"):
            Router([r"^/$"])  # type: ignore[list-item]

    def test_compile_idempotent(self) -> None:
        router = Router()
        router.compile()
        router.compile()
        assert router.compiled


class TestRouterMatches:
    def test_all_matches_in_order(self) -> None:
        layer = Route(r"^/", {"*": _handler})
        users = Route(r"^/users/(?P<id>\d+)$", {"GET": _handler})
        other = Route(r"^/other$", {"GET": _handler})
        router = Router([layer, users, other])

        matches = list(router.matches("/users/7"))
        assert [m.route for m in matches] == [layer, users]
        assert matches[0].path_params == {}
        assert matches[1].path_params == {"id": "7"}

    def test_no_match(self) -> None:
        router = Router([Route(r"^/a$", {"GET": _handler})])
        assert list(router.matches("/b")) == []

    def test_lazy(self) -> None:
        router = Router(
            [Route(r"^/", {"GET": _handler}), Route(r"^/", {"GET": _handler})]
        )
        iterator = router.matches("/")
        first = next(iterator)
        assert first.route is router.routes[0]
