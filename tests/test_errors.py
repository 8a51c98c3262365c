"""Tests for perch.errors — exception hierarchy."""

import pytest

from perch.errors import (
    ConfigurationError,
    HTTPError,
    ImATeapot,
    InternalServerError,
    NotFound,
    PayloadTooLarge,
    PerchError,
    UnprocessableEntity,
)


class TestHTTPErrorSubclasses:
    @pytest.mark.parametrize(
        ("cls", "status"),
        [
            (NotFound, 404),
            (PayloadTooLarge, 413),
            (ImATeapot, 418),
            (UnprocessableEntity, 422),
            (InternalServerError, 500),
        ],
    )
    def test_status(self, cls: type[HTTPError], status: int) -> None:
        err = cls()
        assert err.status == status
        assert isinstance(err, HTTPError)
        assert isinstance(err, PerchError)

    def test_custom_detail(self) -> None:
        err = NotFound("GET /missing")
        assert err.detail == "GET /missing"
        assert str(err) == "404: GET /missing"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=409)) == "409"

    def test_frozen(self) -> None:
        err = UnprocessableEntity("bad")
        with pytest.raises(AttributeError):
            err.status = 200  # type: ignore[misc]

    def test_raise_and_catch(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            raise UnprocessableEntity("name: Field required")
        assert exc_info.value.status == 422

    def test_headers_default_empty(self) -> None:
        assert NotFound().headers == ()


class TestConfigurationError:
    def test_is_perch_error(self) -> None:
        assert issubclass(ConfigurationError, PerchError)
        assert not issubclass(ConfigurationError, HTTPError)
