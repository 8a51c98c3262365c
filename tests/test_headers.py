"""Tests for perch.http.headers — request header view and response encoding."""

from perch.http.headers import Headers, encode_headers


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"content-type", b"application/json"),))
        assert headers["Content-Type"] == "application/json"
        assert headers.get("CONTENT-TYPE") == "application/json"
        assert "content-TYPE" in headers

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("x-missing") is None
        assert "x-missing" not in headers
        assert 42 not in headers

    def test_repeated_keeps_first(self) -> None:
        headers = Headers(((b"accept", b"a"), (b"Accept", b"b")))
        assert headers["ACCEPT"] == "a"
        assert list(headers) == ["accept"]
        assert len(headers) == 1

    def test_accepts_list(self) -> None:
        assert Headers([(b"X-Id", b"7")]).get("x-id") == "7"


class TestEncodeHeaders:
    def test_mapping(self) -> None:
        assert encode_headers({"Content-Type": "text/plain"}) == [
            (b"content-type", b"text/plain")
        ]

    def test_pairs(self) -> None:
        assert encode_headers([("X-A", "1"), ("X-A", "2")]) == [
            (b"x-a", b"1"),
            (b"x-a", b"2"),
        ]
