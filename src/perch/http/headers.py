"""Case-insensitive request headers and response header encoding.

Request headers arrive from the ASGI scope as byte pairs and are indexed
once, by lower-cased name. Response headers are written as ``str``
mappings and encoded when the response head is sent.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only, case-insensitive request headers.

    A repeated header keeps its first value, which is all handlers and
    middleware read (``request.headers.get("authorization")``).
    """

    __slots__ = ("_index",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        index: dict[str, str] = {}
        for name, value in raw:
            index.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
        self._index = index

    def __getitem__(self, key: str) -> str:
        return self._index[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Headers({self._index!r})"


def encode_headers(
    headers: Mapping[str, str] | Iterable[tuple[str, str]],
) -> list[tuple[bytes, bytes]]:
    """Encode response headers to ASGI byte pairs (names lower-cased)."""
    pairs = headers.items() if isinstance(headers, Mapping) else headers
    return [
        (name.lower().encode("latin-1"), str(value).encode("latin-1"))
        for name, value in pairs
    ]
