"""Query string parsing.

Query schemas validate a flat ``{name: value}`` mapping, so repeated
keys collapse to their last value.
"""

from urllib.parse import parse_qsl


def parse_query(query_string: bytes | str) -> dict[str, str]:
    """Parse a raw query string into a flat mapping.

    Blank values are kept (``?flag=`` yields ``{"flag": ""}``); on
    duplicate keys the last occurrence wins::

        parse_query(b"page=1&page=2&q=") == {"page": "2", "q": ""}
    """
    if isinstance(query_string, bytes):
        query_string = query_string.decode("latin-1")
    return dict(parse_qsl(query_string, keep_blank_values=True))
