"""Field rules for path parameters and query strings.

Captured path groups and query values always arrive as ``str``. A rule
looks at one value and returns an error message, or ``None`` when the
value is acceptable. Rules that need an argument are built by a factory::

    Rules({
        "page": [integer, at_least(1)],
        "sort": [one_of("asc", "desc")],
        "slug": [required, slug, max_length(64)],
    })

Rules only check; they never convert. Handlers read the original
strings from ``context.query`` / ``context.params``.
"""

import re
from collections.abc import Callable

type Rule = Callable[[str], str | None]

_SLUG_RE = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")


def required(value: str) -> str | None:
    """Field must be present and not blank."""
    if not value.strip():
        return "This field is required"
    return None


def max_length(n: int) -> Rule:
    def check(value: str) -> str | None:
        if len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Rule:
    def check(value: str) -> str | None:
        if len(value) < n:
            return f"Must be at least {n} characters"
        return None

    return check


def matches(pattern: str, message: str | None = None) -> Rule:
    """The whole value must match *pattern* (``re.fullmatch``)."""
    compiled = re.compile(pattern)

    def check(value: str) -> str | None:
        if compiled.fullmatch(value) is None:
            return message or f"Must match pattern: {pattern}"
        return None

    return check


def slug(value: str) -> str | None:
    """Lowercase letters and digits in dash-separated runs (``my-post-2``)."""
    if _SLUG_RE.fullmatch(value) is None:
        return "Must be a slug (lowercase letters, digits, and dashes)"
    return None


def one_of(*choices: str) -> Rule:
    allowed = frozenset(choices)
    options = ", ".join(sorted(allowed))

    def check(value: str) -> str | None:
        if value not in allowed:
            return f"Must be one of: {options}"
        return None

    return check


def integer(value: str) -> str | None:
    try:
        int(value)
    except ValueError:
        return "Must be a whole number"
    return None


def number(value: str) -> str | None:
    try:
        float(value)
    except ValueError:
        return "Must be a number"
    return None


def at_least(minimum: float) -> Rule:
    """Numeric value must be >= *minimum*. Non-numbers fail too."""

    def check(value: str) -> str | None:
        try:
            ok = float(value) >= minimum
        except ValueError:
            ok = False
        return None if ok else f"Must be at least {minimum:g}"

    return check


def at_most(maximum: float) -> Rule:
    """Numeric value must be <= *maximum*. Non-numbers fail too."""

    def check(value: str) -> str | None:
        try:
            ok = float(value) <= maximum
        except ValueError:
            ok = False
        return None if ok else f"Must be at most {maximum:g}"

    return check
