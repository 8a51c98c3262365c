"""Field rules, a lightweight ``Schema`` for string mappings.

Path parameters and query strings arrive as ``str`` values. ``Rules``
checks them with composable rule functions, without pulling a model
class into the route declaration::

    from perch.validation import Rules, at_least, integer, one_of, slug

    RequestHandler(
        list_posts,
        query_schema=Rules({"page": [integer, at_least(1)], "sort": [one_of("asc", "desc")]}),
        params_schema=Rules({"slug": [slug]}),
    )

Only fields named in the rules survive validation; absent optional
fields (no ``required`` rule) are skipped.
"""

from collections.abc import Mapping
from typing import Any

from perch.schema import SchemaError
from perch.validation.result import ValidationResult
from perch.validation.rules import (
    Rule,
    at_least,
    at_most,
    integer,
    matches,
    max_length,
    min_length,
    number,
    one_of,
    required,
    slug,
)

__all__ = [
    "Rule",
    "Rules",
    "ValidationResult",
    "at_least",
    "at_most",
    "integer",
    "matches",
    "max_length",
    "min_length",
    "number",
    "one_of",
    "required",
    "slug",
    "validate",
]


def _check(value: str, field_rules: list[Rule]) -> list[str]:
    messages: list[str] = []
    for rule in field_rules:
        message = rule(value)
        if message is None:
            continue
        messages.append(message)
        # Nothing else is meaningful for a blank required field
        if rule is required:
            break
    return messages


def validate(
    data: Mapping[str, str | None],
    rules: Mapping[str, list[Rule]],
) -> ValidationResult:
    """Check each field named in *rules* against its rule list.

    Fields missing from *data* are skipped unless their rules include
    ``required``, in which case they are checked as ``""``.
    """
    cleaned: dict[str, str] = {}
    errors: dict[str, list[str]] = {}

    for name, field_rules in rules.items():
        raw = data.get(name)
        if raw is None and required not in field_rules:
            continue
        value = raw if raw is not None else ""
        messages = _check(value, field_rules)
        if messages:
            errors[name] = messages
        else:
            cleaned[name] = value

    return ValidationResult(data=cleaned, errors=errors)


class Rules:
    """``Schema`` implementation backed by ``validate()``.

    Rules never coerce, so ``strict`` has no effect. Failure raises
    ``SchemaError`` listing every failing field.
    """

    __slots__ = ("rules",)

    def __init__(self, rules: Mapping[str, list[Rule]]) -> None:
        self.rules = dict(rules)

    def __repr__(self) -> str:
        return f"Rules({sorted(self.rules)!r})"

    def validate(self, value: Any, *, strict: bool = False) -> dict[str, str]:
        if not isinstance(value, Mapping):
            raise SchemaError([("", f"Expected an object, got {type(value).__name__}")])
        result = validate(value, self.rules)
        if not result:
            raise SchemaError(result.pairs())
        return result.data
