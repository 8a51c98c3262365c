"""Outcome of checking string fields against ``Rules``."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Cleaned values plus per-field error messages.

    Falsy when any field failed::

        result = validate(parse_query(request.query_string), rules)
        if not result:
            log.info("bad query: %s", result.pairs())

    ``data`` keeps the fields that passed, as the original strings.
    ``errors`` maps each failing field to its messages, in rule order.
    """

    data: dict[str, str]
    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid

    def pairs(self) -> list[tuple[str, str]]:
        """Flatten ``errors`` into ``(field, message)`` pairs."""
        return [(name, msg) for name, messages in self.errors.items() for msg in messages]
