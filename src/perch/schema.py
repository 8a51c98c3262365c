"""Schema protocol — the validation boundary.

Perch never inspects a schema; it only calls ``validate()``. Anything
with this shape works::

    class Schema(Protocol):
        def validate(self, value: Any, *, strict: bool = False) -> Any: ...

``validate`` returns the validated (possibly coerced) value, or raises a
``ValueError`` (or ``TypeError``) subclass whose message describes the
failure. With ``strict=True`` it must not coerce.

Two implementations ship with perch:

- ``TypeSchema`` — any type pydantic understands (models, ``TypedDict``,
  ``dict[str, int]``, dataclasses, ...)::

      class ItemIn(BaseModel):
          name: str

      RequestHandler(create_item, body_schema=TypeSchema(ItemIn))

- ``perch.validation.Rules`` — string-field rules for params and query.
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError


class SchemaError(ValueError):
    """A value failed schema validation.

    ``errors`` holds one ``(location, message)`` pair per problem;
    ``str()`` joins them into a single human-readable line.
    """

    def __init__(self, errors: list[tuple[str, str]]) -> None:
        self.errors = errors
        super().__init__(
            "; ".join(f"{loc}: {msg}" if loc else msg for loc, msg in errors)
        )


@runtime_checkable
class Schema(Protocol):
    """Anything that validates a value, optionally without coercion."""

    def validate(self, value: Any, *, strict: bool = False) -> Any: ...


class TypeSchema:
    """Validate values against a Python type using a pydantic ``TypeAdapter``.

    The adapter is built once, when the route is declared, so type errors
    in the annotation surface at import time rather than per request.
    """

    __slots__ = ("_adapter", "type")

    def __init__(self, tp: Any) -> None:
        self.type = tp
        self._adapter: TypeAdapter[Any] = TypeAdapter(tp)

    def __repr__(self) -> str:
        return f"TypeSchema({getattr(self.type, '__name__', self.type)!r})"

    def validate(self, value: Any, *, strict: bool = False) -> Any:
        """Return *value* converted to ``self.type``.

        Raises:
            SchemaError: If pydantic rejects the value.
        """
        try:
            return self._adapter.validate_python(value, strict=strict)
        except PydanticValidationError as exc:
            errors = [
                (".".join(str(part) for part in err.get("loc", ())), err.get("msg", ""))
                for err in exc.errors()
            ]
            raise SchemaError(errors) from exc
