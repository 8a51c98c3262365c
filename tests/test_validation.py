"""Tests for perch.validation — field rules and the Rules schema."""

import pytest

from perch.schema import Schema, SchemaError
from perch.validation import (
    Rules,
    ValidationResult,
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
    validate,
)


class TestRules:
    def test_required(self) -> None:
        assert required("x") is None
        assert required("") is not None
        assert required("   ") is not None

    def test_lengths(self) -> None:
        assert max_length(3)("abc") is None
        assert max_length(3)("abcd") == "Must be at most 3 characters"
        assert min_length(2)("a") == "Must be at least 2 characters"

    def test_matches_full(self) -> None:
        rule = matches(r"[a-z]+")
        assert rule("abc") is None
        assert rule("abc1") is not None

    def test_matches_custom_message(self) -> None:
        assert matches(r"\d+", "digits only")("x") == "digits only"

    def test_one_of(self) -> None:
        rule = one_of("asc", "desc")
        assert rule("asc") is None
        assert rule("up") == "Must be one of: asc, desc"

    def test_numbers(self) -> None:
        assert integer("42") is None
        assert integer("4.2") == "Must be a whole number"
        assert number("4.2") is None
        assert number("four") == "Must be a number"


class TestValidate:
    def test_valid(self) -> None:
        result = validate({"page": "2", "extra": "x"}, {"page": [integer]})
        assert result
        assert result.data == {"page": "2"}

    def test_invalid(self) -> None:
        result = validate({"page": "two"}, {"page": [integer]})
        assert not result
        assert result.errors == {"page": ["Must be a whole number"]}

    def test_absent_optional_skipped(self) -> None:
        result = validate({}, {"page": [integer]})
        assert result.is_valid
        assert result.data == {}

    def test_required_short_circuits(self) -> None:
        result = validate({}, {"slug": [required, min_length(3)]})
        assert result.errors == {"slug": ["This field is required"]}


class TestRulesSchema:
    def test_protocol(self) -> None:
        assert isinstance(Rules({}), Schema)

    def test_returns_cleaned(self) -> None:
        schema = Rules({"sort": [one_of("asc", "desc")]})
        assert schema.validate({"sort": "asc", "junk": "1"}) == {"sort": "asc"}

    def test_raises_schema_error(self) -> None:
        schema = Rules({"page": [integer], "sort": [one_of("asc")]})
        with pytest.raises(SchemaError) as exc_info:
            schema.validate({"page": "x", "sort": "desc"})
        assert "page: Must be a whole number" in str(exc_info.value)
        assert "sort: Must be one of: asc" in str(exc_info.value)

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(SchemaError, match="Expected an object"):
            Rules({"a": [required]}).validate(["a"])


class TestExtraRules:
    def test_slug(self) -> None:
        assert slug("my-post-2") is None
        assert slug("My Post") is not None
        assert slug("trailing-") is not None

    def test_bounds(self) -> None:
        assert at_least(1)("1") is None
        assert at_least(1)("0") == "Must be at least 1"
        assert at_most(2.5)("3") == "Must be at most 2.5"
        assert at_most(10)("x") is not None

    def test_result_pairs(self) -> None:
        result = ValidationResult(data={}, errors={"a": ["x", "y"], "b": ["z"]})
        assert result.pairs() == [("a", "x"), ("a", "y"), ("b", "z")]
