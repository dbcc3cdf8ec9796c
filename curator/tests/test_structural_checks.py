"""
Tests for structural validation and format predicates.

Coverage matrix:

  Valid document        all required fields, valid values              → no errors
  Open content model    undeclared fields                              → ignored
  Absent values         None / missing                                 → not checked
  Primitive types       bool is not integer; integral float is         → type errors
  anyOf                 no alternative matches                         → one anyOf error
  const                 wrong literal                                  → const error
  Bounds                minLength / minimum                            → bound errors
  Nested paths          array members, nested required members         → innermost path
  Collection            several offending fields                       → one error each
  Guidance              examples, format help, field-specific help     → hints attached
  Formats               library predicates, trailing line breaks       → rejected
  Caller bug            non-mapping document                           → TypeError
"""

import pytest

from curator.app.checks.formats import (
    is_date,
    is_date_time,
    is_email,
    is_uri,
    is_uri_reference,
)
from curator.app.checks.structural import json_type, validate_structure
from curator.app.registry.registry import default_registry
from curator.app.schemas.field_metadata import FieldCategory
from curator.app.schemas.profile_definition import Tier
from curator.tests.fixtures.documents import (
    complete_article,
    minimal_article,
    registry_of,
    widget_definition,
)


def _article():
    return default_registry().get("Article")


def _errors_by_field(document):
    return {e.field: e for e in validate_structure(document, _article())}


# ---------------------------------------------------------------------------
# Valid documents
# ---------------------------------------------------------------------------

def test_minimal_article_has_no_structural_errors():
    assert validate_structure(minimal_article(), _article()) == []


def test_complete_article_has_no_structural_errors():
    assert validate_structure(complete_article(), _article()) == []


def test_undeclared_fields_are_ignored():
    document = minimal_article()
    document["customField"] = {"anything": [1, 2, 3]}

    assert validate_structure(document, _article()) == []


def test_none_values_are_not_checked():
    document = minimal_article()
    document["wordCount"] = None
    document["url"] = None

    assert validate_structure(document, _article()) == []


def test_missing_required_fields_are_not_structural_errors():
    assert validate_structure({"headline": "Hello World"}, _article()) == []


# ---------------------------------------------------------------------------
# Constraint keywords
# ---------------------------------------------------------------------------

def test_min_length_violation():
    document = minimal_article()
    document["headline"] = "X"

    errors = validate_structure(document, _article())

    assert len(errors) == 1
    error = errors[0]
    assert error.field == "headline"
    assert error.keyword == "minLength"
    assert error.actual_type == "string"
    assert error.value == "X"
    assert "Minimum length is 3" in error.message


def test_date_time_format_violation_carries_format_and_date_hints():
    document = minimal_article()
    document["datePublished"] = "yesterday"

    error = _errors_by_field(document)["datePublished"]

    assert error.keyword == "format"
    hint_types = [h.type for h in error.hints]
    assert hint_types == ["examples", "format-help", "date-help"]
    format_help = error.hints[1]
    assert format_help.title == "Expected format: date-time"
    assert "2024-01-01T00:00:00Z" in format_help.items


def test_anyof_violation_reports_actual_type():
    document = minimal_article()
    document["author"] = 42

    error = _errors_by_field(document)["author"]

    assert error.keyword == "anyOf"
    assert error.actual_type == "integer"
    assert "string or object" in error.expected


def test_bool_is_not_an_integer():
    document = minimal_article()
    document["wordCount"] = True

    error = _errors_by_field(document)["wordCount"]

    assert error.keyword == "type"
    assert error.actual_type == "boolean"
    assert [h.type for h in error.hints][:2] == ["examples", "type-help"]


def test_integral_float_is_an_integer():
    document = minimal_article()
    document["wordCount"] = 300.0

    assert validate_structure(document, _article()) == []


def test_fractional_float_is_not_an_integer():
    document = minimal_article()
    document["wordCount"] = 2.5

    assert _errors_by_field(document)["wordCount"].keyword == "type"


def test_minimum_violation():
    document = minimal_article()
    document["wordCount"] = 0

    error = _errors_by_field(document)["wordCount"]

    assert error.keyword == "minimum"
    assert "Minimum value is 1" in error.message


def test_const_violation_on_type_discriminator():
    document = minimal_article()
    document["@type"] = "BlogPosting"

    error = _errors_by_field(document)["@type"]

    assert error.keyword == "const"
    assert error.expected == "constant 'Article'"


def test_const_does_not_confuse_booleans_and_numbers():
    registry = registry_of(
        widget_definition(recommended={"flag": {"const": True}})
    )

    errors = validate_structure({"flag": 1}, registry.get("Widget"))

    assert [e.keyword for e in errors] == ["const"]


# ---------------------------------------------------------------------------
# Nested values
# ---------------------------------------------------------------------------

def test_array_member_violation_reports_indexed_path():
    document = minimal_article()
    document["mentions"] = ["Python", 3]

    error = _errors_by_field(document)["mentions"]

    assert error.path == "mentions[1]"
    assert error.keyword == "anyOf"
    assert error.actual_type == "integer"


def test_missing_nested_required_member():
    document = minimal_article()
    document["additionalProperty"] = {"@type": "PropertyValue", "name": "profile"}

    error = _errors_by_field(document)["additionalProperty"]

    assert error.keyword == "required"
    assert error.path == "additionalProperty.value"


def test_nested_none_member_counts_as_missing():
    document = minimal_article()
    document["additionalProperty"] = {
        "@type": "PropertyValue",
        "name": "profile",
        "value": None,
    }

    error = _errors_by_field(document)["additionalProperty"]

    assert error.keyword == "required"
    assert error.path == "additionalProperty.value"
    assert error.actual_type == "null"


def test_nested_const_violation():
    document = minimal_article()
    document["additionalProperty"] = {
        "@type": "PropertyValue",
        "name": "profile",
        "value": "https://example.com/other-profile",
    }

    error = _errors_by_field(document)["additionalProperty"]

    assert error.keyword == "const"
    assert error.path == "additionalProperty.value"


# ---------------------------------------------------------------------------
# Collection and guidance
# ---------------------------------------------------------------------------

def test_every_offending_field_is_reported_once():
    document = minimal_article()
    document.update(
        {
            "headline": "X",
            "datePublished": "not a date",
            "url": "example.com/no-scheme",
            "wordCount": -5,
            "copyrightYear": "2024",
        }
    )

    errors = validate_structure(document, _article())

    assert [e.field for e in errors] == [
        "headline",
        "datePublished",
        "wordCount",
        "url",
        "copyrightYear",
    ]


def test_error_guidance_describes_the_field():
    document = minimal_article()
    document["url"] = "not a url"

    error = _errors_by_field(document)["url"]

    assert error.guidance is not None
    assert error.guidance.tier is Tier.RECOMMENDED
    assert error.guidance.category is FieldCategory.BASIC
    assert error.guidance.description == "URL of the article"
    assert "url-help" in [h.type for h in error.hints]
    assert error.message.endswith(
        "This field is recommended for better SEO and rich results"
    )


def test_non_mapping_document_raises_type_error():
    with pytest.raises(TypeError):
        validate_structure(["not", "a", "document"], _article())


def test_json_type_names():
    assert json_type(None) == "null"
    assert json_type(True) == "boolean"
    assert json_type(3) == "integer"
    assert json_type(3.5) == "number"
    assert json_type("x") == "string"
    assert json_type([1]) == "array"
    assert json_type({"a": 1}) == "object"


# ---------------------------------------------------------------------------
# Format predicates
# ---------------------------------------------------------------------------

def test_date_predicate():
    assert is_date("2024-02-29")
    assert not is_date("2023-02-29")
    assert not is_date("2024-1-1")
    assert not is_date("2024-01-01T00:00:00Z")


def test_date_time_predicate():
    assert is_date_time("2024-01-01T00:00:00Z")
    assert is_date_time("2024-01-01T10:30:00.123+02:00")
    assert not is_date_time("2024-01-01T10:30")
    assert not is_date_time("2024-01-01")
    assert not is_date_time("2024-13-01T00:00:00Z")
    assert not is_date_time("2024-01-01T25:00:00Z")


def test_uri_predicates():
    assert is_uri("https://example.com/path")
    assert is_uri("mailto:user@example.com")
    assert not is_uri("example.com")
    assert not is_uri("https://example.com/with space")

    assert is_uri_reference("/relative/path")
    assert is_uri_reference("https://example.com")
    assert not is_uri_reference("has space")


def test_email_predicate():
    assert is_email("user@example.com")
    assert not is_email("user@example")
    assert not is_email("user example@example.com")


@pytest.mark.parametrize(
    "predicate, value",
    [
        (is_date, "2024-01-01\n"),
        (is_date_time, "2024-01-01T00:00:00Z\n"),
        (is_uri, "https://example.com/x\n"),
        (is_uri_reference, "/x\n"),
        (is_email, "a@b.co\n"),
    ],
)
def test_trailing_newline_never_conforms(predicate, value):
    assert not predicate(value)
    assert predicate(value.rstrip("\n"))


def test_trailing_newline_in_a_date_is_a_structural_error():
    document = minimal_article()
    document["datePublished"] = "2024-01-01T00:00:00Z\n"

    error = _errors_by_field(document)["datePublished"]

    assert error.keyword == "format"
    assert error.path == "datePublished"
