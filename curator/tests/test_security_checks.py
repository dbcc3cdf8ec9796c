"""
Tests for the security sanitization advisor.

Coverage matrix:

  Safe URL             https in URL field                       → no finding, unchanged
  Script protocol      javascript: / vbscript: URL              → high, value removed
  Obfuscated scheme    whitespace inside the scheme             → still flagged
  Data URI             well-formed data: URI in any field       → medium, value removed
  Disallowed scheme    ftp: unless allow-listed                 → medium, value removed
  Markup               tags / script blocks in text             → stripped, text kept
  Event handlers       handler after a quote or inside a tag    → high, stripped
  Handler-like prose   "online = free"                          → untouched
  Arrays               unsafe member                            → member dropped, indexed path
  Nesting              unsafe nested member                     → dotted path
  Prose with colon     "Update: ..."                            → untouched
  Scheme-like title    "JavaScript: ..." outside URL fields     → fragment stripped, value kept
  Immutability         caller's document                        → never mutated
  Report only          sanitize=False                           → sanitized is None
"""

import copy

import pytest

from curator.app.checks.security import inspect
from curator.app.config import CuratorConfig
from curator.app.schemas.findings import SecurityFindingKind, SecuritySeverity


def _kinds(report):
    return [w.kind for w in report.warnings]


# ---------------------------------------------------------------------------
# URI-valued fields
# ---------------------------------------------------------------------------

def test_safe_url_is_unchanged():
    document = {"url": "https://example.com/article"}

    report = inspect(document, sanitize=True)

    assert report.warnings == []
    assert report.sanitized == document


def test_javascript_url_is_flagged_and_removed():
    document = {"headline": "Hello", "url": "javascript:alert(1)"}

    report = inspect(document, sanitize=True)

    assert len(report.warnings) == 1
    warning = report.warnings[0]
    assert warning.field == "url"
    assert warning.kind is SecurityFindingKind.SCRIPT_PROTOCOL
    assert warning.severity is SecuritySeverity.HIGH
    assert warning.message == "JavaScript protocol removed from URL"
    assert report.sanitized == {"headline": "Hello"}


def test_vbscript_url_is_flagged():
    report = inspect({"url": "VBScript:msgbox(1)"}, sanitize=True)

    assert _kinds(report) == [SecurityFindingKind.SCRIPT_PROTOCOL]
    assert report.warnings[0].message == "VBScript protocol removed from URL"
    assert report.sanitized == {}


def test_whitespace_inside_scheme_does_not_hide_it():
    report = inspect({"url": " java\tscript:alert(1)"}, sanitize=True)

    assert _kinds(report) == [SecurityFindingKind.SCRIPT_PROTOCOL]
    assert report.sanitized == {}


def test_data_uri_is_flagged_in_any_field():
    document = {
        "image": "data:image/png;base64,AAAA",
        "text": "data:text/html,<b>x</b>",
    }

    report = inspect(document, sanitize=True)

    assert _kinds(report) == [
        SecurityFindingKind.DATA_URI,
        SecurityFindingKind.DATA_URI,
    ]
    assert {w.severity for w in report.warnings} == {SecuritySeverity.MEDIUM}
    assert report.sanitized == {}


def test_scheme_outside_allow_list_is_removed():
    document = {"downloadUrl": "ftp://files.example.com/app.zip"}

    report = inspect(document, sanitize=True)

    assert _kinds(report) == [SecurityFindingKind.DISALLOWED_SCHEME]
    assert report.sanitized == {}


def test_allow_list_is_configurable():
    config = CuratorConfig(ALLOWED_URL_SCHEMES=("https", "ftp"))
    document = {"downloadUrl": "ftp://files.example.com/app.zip"}

    report = inspect(document, sanitize=True, config=config)

    assert report.warnings == []
    assert report.sanitized == document


def test_relative_url_is_allowed():
    report = inspect({"url": "/articles/42"}, sanitize=True)

    assert report.warnings == []
    assert report.sanitized == {"url": "/articles/42"}


def test_overlong_url_is_removed():
    config = CuratorConfig(MAX_URL_LENGTH=30)
    document = {"url": "https://example.com/" + "a" * 40}

    report = inspect(document, sanitize=True, config=config)

    assert _kinds(report) == [SecurityFindingKind.MALFORMED_URL]
    assert report.warnings[0].severity is SecuritySeverity.LOW
    assert report.sanitized == {}


# ---------------------------------------------------------------------------
# Text values
# ---------------------------------------------------------------------------

def test_markup_is_stripped_from_text():
    report = inspect({"description": "Hello <b>world</b>"}, sanitize=True)

    assert _kinds(report) == [SecurityFindingKind.MARKUP]
    assert report.warnings[0].message == "HTML tags removed from field: <b>, </b>"
    assert report.sanitized == {"description": "Hello world"}


def test_script_block_is_removed_with_its_content():
    report = inspect(
        {"articleBody": "Intro<script>alert('x')</script> outro"},
        sanitize=True,
    )

    assert _kinds(report) == [SecurityFindingKind.SCRIPT]
    assert report.warnings[0].severity is SecuritySeverity.HIGH
    assert report.sanitized == {"articleBody": "Intro outro"}


def test_javascript_fragment_in_text_is_stripped():
    report = inspect({"description": "click javascript:void(0) here"}, sanitize=True)

    assert _kinds(report) == [SecurityFindingKind.SCRIPT_PROTOCOL]
    assert report.sanitized == {"description": "click void(0) here"}


def test_inline_event_handler_is_stripped():
    report = inspect(
        {"description": 'Nice" onmouseover="alert(1)'},
        sanitize=True,
    )

    assert _kinds(report) == [SecurityFindingKind.SCRIPT]
    assert report.sanitized == {"description": 'Nice" "alert(1)'}


def test_handler_like_prose_is_not_flagged():
    document = {"description": "Lessons are available online = free for members"}

    report = inspect(document, sanitize=True)

    assert report.warnings == []
    assert report.sanitized == document


def test_scheme_like_title_keeps_its_text():
    document = {
        "@type": "Book",
        "name": "JavaScript: The Good Parts",
        "description": "Data: collected in 2020",
    }

    report = inspect(document, sanitize=True)

    assert [w.field for w in report.warnings] == ["name"]
    assert report.warnings[0].message == "JavaScript protocol removed from field"
    assert report.sanitized == {
        "@type": "Book",
        "name": " The Good Parts",
        "description": "Data: collected in 2020",
    }


def test_prose_with_a_colon_is_not_a_uri():
    document = {"headline": "Update: new release", "description": "Note: read me"}

    report = inspect(document, sanitize=True)

    assert report.warnings == []
    assert report.sanitized == document


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def test_unsafe_array_member_is_dropped():
    document = {
        "sameAs": [
            "https://en.wikipedia.org/wiki/Example",
            "javascript:alert(1)",
            "https://example.com",
        ]
    }

    report = inspect(document, sanitize=True)

    assert [w.field for w in report.warnings] == ["sameAs[1]"]
    assert report.sanitized == {
        "sameAs": [
            "https://en.wikipedia.org/wiki/Example",
            "https://example.com",
        ]
    }


def test_nested_member_reports_dotted_path():
    document = {
        "author": {
            "@type": "Person",
            "name": "Jane",
            "url": "javascript:alert(1)",
        }
    }

    report = inspect(document, sanitize=True)

    assert [w.field for w in report.warnings] == ["author.url"]
    assert report.sanitized == {"author": {"@type": "Person", "name": "Jane"}}


def test_non_string_values_pass_through():
    document = {"wordCount": 500, "isAccessibleForFree": True, "rating": None}

    report = inspect(document, sanitize=True)

    assert report.warnings == []
    assert report.sanitized == document


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------

def test_callers_document_is_never_mutated():
    document = {
        "url": "javascript:alert(1)",
        "description": "<i>x</i>",
        "sameAs": ["data:,x"],
    }
    before = copy.deepcopy(document)

    inspect(document, sanitize=True)

    assert document == before


def test_report_only_mode_has_no_sanitized_copy():
    report = inspect({"url": "javascript:alert(1)"})

    assert len(report.warnings) == 1
    assert report.sanitized is None


def test_findings_are_logged(caplog):
    with caplog.at_level("WARNING", logger="curator.app.checks.security"):
        inspect({"url": "javascript:alert(1)"})

    assert "1 issue(s)" in caplog.text
    assert "url" in caplog.text


def test_non_mapping_document_raises_type_error():
    with pytest.raises(TypeError):
        inspect("javascript:alert(1)")
