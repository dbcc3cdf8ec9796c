"""
Tests for the public entry points.

Coverage matrix:

  Registry        list / category / lookup            → bundled profiles
  Checks          structure, security, validate       → delegated results
  Guidance        metadata, suggestions, next steps   → delegated results
  Scoring         score                               → CompletionStatus
  Output shaping  build, properties, minimal example  → mode-shaped output
  Errors          unknown profile / mode              → configuration errors
"""

from unittest.mock import patch

import pytest

from curator.app import engine
from curator.app.config import CuratorConfig
from curator.app.coordinator.coordinator import CurationCoordinator
from curator.app.errors import InvalidModeError, ProfileNotFoundError
from curator.app.schemas.completion import CompletionLevel
from curator.app.schemas.modes import Mode, SplitChannelsOutput
from curator.tests.fixtures.documents import (
    ARTICLE_PROFILE_URL,
    complete_article,
    minimal_article,
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def test_registry_entry_points():
    assert "Article" in engine.list_profiles()
    assert engine.profiles_by_category("technology") == ["SoftwareApplication"]
    assert engine.get("Recipe").type == "Recipe"


def test_unknown_profile_is_a_configuration_error():
    with pytest.raises(ProfileNotFoundError):
        engine.validate(minimal_article(), "Podcast")

    with pytest.raises(ProfileNotFoundError):
        engine.score("Podcast", {})


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def test_validate_structure_entry_point():
    document = minimal_article()
    document["wordCount"] = "many"

    errors = engine.validate_structure(document, "Article")

    assert [e.field for e in errors] == ["wordCount"]


def test_inspect_security_entry_point():
    report = engine.inspect_security({"url": "javascript:alert(1)"}, sanitize=True)

    assert len(report.warnings) == 1
    assert report.sanitized == {}


def test_validate_and_batch_entry_points():
    result = engine.validate(minimal_article(), "Article", sanitize=False)

    assert result.valid is True
    assert result.sanitized is None

    batch = engine.validate_batch([minimal_article(), {}], "Article")
    assert batch.summary.valid == 1
    assert batch.summary.invalid == 1

    stats = engine.validation_stats([complete_article()], "Article")
    assert stats.average_rich_results_coverage == 100


# ---------------------------------------------------------------------------
# Guidance and scoring
# ---------------------------------------------------------------------------

def test_guidance_entry_points():
    assert engine.field_metadata("Article", "headline").tier.value == "required"
    assert engine.field_metadata("Article", "ingredients") is None
    assert len(engine.all_fields_metadata("Article").all()) == 30

    buckets = engine.suggest("Article", {"headline": "Hello World"})
    assert buckets.names("critical") == ["author", "datePublished"]

    enhanced = engine.enhanced_suggestions(
        "Article",
        minimal_article(),
        include_optional=False,
    )
    assert enhanced.buckets.optional == []

    hints = engine.completion_hints("Article", "head")
    assert [h.label for h in hints] == ["headline"]

    steps = engine.next_steps("Article", minimal_article())
    assert steps[0].type == "google-rich-results"


def test_score_entry_point():
    status = engine.score("Article", complete_article())

    assert status.overall.status is CompletionLevel.COMPLETE


# ---------------------------------------------------------------------------
# Output shaping
# ---------------------------------------------------------------------------

def test_build_entry_point():
    output = engine.build(minimal_article(), Mode.SPLIT_CHANNELS, "Article")

    assert isinstance(output, SplitChannelsOutput)
    assert output.secondary["identifier"] == ARTICLE_PROFILE_URL


def test_build_requires_a_valid_mode():
    with pytest.raises(InvalidModeError):
        engine.build(minimal_article(), "seo", "Article")


def test_profile_properties_entry_point():
    properties = engine.profile_properties("Article")

    assert properties["schemaVersion"] == ARTICLE_PROFILE_URL


def test_minimal_example_entry_point():
    example = engine.minimal_example("Event", Mode.STRICT_SEO)

    assert example["@type"] == "Event"
    assert example["startDate"] == "2024-01-01T00:00:00Z"
    assert engine.validate(example, "Event").valid is True


def test_validate_uses_the_process_coordinator():
    limited = CurationCoordinator(config=CuratorConfig(SUGGESTION_DISPLAY_LIMIT=1))

    with patch.object(engine, "coordinator", return_value=limited):
        result = engine.validate(minimal_article(), "Article")

    assert [s.field for s in result.suggestions] == ["name"]
