"""
Field metadata and suggestion service.

Derives per-field metadata from a profile definition and classifies the
fields a document is missing into urgency buckets. This is the single
place where PRESENCE is decided:

    a field is present iff its top-level key exists and its value is
    not None.

Envelope fields (@type, @context and the profile-identifying
properties) belong to the builder and mode layers; they never appear in
suggestions, hints or next steps.

Buckets are never truncated here. Display limits are the caller's
concern.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from curator.app.guidance.catalog import (
    describe_field,
    field_category,
    field_examples,
    field_guidance,
)
from curator.app.schemas.field_metadata import (
    AllFieldsMetadata,
    CompletionHint,
    EnhancedSuggestions,
    FieldMetadata,
    Importance,
    NextStep,
    Suggestion,
    SuggestionBuckets,
    SuggestionSummary,
)
from curator.app.schemas.profile_definition import ProfileDefinition, Tier


_SORT_PREFIX = {
    Tier.REQUIRED: "0",
    Tier.RECOMMENDED: "1",
    Tier.OPTIONAL: "2",
}

NEXT_STEP_OPTIONAL_PREVIEW = 3


def is_present(document: Optional[Mapping[str, Any]], field_name: str) -> bool:
    if not document:
        return False
    return document.get(field_name) is not None


def _importance(
    definition: ProfileDefinition,
    field_name: str,
    tier: Tier,
    present: bool,
) -> Importance:
    if present:
        return Importance.SATISFIED
    if tier is Tier.REQUIRED:
        return Importance.CRITICAL
    if tier is Tier.RECOMMENDED:
        if definition.is_rich_result(field_name):
            return Importance.IMPORTANT
        return Importance.HELPFUL
    return Importance.OPTIONAL_AVAILABLE


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def field_metadata(
    definition: ProfileDefinition,
    field_name: str,
    document: Optional[Mapping[str, Any]] = None,
) -> Optional[FieldMetadata]:
    """
    Metadata for one field, or None when the profile does not declare it.

    Without a document, importance is reported as if the field were
    absent.
    """
    tier = definition.tier_of(field_name)
    if tier is None:
        return None

    constraint = definition.tier_fields(tier)[field_name]

    return FieldMetadata(
        name=field_name,
        type=constraint.type_label,
        tier=tier,
        importance=_importance(
            definition,
            field_name,
            tier,
            is_present(document, field_name),
        ),
        category=field_category(field_name),
        description=describe_field(field_name, constraint),
        examples=field_examples(field_name, constraint),
        rich_result=definition.is_rich_result(field_name),
        llm_optimized=definition.is_llm_optimized(field_name),
        constraint=constraint,
        guidance=field_guidance(field_name, tier),
    )


def all_fields_metadata(
    definition: ProfileDefinition,
    document: Optional[Mapping[str, Any]] = None,
) -> AllFieldsMetadata:
    def tier_metadata(tier: Tier) -> List[FieldMetadata]:
        return [
            field_metadata(definition, name, document)
            for name in definition.scored_fields(tier)
        ]

    return AllFieldsMetadata(
        required=tier_metadata(Tier.REQUIRED),
        recommended=tier_metadata(Tier.RECOMMENDED),
        optional=tier_metadata(Tier.OPTIONAL),
    )


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------


def _suggestion(meta: FieldMetadata, reason: str, priority: int) -> Suggestion:
    return Suggestion(**dict(meta), reason=reason, priority=priority)


def suggest(
    definition: ProfileDefinition,
    document: Mapping[str, Any],
) -> SuggestionBuckets:
    """
    Bucket every absent, non-envelope field of the profile.

    Bucket order follows declaration order within each tier.
    """
    fields = all_fields_metadata(definition, document)

    critical = [
        _suggestion(meta, "Required field missing", 1)
        for meta in fields.required
        if meta.importance is Importance.CRITICAL
    ]

    important: List[Suggestion] = []
    helpful: List[Suggestion] = []
    for meta in fields.recommended:
        if meta.importance is Importance.IMPORTANT:
            important.append(
                _suggestion(meta, "Recommended for Google Rich Results", 2)
            )
        elif meta.importance is Importance.HELPFUL:
            helpful.append(_suggestion(meta, "Recommended for better SEO", 3))

    optional = [
        _suggestion(meta, "Optional enhancement", 4)
        for meta in fields.optional
        if meta.importance is Importance.OPTIONAL_AVAILABLE
    ]

    return SuggestionBuckets(
        critical=critical,
        important=important,
        helpful=helpful,
        optional=optional,
    )


def enhanced_suggestions(
    definition: ProfileDefinition,
    document: Mapping[str, Any],
    *,
    include_optional: bool = True,
    include_summary: bool = True,
) -> EnhancedSuggestions:
    buckets = suggest(definition, document)

    if not include_optional:
        buckets = buckets.model_copy(update={"optional": []})

    summary = None
    if include_summary:
        everything = [
            *buckets.critical,
            *buckets.important,
            *buckets.helpful,
            *buckets.optional,
        ]
        summary = SuggestionSummary(
            total_fields=len(everything),
            required_fields=len(buckets.critical),
            recommended_fields=len(buckets.missing_recommended),
            optional_fields=len(buckets.optional),
            rich_result_fields=sum(1 for s in everything if s.rich_result),
            llm_optimized_fields=sum(1 for s in everything if s.llm_optimized),
        )

    return EnhancedSuggestions(buckets=buckets, summary=summary)


# ---------------------------------------------------------------------------
# Editor support
# ---------------------------------------------------------------------------


def completion_hints(
    definition: ProfileDefinition,
    partial: str = "",
) -> List[CompletionHint]:
    """
    Autocomplete entries, filtered by case-insensitive substring match.

    sort_text orders required before recommended before optional.
    """
    needle = (partial or "").lower()

    return [
        CompletionHint(
            label=meta.name,
            detail=f"{meta.tier.value} - {meta.type}",
            documentation=meta.description,
            insert_text=meta.name,
            sort_text=f"{_SORT_PREFIX[meta.tier]}_{meta.name}",
            tier=meta.tier,
            rich_result=meta.rich_result,
            llm_optimized=meta.llm_optimized,
        )
        for meta in all_fields_metadata(definition).all()
        if needle in meta.name.lower()
    ]


def next_steps(
    definition: ProfileDefinition,
    document: Mapping[str, Any],
) -> List[NextStep]:
    buckets = suggest(definition, document)
    steps: List[NextStep] = []

    if buckets.critical:
        steps.append(
            NextStep(
                priority=1,
                type="required",
                message=f"Add {len(buckets.critical)} required field(s)",
                fields=buckets.names("critical"),
                action="Complete required fields to make the schema valid",
            )
        )

    if buckets.important:
        steps.append(
            NextStep(
                priority=2,
                type="google-rich-results",
                message=(
                    f"Add {len(buckets.important)} Google Rich Results field(s)"
                ),
                fields=buckets.names("important"),
                action="Add these fields to improve search result appearance",
            )
        )

    if buckets.helpful:
        steps.append(
            NextStep(
                priority=3,
                type="recommended",
                message=(
                    f"Consider adding {len(buckets.helpful)} recommended field(s)"
                ),
                fields=buckets.names("helpful"),
                action="Add these fields for better SEO and completeness",
            )
        )

    if buckets.optional:
        steps.append(
            NextStep(
                priority=4,
                type="optional",
                message=f"{len(buckets.optional)} optional field(s) available",
                fields=buckets.names("optional")[:NEXT_STEP_OPTIONAL_PREVIEW],
                action="Add these fields for enhanced functionality",
            )
        )

    return steps
