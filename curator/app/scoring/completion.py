"""
Tiered completion scoring.

The scorer consumes the suggestion service's presence buckets and turns
them into a CompletionStatus:

    required score    = 100 * present required    / scored required
    recommended score = 100 * present recommended / scored recommended
    overall score     = 100 * (present req + rec) / (scored req + rec)

An empty tier scores 100. The optional tier never enters the numeric
grade. Displayed scores are rounded half away from zero; the status
classification uses the unrounded overall value.

Scoring is a pure function of (definition, document). Nothing is cached.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from curator.app.guidance.field_metadata import suggest
from curator.app.schemas.completion import (
    CompletionLevel,
    CompletionStatus,
    OptionalCompletion,
    OverallCompletion,
    TierCompletion,
)
from curator.app.schemas.field_metadata import SuggestionBuckets
from curator.app.schemas.profile_definition import ProfileDefinition, Tier
from curator.app.utils.numbers import percentage, round_half_away_from_zero

logger = logging.getLogger(__name__)


GOOD_THRESHOLD = 80
FAIR_THRESHOLD = 60


def classify(overall: float) -> CompletionLevel:
    """
    Status for an UNROUNDED overall score.
    """
    if overall >= 100:
        return CompletionLevel.COMPLETE
    if overall >= GOOD_THRESHOLD:
        return CompletionLevel.GOOD
    if overall >= FAIR_THRESHOLD:
        return CompletionLevel.FAIR
    return CompletionLevel.INCOMPLETE


def _display(score: float) -> int:
    return int(round_half_away_from_zero(score))


def score(
    definition: ProfileDefinition,
    document: Mapping[str, Any],
) -> CompletionStatus:
    return score_buckets(definition, suggest(definition, document))


def score_buckets(
    definition: ProfileDefinition,
    buckets: SuggestionBuckets,
) -> CompletionStatus:
    """
    Score presence buckets already computed for a document.
    """
    required_total = len(definition.scored_fields(Tier.REQUIRED))
    recommended_total = len(definition.scored_fields(Tier.RECOMMENDED))

    missing_recommended = buckets.missing_recommended
    required_done = required_total - len(buckets.critical)
    recommended_done = recommended_total - len(missing_recommended)

    required_score = percentage(required_done, required_total)
    recommended_score = percentage(recommended_done, recommended_total)
    overall_score = percentage(
        required_done + recommended_done,
        required_total + recommended_total,
    )

    status = CompletionStatus(
        profile_type=definition.type,
        required=TierCompletion(
            score=_display(required_score),
            completed=required_done,
            total=required_total,
            missing=buckets.critical,
        ),
        recommended=TierCompletion(
            score=_display(recommended_score),
            completed=recommended_done,
            total=recommended_total,
            missing=missing_recommended,
        ),
        optional=OptionalCompletion(
            available=len(buckets.optional),
            suggested=buckets.optional,
        ),
        overall=OverallCompletion(
            score=_display(overall_score),
            status=classify(overall_score),
        ),
    )

    logger.debug(
        "Completion for %s: overall %.2f (%s)",
        definition.type,
        overall_score,
        status.overall.status.value,
    )
    return status
