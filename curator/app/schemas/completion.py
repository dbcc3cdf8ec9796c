"""
CompletionStatus schema.

A completion status is a snapshot of one document at one point in time.
It is recomputed on every call and never cached, since the document can
be mutated between calls by the builder layer.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field
from pydantic import ConfigDict

from curator.app.schemas.field_metadata import Suggestion


class CompletionLevel(str, Enum):
    """
    Overall completion classification.

    Thresholds (applied to the unrounded overall score):
    - COMPLETE: exactly 100
    - GOOD: >= 80
    - FAIR: >= 60
    - INCOMPLETE: < 60
    """

    COMPLETE = "complete"
    GOOD = "good"
    FAIR = "fair"
    INCOMPLETE = "incomplete"


class TierCompletion(BaseModel):
    score: int = Field(..., ge=0, le=100, description="Rounded percentage")
    completed: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    missing: List[Suggestion] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")


class OptionalCompletion(BaseModel):
    available: int = Field(
        ...,
        ge=0,
        description="Number of optional fields not yet present",
    )
    suggested: List[Suggestion] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")


class OverallCompletion(BaseModel):
    score: int = Field(..., ge=0, le=100, description="Rounded percentage")
    status: CompletionLevel

    model_config = ConfigDict(frozen=True, extra="forbid")


class CompletionStatus(BaseModel):
    """
    Tiered completion snapshot for one document.

    The optional tier never contributes to the numeric grade.
    """

    profile_type: str
    required: TierCompletion
    recommended: TierCompletion
    optional: OptionalCompletion
    overall: OverallCompletion

    model_config = ConfigDict(frozen=True, extra="forbid")
