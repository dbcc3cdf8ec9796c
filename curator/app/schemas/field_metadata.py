"""
Field metadata and suggestion schemas.

Field metadata is DERIVED, never stored: it combines a field's constraint
from the profile definition with human-readable guidance, example values
and an importance tag computed against the document under inspection.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic import ConfigDict

from curator.app.schemas.profile_definition import FieldConstraint, Tier


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class Importance(str, Enum):
    """
    Importance of a field for one specific document.

    - CRITICAL: required and absent
    - IMPORTANT: recommended, absent, rich-result tagged
    - HELPFUL: recommended, absent, not rich-result tagged
    - OPTIONAL_AVAILABLE: optional and absent
    - SATISFIED: present, regardless of tier
    """

    CRITICAL = "critical"
    IMPORTANT = "important"
    HELPFUL = "helpful"
    OPTIONAL_AVAILABLE = "optional-available"
    SATISFIED = "satisfied"


class FieldCategory(str, Enum):
    """
    Coarse grouping of fields for presentation.
    """

    BASIC = "basic"
    CONTENT = "content"
    METADATA = "metadata"
    SEO = "seo"
    LLM = "llm"
    RICH_RESULTS = "rich_results"


class GuidanceSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# ---------------------------------------------------------------------------
# Field metadata
# ---------------------------------------------------------------------------


class FieldGuidance(BaseModel):
    message: str
    action: str
    severity: GuidanceSeverity

    model_config = ConfigDict(frozen=True, extra="forbid")


class FieldMetadata(BaseModel):
    """
    Metadata for one (profile, field) pair.
    """

    name: str = Field(..., description="Property name")

    type: str = Field(
        ...,
        description="Type label derived from the constraint (e.g. 'string|object')",
    )

    tier: Tier = Field(..., description="Tier the field is declared in")

    importance: Importance = Field(
        ...,
        description="Importance relative to the inspected document",
    )

    category: FieldCategory = Field(..., description="Presentation category")

    description: str = Field(..., description="What the field holds")

    examples: Tuple[str, ...] = Field(
        (),
        description="Example values rendered as display strings",
    )

    rich_result: bool = Field(
        False,
        description="Whether the field is consumed by rich-result rendering",
    )

    llm_optimized: bool = Field(
        False,
        description="Whether the field is valued by LLM ingestion",
    )

    constraint: FieldConstraint = Field(
        ...,
        description="The constraint declared in the profile definition",
    )

    guidance: FieldGuidance

    model_config = ConfigDict(frozen=True, extra="forbid")


class Suggestion(FieldMetadata):
    """
    A field metadata entry emitted into a suggestion bucket.
    """

    reason: str = Field(..., description="Why the field is being suggested")

    priority: int = Field(
        ...,
        ge=1,
        le=4,
        description="1 critical, 2 important, 3 helpful, 4 optional",
    )


class SuggestionBuckets(BaseModel):
    """
    Missing fields grouped by urgency.

    The optional bucket is never truncated here; display limits are a
    presentation concern of the caller.
    """

    critical: List[Suggestion] = Field(default_factory=list)
    important: List[Suggestion] = Field(default_factory=list)
    helpful: List[Suggestion] = Field(default_factory=list)
    optional: List[Suggestion] = Field(default_factory=list)

    @property
    def missing_recommended(self) -> List[Suggestion]:
        return [*self.important, *self.helpful]

    def names(self, bucket: str) -> List[str]:
        return [s.name for s in getattr(self, bucket)]

    model_config = ConfigDict(frozen=True, extra="forbid")


class AllFieldsMetadata(BaseModel):
    required: List[FieldMetadata] = Field(default_factory=list)
    recommended: List[FieldMetadata] = Field(default_factory=list)
    optional: List[FieldMetadata] = Field(default_factory=list)

    def all(self) -> List[FieldMetadata]:
        return [*self.required, *self.recommended, *self.optional]

    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Enhanced suggestions, hints and next steps
# ---------------------------------------------------------------------------


class SuggestionSummary(BaseModel):
    total_fields: int
    required_fields: int
    recommended_fields: int
    optional_fields: int
    rich_result_fields: int
    llm_optimized_fields: int

    model_config = ConfigDict(frozen=True, extra="forbid")


class EnhancedSuggestions(BaseModel):
    buckets: SuggestionBuckets
    summary: Optional[SuggestionSummary] = None

    model_config = ConfigDict(frozen=True, extra="forbid")


class CompletionHint(BaseModel):
    """
    Autocomplete entry for editor integrations.
    """

    label: str
    kind: str = "property"
    detail: str
    documentation: str
    insert_text: str
    sort_text: str
    tier: Tier
    rich_result: bool
    llm_optimized: bool

    model_config = ConfigDict(frozen=True, extra="forbid")


class NextStep(BaseModel):
    priority: int
    type: str
    message: str
    fields: List[str]
    action: str

    model_config = ConfigDict(frozen=True, extra="forbid")
