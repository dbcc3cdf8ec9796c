"""
ValidationResult schema.

Defines the combined result produced for one document:

- structural errors (blocking),
- missing-field warnings and optional suggestions (advisory),
- security findings and an optional sanitized copy (advisory),
- rich-result coverage and LLM optimization scores,
- the completion snapshot.

Coverage scores and the completion grade are computed independently
and MUST NOT be derived from one another.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic import ConfigDict

from curator.app.schemas.completion import CompletionStatus
from curator.app.schemas.findings import (
    OptionalSuggestion,
    SecurityWarning,
    StructuralError,
    ValidationWarning,
)


# ---------------------------------------------------------------------------
# Intermediate Results (INTERNAL CONTRACTS)
# ---------------------------------------------------------------------------


class CoverageReport(BaseModel):
    """
    Presence of a tagged field list (rich-result or LLM-optimized).
    """

    score: float = Field(
        ...,
        ge=0,
        le=100,
        description="Percentage of tagged fields present (100 when none are tagged)",
    )

    present: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    total: int = Field(..., ge=0)

    @property
    def complete(self) -> bool:
        return not self.missing

    model_config = ConfigDict(frozen=True, extra="forbid")


class SecurityReport(BaseModel):
    """
    Result of the security sanitization advisor.
    """

    warnings: List[SecurityWarning] = Field(default_factory=list)

    sanitized: Optional[Dict[str, Any]] = Field(
        None,
        description="Deep-copied sanitized document (only when requested)",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Top-Level Result (PUBLIC, FROZEN CONTRACT)
# ---------------------------------------------------------------------------


class ValidationResult(BaseModel):
    """
    Combined validation result for one document and one profile type.

    valid is True iff every required field is present and no present
    field violates its constraint. Advisory findings never flip it.
    """

    profile_type: str

    valid: bool

    errors: List[StructuralError] = Field(default_factory=list)

    missing_required: List[str] = Field(
        default_factory=list,
        description="Required fields absent from the document",
    )

    warnings: List[ValidationWarning] = Field(default_factory=list)

    suggestions: List[OptionalSuggestion] = Field(default_factory=list)

    security_warnings: List[SecurityWarning] = Field(default_factory=list)

    rich_results_coverage: float = Field(..., ge=0, le=100)

    llm_optimization_score: float = Field(..., ge=0, le=100)

    rich_results: CoverageReport

    llm_optimization: CoverageReport

    completion: CompletionStatus

    sanitized: Optional[Dict[str, Any]] = None

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def enforce_validity_rule(self):
        """
        valid must agree with the blocking signals and nothing else.
        """
        expected = not self.errors and not self.missing_required
        if self.valid != expected:
            raise ValueError(
                "valid must be True iff there are no structural errors "
                "and no missing required fields"
            )
        return self

    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Batch results
# ---------------------------------------------------------------------------


class BatchSummary(BaseModel):
    total: int
    valid: int
    invalid: int
    with_warnings: int
    rich_results_complete: int
    llm_optimized: int

    model_config = ConfigDict(frozen=True, extra="forbid")


class BatchValidationResult(BaseModel):
    summary: BatchSummary
    results: List[ValidationResult] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")


class FieldCoverage(BaseModel):
    count: int
    percentage: float

    model_config = ConfigDict(frozen=True, extra="forbid")


class CountedItem(BaseModel):
    key: str
    count: int

    model_config = ConfigDict(frozen=True, extra="forbid")


class ValidationStats(BaseModel):
    """
    Aggregate statistics over a batch of documents.
    """

    summary: BatchSummary
    average_rich_results_coverage: float
    average_llm_optimization: float
    field_coverage: Dict[str, FieldCoverage] = Field(default_factory=dict)
    common_errors: List[CountedItem] = Field(default_factory=list)
    common_warnings: List[CountedItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")
