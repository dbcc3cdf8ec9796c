"""
Validation coordinator.

IMPORTANT:
The coordinator is a DUMB AUTHORITY.

It MUST NOT:
- reinterpret findings produced by the checks
- let advisory findings influence validity
- derive coverage scores from the completion grade (or vice versa)

Its sole responsibilities are:
- resolving the profile definition
- running structure, suggestion, completion and security checks
- aggregating results
- constructing the final ValidationResult
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from curator.app.checks.security import inspect
from curator.app.checks.structural import validate_structure
from curator.app.config import CuratorConfig
from curator.app.guidance.field_metadata import is_present, suggest
from curator.app.registry.registry import (
    BUNDLED_DEFINITIONS_DIR,
    ProfileRegistry,
    default_registry,
)
from curator.app.schemas.field_metadata import Suggestion
from curator.app.schemas.findings import (
    OptionalSuggestion,
    ValidationWarning,
    WarningPriority,
)
from curator.app.schemas.profile_definition import ProfileDefinition, Tier
from curator.app.schemas.validation_result import (
    BatchSummary,
    BatchValidationResult,
    CountedItem,
    CoverageReport,
    FieldCoverage,
    ValidationResult,
    ValidationStats,
)
from curator.app.scoring.completion import score_buckets
from curator.app.utils.numbers import percentage

logger = logging.getLogger(__name__)


COMMON_FINDINGS_LIMIT = 10


class CurationCoordinator:
    """
    Combined validation of documents against registry profiles.

    Execution order per document:
        1. Structural validation (blocking)
        2. Presence buckets (blocking for required, advisory otherwise)
        3. Completion scoring (descriptive)
        4. Security inspection (advisory)
        5. Coverage of rich-result and LLM-optimized fields (descriptive)
    """

    def __init__(
        self,
        config: Optional[CuratorConfig] = None,
        registry: Optional[ProfileRegistry] = None,
    ) -> None:
        """
        Direct constructor.

        Intended for tests and explicit wiring. Without a registry the
        process-wide default registry is used.
        """
        self._config = config or CuratorConfig()
        self._registry = registry if registry is not None else default_registry()

    # ------------------------------------------------------------------
    # Integration constructor (composition root)
    # ------------------------------------------------------------------

    @classmethod
    def from_config(cls, config: CuratorConfig) -> "CurationCoordinator":
        """
        Construct a coordinator whose registry is loaded from the
        configured definition directory.
        """
        registry = ProfileRegistry.from_directory(
            config.PROFILES_DIR or BUNDLED_DEFINITIONS_DIR
        )
        return cls(config=config, registry=registry)

    @property
    def registry(self) -> ProfileRegistry:
        return self._registry

    @property
    def config(self) -> CuratorConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(
        self,
        document: Mapping[str, Any],
        profile_type: str,
        *,
        sanitize: Optional[bool] = None,
    ) -> ValidationResult:
        """
        Validate one document.

        sanitize=None falls back to SANITIZE_BY_DEFAULT.
        Raises ProfileNotFoundError for an unknown profile type.
        """
        definition = self._registry.get(profile_type)

        if sanitize is None:
            sanitize = self._config.SANITIZE_BY_DEFAULT

        errors = validate_structure(document, definition)
        buckets = suggest(definition, document)
        completion = score_buckets(definition, buckets)
        security = inspect(document, sanitize, config=self._config)

        rich_results = self._coverage(document, definition.rich_result_fields)
        llm_optimization = self._coverage(document, definition.llm_optimized_fields)

        # Envelope fields count for validity even though they are never scored
        missing_required = [
            name for name in definition.required if not is_present(document, name)
        ]

        result = ValidationResult(
            profile_type=definition.type,
            valid=not errors and not missing_required,
            errors=errors,
            missing_required=missing_required,
            warnings=self._warnings(definition, buckets.missing_recommended),
            suggestions=[
                self._optional_suggestion(s)
                for s in buckets.optional[: self._config.SUGGESTION_DISPLAY_LIMIT]
            ],
            security_warnings=security.warnings,
            rich_results_coverage=rich_results.score,
            llm_optimization_score=llm_optimization.score,
            rich_results=rich_results,
            llm_optimization=llm_optimization,
            completion=completion,
            sanitized=security.sanitized,
        )

        logger.debug(
            "Validated %s document: valid=%s errors=%d missing_required=%d "
            "warnings=%d security_warnings=%d",
            definition.type,
            result.valid,
            len(result.errors),
            len(result.missing_required),
            len(result.warnings),
            len(result.security_warnings),
        )
        return result

    def validate_batch(
        self,
        documents: Iterable[Mapping[str, Any]],
        profile_type: str,
        *,
        sanitize: Optional[bool] = None,
    ) -> BatchValidationResult:
        results = [
            self.validate(document, profile_type, sanitize=sanitize)
            for document in documents
        ]
        return BatchValidationResult(
            summary=self._summarize(results),
            results=results,
        )

    def validation_stats(
        self,
        documents: Sequence[Mapping[str, Any]],
        profile_type: str,
    ) -> ValidationStats:
        """
        Aggregate statistics over a dataset.

        Averages and field percentages are 0 for an empty dataset.
        """
        definition = self._registry.get(profile_type)
        batch = self.validate_batch(documents, profile_type, sanitize=False)
        results = batch.results
        count = len(results)

        field_coverage = {}
        for name in definition.merged_fields:
            present = sum(1 for document in documents if is_present(document, name))
            field_coverage[name] = FieldCoverage(
                count=present,
                percentage=present * 100.0 / count if count else 0.0,
            )

        error_counts = Counter(
            f"{error.field}: {error.message}"
            for result in results
            for error in result.errors
        )
        warning_counts = Counter(
            warning.field
            for result in results
            for warning in result.warnings
        )

        return ValidationStats(
            summary=batch.summary,
            average_rich_results_coverage=self._average(
                r.rich_results_coverage for r in results
            ),
            average_llm_optimization=self._average(
                r.llm_optimization_score for r in results
            ),
            field_coverage=field_coverage,
            common_errors=self._most_common(error_counts),
            common_warnings=self._most_common(warning_counts),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _coverage(
        document: Mapping[str, Any],
        tagged_fields: Sequence[str],
    ) -> CoverageReport:
        present = [name for name in tagged_fields if is_present(document, name)]
        missing = [name for name in tagged_fields if not is_present(document, name)]
        return CoverageReport(
            score=percentage(len(present), len(tagged_fields)),
            present=present,
            missing=missing,
            total=len(tagged_fields),
        )

    @staticmethod
    def _warnings(
        definition: ProfileDefinition,
        missing_recommended: List[Suggestion],
    ) -> List[ValidationWarning]:
        by_name = {s.name: s for s in missing_recommended}
        warnings: List[ValidationWarning] = []

        # Declaration order, not bucket order
        for name in definition.scored_fields(Tier.RECOMMENDED):
            suggestion = by_name.get(name)
            if suggestion is None:
                continue

            if suggestion.rich_result:
                priority = WarningPriority.HIGH
                reason = "Important for Google Rich Results"
            elif suggestion.llm_optimized:
                priority = WarningPriority.MEDIUM
                reason = "Optimized for LLM processing"
            else:
                priority = WarningPriority.LOW
                reason = "Recommended for better SEO"

            warnings.append(
                ValidationWarning(
                    field=name,
                    message=(
                        f"Recommended field '{name}' is missing. "
                        f"{suggestion.guidance.message}"
                    ),
                    action=suggestion.guidance.action,
                    importance=suggestion.importance,
                    priority=priority,
                    reason=reason,
                    rich_result=suggestion.rich_result,
                    llm_optimized=suggestion.llm_optimized,
                    examples=suggestion.examples,
                )
            )

        return warnings

    @staticmethod
    def _optional_suggestion(suggestion: Suggestion) -> OptionalSuggestion:
        return OptionalSuggestion(
            field=suggestion.name,
            message=f"Optional field '{suggestion.name}' is available",
            action=suggestion.guidance.action,
            examples=suggestion.examples,
        )

    @staticmethod
    def _summarize(results: List[ValidationResult]) -> BatchSummary:
        valid = sum(1 for r in results if r.valid)
        return BatchSummary(
            total=len(results),
            valid=valid,
            invalid=len(results) - valid,
            with_warnings=sum(1 for r in results if r.warnings),
            rich_results_complete=sum(1 for r in results if r.rich_results.complete),
            llm_optimized=sum(1 for r in results if r.llm_optimization.complete),
        )

    @staticmethod
    def _average(values: Iterable[float]) -> float:
        values = list(values)
        return sum(values) / len(values) if values else 0.0

    @staticmethod
    def _most_common(counts: Counter) -> List[CountedItem]:
        return [
            CountedItem(key=key, count=count)
            for key, count in counts.most_common(COMMON_FINDINGS_LIMIT)
        ]
