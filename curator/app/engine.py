"""
Public entry points.

Thin, stateless wrappers that resolve a profile type through the
process-wide registry and delegate to the component modules. Every
entry point takes plain data (dicts, strings, Mode) and returns plain
data or frozen pydantic models.

Mode is an explicit argument wherever it matters; there is no global
default mode.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Union

from curator.app.checks import security, structural
from curator.app.config import CuratorConfig
from curator.app.coordinator.coordinator import CurationCoordinator
from curator.app.guidance import field_metadata as guidance
from curator.app.modes import modes
from curator.app.registry.registry import default_registry
from curator.app.schemas.completion import CompletionStatus
from curator.app.schemas.field_metadata import (
    AllFieldsMetadata,
    CompletionHint,
    EnhancedSuggestions,
    FieldMetadata,
    NextStep,
    SuggestionBuckets,
)
from curator.app.schemas.findings import StructuralError
from curator.app.schemas.modes import Mode
from curator.app.schemas.profile_definition import ProfileCategory, ProfileDefinition
from curator.app.schemas.validation_result import (
    BatchValidationResult,
    SecurityReport,
    ValidationResult,
    ValidationStats,
)
from curator.app.scoring import completion


@lru_cache(maxsize=1)
def coordinator() -> CurationCoordinator:
    return CurationCoordinator(
        config=CuratorConfig.from_env(),
        registry=default_registry(),
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def get(profile_type: str) -> ProfileDefinition:
    return default_registry().get(profile_type)


def list_profiles() -> List[str]:
    return default_registry().list_profiles()


def profiles_by_category(category: Union[ProfileCategory, str]) -> List[str]:
    return default_registry().profiles_by_category(category)


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def validate_structure(
    document: Mapping[str, Any],
    profile_type: str,
) -> List[StructuralError]:
    return structural.validate_structure(document, get(profile_type))


def inspect_security(
    document: Mapping[str, Any],
    sanitize: bool = False,
) -> SecurityReport:
    return security.inspect(document, sanitize, config=coordinator().config)


def validate(
    document: Mapping[str, Any],
    profile_type: str,
    sanitize: Optional[bool] = None,
) -> ValidationResult:
    return coordinator().validate(document, profile_type, sanitize=sanitize)


def validate_batch(
    documents: List[Mapping[str, Any]],
    profile_type: str,
    sanitize: Optional[bool] = None,
) -> BatchValidationResult:
    return coordinator().validate_batch(documents, profile_type, sanitize=sanitize)


def validation_stats(
    documents: List[Mapping[str, Any]],
    profile_type: str,
) -> ValidationStats:
    return coordinator().validation_stats(documents, profile_type)


# ---------------------------------------------------------------------------
# Guidance and scoring
# ---------------------------------------------------------------------------


def field_metadata(
    profile_type: str,
    field_name: str,
    document: Optional[Mapping[str, Any]] = None,
) -> Optional[FieldMetadata]:
    return guidance.field_metadata(get(profile_type), field_name, document)


def all_fields_metadata(profile_type: str) -> AllFieldsMetadata:
    return guidance.all_fields_metadata(get(profile_type))


def suggest(profile_type: str, document: Mapping[str, Any]) -> SuggestionBuckets:
    return guidance.suggest(get(profile_type), document)


def enhanced_suggestions(
    profile_type: str,
    document: Mapping[str, Any],
    include_optional: bool = True,
) -> EnhancedSuggestions:
    return guidance.enhanced_suggestions(
        get(profile_type),
        document,
        include_optional=include_optional,
    )


def completion_hints(profile_type: str, partial: str = "") -> List[CompletionHint]:
    return guidance.completion_hints(get(profile_type), partial)


def next_steps(profile_type: str, document: Mapping[str, Any]) -> List[NextStep]:
    return guidance.next_steps(get(profile_type), document)


def score(profile_type: str, document: Mapping[str, Any]) -> CompletionStatus:
    return completion.score(get(profile_type), document)


# ---------------------------------------------------------------------------
# Output shaping
# ---------------------------------------------------------------------------


def build(
    document: Mapping[str, Any],
    mode: Union[Mode, str],
    profile_type: str,
) -> modes.BuildOutput:
    return modes.build(document, mode, get(profile_type))


def profile_properties(profile_type: str) -> Dict[str, Any]:
    return modes.profile_properties(get(profile_type))


def minimal_example(
    profile_type: str,
    mode: Union[Mode, str],
) -> Dict[str, Any]:
    return modes.minimal_example(get(profile_type), mode)
