"""
Structural validation of a document against a profile definition.

For each top-level field that is present in the document and declared in
any tier, the value is checked against its constraint with a jsonschema
Draft 7 validator. Violations are collected, never raised, and never
short-circuit: every offending field is reported, exactly once, with the
innermost violating path.

Scope rules:
- Unknown top-level fields are ignored (open content model).
- A None value counts as absent and is not checked, at any depth.
- Absent required fields are NOT structural errors; presence is the
  concern of the suggestion service.

Error handling policy:
    Only a non-mapping document raises (TypeError); that is a caller
    bug. Everything about the document's contents is reported as data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError as SchemaViolation

from curator.app.checks.formats import FORMAT_CHECKER
from curator.app.guidance.catalog import (
    describe_field,
    field_category,
    field_examples,
    field_guidance,
    fix_hints,
)
from curator.app.schemas.findings import FieldGuidanceSummary, StructuralError
from curator.app.schemas.profile_definition import (
    FieldConstraint,
    ProfileDefinition,
    Tier,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Violation:
    path: str
    keyword: str
    constraint: FieldConstraint
    value: Any
    limit: Any = None


# ---------------------------------------------------------------------------
# Value-level helpers
# ---------------------------------------------------------------------------


def json_type(value: Any) -> str:
    """JSON type name of a Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _without_nulls(value: Any) -> Any:
    # Nested None members are absent, as they are at the top level
    if isinstance(value, Mapping):
        return {
            name: _without_nulls(member)
            for name, member in value.items()
            if member is not None
        }
    if isinstance(value, (list, tuple)):
        return [_without_nulls(member) for member in value]
    return value


def _first_violation(
    value: Any,
    constraint: FieldConstraint,
    field_name: str,
) -> Optional[_Violation]:
    """
    Return the first violation jsonschema reports for value, or None.

    Errors come out in keyword declaration order. Nested violations report
    the innermost path (e.g. 'author.name', 'mentions[2]').
    """
    validator = Draft7Validator(
        constraint.json_schema(),
        format_checker=FORMAT_CHECKER,
    )
    error: Optional[SchemaViolation] = next(
        validator.iter_errors(_without_nulls(value)),
        None,
    )
    if error is None:
        return None

    path = field_name
    for part in error.absolute_path:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"

    violated = FieldConstraint.model_validate(error.schema)

    if error.validator == "required":
        missing = next(
            name for name in error.validator_value if name not in error.instance
        )
        return _Violation(f"{path}.{missing}", "required", violated, None, missing)

    limit = None if error.validator == "anyOf" else error.validator_value
    return _Violation(path, str(error.validator), violated, error.instance, limit)


# ---------------------------------------------------------------------------
# Error construction
# ---------------------------------------------------------------------------


def _message(violation: _Violation, guidance_message: str) -> str:
    subject = f"Field '{violation.path}'"
    keyword = violation.keyword
    limit = violation.limit

    if keyword == "type":
        text = f"{subject} must be of type {limit}"
    elif keyword == "format":
        text = f"{subject} has invalid format. Expected {limit} format"
    elif keyword == "minLength":
        text = f"{subject} is too short. Minimum length is {limit} characters"
    elif keyword == "maxLength":
        text = f"{subject} is too long. Maximum length is {limit} characters"
    elif keyword == "minimum":
        text = f"{subject} value is too small. Minimum value is {limit:g}"
    elif keyword == "maximum":
        text = f"{subject} value is too large. Maximum value is {limit:g}"
    elif keyword == "const":
        text = f"{subject} must be {limit!r}"
    elif keyword == "required":
        text = f"{subject} is missing"
    else:
        text = (
            f"{subject} does not match any allowed shape "
            f"({violation.constraint.describe()})"
        )

    return f"{text}. {guidance_message}"


def _structural_error(
    field_name: str,
    definition: ProfileDefinition,
    violation: _Violation,
) -> StructuralError:
    tier = definition.tier_of(field_name) or Tier.OPTIONAL
    constraint = definition.tier_fields(tier)[field_name]
    examples = field_examples(field_name, constraint)
    guidance = field_guidance(field_name, tier)

    hint_subject = (
        violation.limit if violation.keyword in ("type", "format") else None
    )

    return StructuralError(
        field=field_name,
        path=violation.path,
        keyword=violation.keyword,
        message=_message(violation, guidance.message),
        expected=violation.constraint.describe(),
        actual_type=json_type(violation.value),
        value=violation.value,
        guidance=FieldGuidanceSummary(
            description=describe_field(field_name, constraint),
            examples=examples,
            tier=tier,
            category=field_category(field_name),
            rich_result=definition.is_rich_result(field_name),
            llm_optimized=definition.is_llm_optimized(field_name),
        ),
        hints=fix_hints(
            field_name,
            keyword=violation.keyword,
            expected=hint_subject,
            examples=examples,
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_structure(
    document: Mapping[str, Any],
    definition: ProfileDefinition,
) -> List[StructuralError]:
    """
    Check every present, declared top-level field of document.

    Returns one StructuralError per offending field, in declaration order
    (required, then recommended, then optional).
    """
    if not isinstance(document, Mapping):
        raise TypeError(
            f"document must be a mapping, got {type(document).__name__}"
        )

    errors: List[StructuralError] = []

    for field_name, constraint in definition.merged_fields.items():
        value = document.get(field_name)
        if value is None:
            continue

        violation = _first_violation(value, constraint, field_name)
        if violation is not None:
            errors.append(_structural_error(field_name, definition, violation))

    logger.debug(
        "Structural validation of %s document: %d error(s)",
        definition.type,
        len(errors),
    )
    return errors
