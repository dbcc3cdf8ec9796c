"""
Standardized finding schemas.

Defines the canonical structures used to report problems and advisory
observations about a document:

- StructuralError: a present field violates its constraint (blocking)
- ValidationWarning: a recommended field is missing (advisory)
- OptionalSuggestion: an optional field could be added (advisory)
- SecurityWarning: unsafe content was detected (advisory)

Only StructuralError (and missing required fields) can make a document
invalid. Everything else is descriptive, never prescriptive.
"""

from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic import ConfigDict

from curator.app.schemas.field_metadata import FieldCategory, Importance
from curator.app.schemas.profile_definition import Tier


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class SecuritySeverity(str, Enum):
    """
    Severity of a security finding.

    Ordering is intentional and MUST remain stable.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SecurityFindingKind(str, Enum):
    MARKUP = "markup"
    SCRIPT = "script"
    SCRIPT_PROTOCOL = "script_protocol"
    DATA_URI = "data_uri"
    DISALLOWED_SCHEME = "disallowed_scheme"
    MALFORMED_URL = "malformed_url"


class WarningPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ---------------------------------------------------------------------------
# Shared fragments
# ---------------------------------------------------------------------------


class FixHint(BaseModel):
    """
    A group of hints that helps an author fix a field.
    """

    type: str = Field(..., description="Hint kind (e.g. 'examples', 'format-help')")
    title: str
    items: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class FieldGuidanceSummary(BaseModel):
    """
    Guidance attached to a finding about a known profile field.
    """

    description: str
    examples: Tuple[str, ...] = ()
    tier: Tier
    category: FieldCategory
    rich_result: bool = False
    llm_optimized: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Findings (PUBLIC, FROZEN)
# ---------------------------------------------------------------------------


class StructuralError(BaseModel):
    """
    A present field whose value violates its constraint.

    Exactly one StructuralError is reported per offending field.
    """

    field: str = Field(..., description="Top-level property name")

    path: str = Field(
        ...,
        description="Path of the innermost violating value (e.g. 'mentions[2]')",
    )

    keyword: str = Field(
        ...,
        description="Constraint keyword that failed (type, format, const, ...)",
    )

    message: str = Field(..., description="Human-readable explanation")

    expected: str = Field(..., description="Description of the expected shape")

    actual_type: str = Field(..., description="Type of the offending value")

    value: Any = Field(None, description="The offending value")

    guidance: Optional[FieldGuidanceSummary] = None

    hints: List[FixHint] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")


class ValidationWarning(BaseModel):
    """
    A recommended field is missing.
    """

    field: str
    message: str
    action: str
    importance: Importance
    priority: WarningPriority
    reason: str
    rich_result: bool = False
    llm_optimized: bool = False
    examples: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class OptionalSuggestion(BaseModel):
    field: str
    message: str
    action: str
    examples: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class SecurityWarning(BaseModel):
    """
    Unsafe content detected in a document value.

    Security warnings are advisory and never affect validity.
    """

    field: str = Field(..., description="Dotted/indexed path of the value")
    message: str
    severity: SecuritySeverity
    kind: SecurityFindingKind

    model_config = ConfigDict(frozen=True, extra="forbid")
