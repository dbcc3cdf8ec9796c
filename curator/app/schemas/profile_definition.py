"""
Profile definition schema.

Defines the declarative structure of a profile: one document type with
three property tiers (required, recommended, optional), per-field
constraints, and two consumer tag lists (rich-result and LLM-optimized
fields).

Definitions are:
- data, not code (loaded from JSON by the registry)
- immutable once loaded
- validated at registry build time; violations are fatal

The constraint keywords mirror the JSON-Schema subset used by the
definition files and are accepted under their camelCase names.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator
from pydantic import ConfigDict


# ---------------------------------------------------------------------------
# Envelope fields
# ---------------------------------------------------------------------------

# Properties that identify the profile a document was built against.
# Owned by the builder / mode layer.
PROFILE_IDENTIFYING_PROPERTIES: Tuple[str, ...] = (
    "additionalType",
    "schemaVersion",
    "identifier",
    "additionalProperty",
)

# Excluded from suggestions and scoring, still structurally validated.
ENVELOPE_FIELDS: frozenset = frozenset(
    {"@type", "@context", *PROFILE_IDENTIFYING_PROPERTIES}
)


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class Tier(str, Enum):
    """
    Field tier within a profile.

    Ordering is intentional: required before recommended before optional.
    """

    REQUIRED = "required"
    RECOMMENDED = "recommended"
    OPTIONAL = "optional"


class ProfileCategory(str, Enum):
    BUSINESS = "business"
    CONTENT = "content"
    INTERACTION = "interaction"
    TECHNOLOGY = "technology"


class ConstraintType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class ConstraintFormat(str, Enum):
    DATE = "date"
    DATE_TIME = "date-time"
    URI = "uri"
    URI_REFERENCE = "uri-reference"
    EMAIL = "email"


# ---------------------------------------------------------------------------
# Field constraint
# ---------------------------------------------------------------------------


class FieldConstraint(BaseModel):
    """
    Constraint on a single property value.

    Either a primitive type (optionally refined by format, bounds, items
    or nested properties), a disjunction of alternative shapes (anyOf),
    or a fixed literal (const).
    """

    type: Optional[ConstraintType] = None

    any_of: Optional[List["FieldConstraint"]] = Field(
        None,
        alias="anyOf",
        description="Alternative shapes; a value must satisfy at least one",
    )

    const: Optional[Any] = Field(
        None,
        description="Fixed literal value (presence tracked via model_fields_set)",
    )

    format: Optional[ConstraintFormat] = None

    min_length: Optional[int] = Field(None, alias="minLength", ge=0)
    max_length: Optional[int] = Field(None, alias="maxLength", ge=0)

    minimum: Optional[float] = None
    maximum: Optional[float] = None

    items: Optional["FieldConstraint"] = Field(
        None,
        description="Constraint applied to every array member",
    )

    # Declared before properties so a missing member is reported first
    required_properties: Optional[List[str]] = Field(
        None,
        alias="required",
        description="Nested members that must be present on an object value",
    )

    properties: Optional[Dict[str, "FieldConstraint"]] = Field(
        None,
        description="Constraints on nested object members",
    )

    description: Optional[str] = None

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def enforce_constraint_shape(self):
        """
        A constraint must say something about the value:
        - at least one of type, anyOf, const
        - anyOf must list at least one alternative
        - bounds must be ordered
        """
        if self.type is None and self.any_of is None and not self.has_const:
            raise ValueError(
                "Field constraint must declare at least one of "
                "'type', 'anyOf' or 'const'"
            )

        if self.any_of is not None and not self.any_of:
            raise ValueError("'anyOf' must list at least one alternative")

        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError("'minLength' must not exceed 'maxLength'")

        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError("'minimum' must not exceed 'maximum'")

        return self

    # ------------------------------------------------------------------
    # Derived views (read-only)
    # ------------------------------------------------------------------

    @property
    def has_const(self) -> bool:
        return "const" in self.model_fields_set

    @property
    def type_label(self) -> str:
        """
        Short type label used in field metadata and completion hints.
        """
        if self.type is not None:
            return self.type.value
        if self.any_of:
            labels: List[str] = []
            for alternative in self.any_of:
                label = alternative.type_label
                if label not in labels:
                    labels.append(label)
            return "|".join(labels)
        return "const"

    def json_schema(self) -> Dict[str, Any]:
        """
        The constraint as the JSON Schema fragment it was declared as.
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")

    def describe(self) -> str:
        """
        Human-readable description of the expected shape.
        """
        if self.has_const:
            return f"constant {self.const!r}"

        if self.any_of:
            return " or ".join(alt.describe() for alt in self.any_of)

        parts: List[str] = [self.type.value if self.type else "value"]
        refinements: List[str] = []

        if self.format is not None:
            refinements.append(f"format {self.format.value}")
        if self.min_length is not None:
            refinements.append(f"min length {self.min_length}")
        if self.max_length is not None:
            refinements.append(f"max length {self.max_length}")
        if self.minimum is not None:
            refinements.append(f">= {self.minimum:g}")
        if self.maximum is not None:
            refinements.append(f"<= {self.maximum:g}")
        if self.items is not None:
            refinements.append(f"items: {self.items.describe()}")

        if refinements:
            parts.append(f"({', '.join(refinements)})")

        return " ".join(parts)

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )


FieldConstraint.model_rebuild()


# ---------------------------------------------------------------------------
# Profile definition (PUBLIC, FROZEN)
# ---------------------------------------------------------------------------


class ProfileDefinition(BaseModel):
    """
    Declarative definition of one document type.

    THIS IS THE READ-ONLY LEAF OF THE ENGINE.
    Every other component derives its behaviour from these tables.
    """

    type: str = Field(
        ...,
        min_length=1,
        description="Registry key of the profile (e.g. 'Article')",
    )

    category: ProfileCategory = Field(
        ...,
        description="Profile category used to derive profile URLs",
    )

    schema_type: str = Field(
        ...,
        alias="schemaType",
        description="Vocabulary type URL (e.g. https://schema.org/Article)",
    )

    profile_url: str = Field(
        ...,
        alias="profileUrl",
        description="Canonical URL identifying this profile",
    )

    description: str = Field(
        "",
        description="Human-readable description of the profile",
    )

    required: Dict[str, FieldConstraint] = Field(default_factory=dict)
    recommended: Dict[str, FieldConstraint] = Field(default_factory=dict)
    optional: Dict[str, FieldConstraint] = Field(default_factory=dict)

    rich_result_fields: Tuple[str, ...] = Field(
        (),
        alias="richResultFields",
        description="Fields consumed by search rich-result rendering",
    )

    llm_optimized_fields: Tuple[str, ...] = Field(
        (),
        alias="llmOptimizedFields",
        description="Fields valued by language-model ingestion",
    )

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def enforce_tier_exclusivity(self):
        """
        A field must appear in exactly one tier.
        """
        seen: Dict[str, Tier] = {}
        conflicts: List[str] = []

        for tier in Tier:
            for name in self.tier_fields(tier):
                if name in seen:
                    conflicts.append(
                        f"'{name}' ({seen[name].value}, {tier.value})"
                    )
                else:
                    seen[name] = tier

        if conflicts:
            raise ValueError(
                f"Profile '{self.type}' declares fields in more than one "
                f"tier: {', '.join(conflicts)}"
            )

        return self

    # ------------------------------------------------------------------
    # Derived views (read-only)
    # ------------------------------------------------------------------

    def tier_fields(self, tier: Tier) -> Dict[str, FieldConstraint]:
        if tier is Tier.REQUIRED:
            return self.required
        if tier is Tier.RECOMMENDED:
            return self.recommended
        return self.optional

    def scored_fields(self, tier: Tier) -> List[str]:
        """
        Field names of a tier that take part in suggestions and scoring.

        Envelope fields are excluded. Declaration order is preserved.
        """
        return [
            name
            for name in self.tier_fields(tier)
            if name not in ENVELOPE_FIELDS
        ]

    @property
    def merged_fields(self) -> Dict[str, FieldConstraint]:
        return {**self.required, **self.recommended, **self.optional}

    def tier_of(self, field_name: str) -> Optional[Tier]:
        for tier in Tier:
            if field_name in self.tier_fields(tier):
                return tier
        return None

    def constraint_for(self, field_name: str) -> Optional[FieldConstraint]:
        return self.merged_fields.get(field_name)

    def is_rich_result(self, field_name: str) -> bool:
        return field_name in self.rich_result_fields

    def is_llm_optimized(self, field_name: str) -> bool:
        return field_name in self.llm_optimized_fields

    @property
    def vocabulary_type(self) -> str:
        """
        Value expected in the document's '@type' discriminator.
        """
        type_constraint = self.required.get("@type")
        if type_constraint is not None and type_constraint.has_const:
            return str(type_constraint.const)
        return self.type

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )
