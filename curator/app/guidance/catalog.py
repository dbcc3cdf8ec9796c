"""
Presentation catalog for profile fields.

Static, human-facing text keyed by field name, constraint type or format:
default descriptions, example values, presentation categories, per-tier
guidance and fix-hint examples.

Nothing here depends on a document. The catalog never affects tiering,
presence or scoring.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from curator.app.schemas.field_metadata import (
    FieldCategory,
    FieldGuidance,
    GuidanceSeverity,
)
from curator.app.schemas.findings import FixHint
from curator.app.schemas.profile_definition import (
    ConstraintType,
    FieldConstraint,
    Tier,
)


# ---------------------------------------------------------------------------
# Field descriptions
# ---------------------------------------------------------------------------

_DEFAULT_DESCRIPTIONS: Dict[str, str] = {
    "name": "The name or title of the item",
    "description": "A description of the item",
    "url": "The URL of the item",
    "image": "An image of the item",
    "author": "The author of the item",
    "publisher": "The publisher of the item",
    "datePublished": "The date the item was published",
    "dateModified": "The date the item was last modified",
    "headline": "The headline of the article",
    "articleBody": "The main content of the article",
    "keywords": "Keywords describing the item",
    "inLanguage": "The language of the content",
    "mainEntityOfPage": "The main entity of the page",
}


def describe_field(field_name: str, constraint: FieldConstraint) -> str:
    if constraint.description:
        return constraint.description
    return _DEFAULT_DESCRIPTIONS.get(field_name, f"The {field_name} field")


# ---------------------------------------------------------------------------
# Example values
# ---------------------------------------------------------------------------

_FIELD_EXAMPLES: Dict[str, Tuple[str, ...]] = {
    "name": ('"My Article Title"', '"Product Name"', '"Event Name"'),
    "description": (
        '"A brief description of the item"',
        '"Detailed description with key information"',
    ),
    "url": ('"https://example.com/article"', '"https://example.com/product"'),
    "image": (
        '"https://example.com/image.jpg"',
        "ImageObject with url, width, height",
    ),
    "author": ('"John Doe"', "Person object with name and url"),
    "datePublished": ('"2024-01-01T00:00:00Z"', '"2024-01-01"'),
    "keywords": (
        '"keyword1, keyword2, keyword3"',
        '["keyword1", "keyword2"]',
    ),
    "inLanguage": ('"en"', '"en-US"', '"es"'),
    "headline": (
        '"Breaking News: Important Update"',
        '"How to Build a Website"',
    ),
}


def field_examples(field_name: str, constraint: FieldConstraint) -> Tuple[str, ...]:
    """
    Display-ready example values for a field.

    Named fields have curated examples; everything else falls back to
    examples derived from the declared primitive type.
    """
    if field_name in _FIELD_EXAMPLES:
        return _FIELD_EXAMPLES[field_name]

    t = constraint.type
    if t is ConstraintType.STRING:
        return (f'"example {field_name}"',)
    if t in (ConstraintType.NUMBER, ConstraintType.INTEGER):
        return ("123", "45.67")
    if t is ConstraintType.BOOLEAN:
        return ("true", "false")
    if t is ConstraintType.ARRAY:
        return ('["item1", "item2"]', "[]")
    if t is ConstraintType.OBJECT:
        return ("{}", "Object with properties")

    return ("Example value",)


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

_CATEGORY_MAP: Dict[str, FieldCategory] = {
    "@type": FieldCategory.BASIC,
    "@context": FieldCategory.BASIC,
    "name": FieldCategory.BASIC,
    "description": FieldCategory.BASIC,
    "url": FieldCategory.BASIC,
    "image": FieldCategory.BASIC,
    "headline": FieldCategory.CONTENT,
    "articleBody": FieldCategory.CONTENT,
    "keywords": FieldCategory.CONTENT,
    "content": FieldCategory.CONTENT,
    "text": FieldCategory.CONTENT,
    "author": FieldCategory.METADATA,
    "publisher": FieldCategory.METADATA,
    "datePublished": FieldCategory.METADATA,
    "dateModified": FieldCategory.METADATA,
    "inLanguage": FieldCategory.METADATA,
    "mainEntityOfPage": FieldCategory.SEO,
    "breadcrumb": FieldCategory.SEO,
    "canonical": FieldCategory.SEO,
    "about": FieldCategory.LLM,
    "mentions": FieldCategory.LLM,
    "topics": FieldCategory.LLM,
    "aggregateRating": FieldCategory.RICH_RESULTS,
    "review": FieldCategory.RICH_RESULTS,
    "offers": FieldCategory.RICH_RESULTS,
}


def field_category(field_name: str) -> FieldCategory:
    return _CATEGORY_MAP.get(field_name, FieldCategory.BASIC)


# ---------------------------------------------------------------------------
# Tier guidance
# ---------------------------------------------------------------------------

_TIER_GUIDANCE: Dict[Tier, Tuple[str, str, GuidanceSeverity]] = {
    Tier.REQUIRED: (
        "This field is required for valid structured data",
        "You must provide a value for this field",
        GuidanceSeverity.ERROR,
    ),
    Tier.RECOMMENDED: (
        "This field is recommended for better SEO and rich results",
        "Consider adding this field to improve visibility",
        GuidanceSeverity.WARNING,
    ),
    Tier.OPTIONAL: (
        "This field is optional but can enhance your structured data",
        "Add this field if relevant to your content",
        GuidanceSeverity.INFO,
    ),
}

# Appended to the recommended-tier message only
_RECOMMENDED_ADDENDA: Dict[str, str] = {
    "image": ". Images help with rich results and social sharing",
    "description": ". Descriptions improve search result snippets",
    "keywords": ". Keywords help with content categorization",
}


def field_guidance(field_name: str, tier: Tier) -> FieldGuidance:
    message, action, severity = _TIER_GUIDANCE[tier]

    if tier is Tier.RECOMMENDED:
        message += _RECOMMENDED_ADDENDA.get(field_name, "")

    return FieldGuidance(message=message, action=action, severity=severity)


# ---------------------------------------------------------------------------
# Fix hints
# ---------------------------------------------------------------------------

_TYPE_EXAMPLES: Dict[str, Tuple[str, ...]] = {
    "string": ('"text value"', '"example"'),
    "number": ("123", "45.67"),
    "integer": ("123", "456"),
    "boolean": ("true", "false"),
    "array": ('["item1", "item2"]', "[]"),
    "object": ("{}", '{ "property": "value" }'),
}

_FORMAT_EXAMPLES: Dict[str, Tuple[str, ...]] = {
    "date": ("2024-01-01", "YYYY-MM-DD format"),
    "date-time": ("2024-01-01T00:00:00Z", "ISO 8601 format"),
    "uri": ("https://example.com", "Valid URL"),
    "email": ("user@example.com", "Valid email address"),
    "uri-reference": ("/path", "Relative or absolute URI"),
}

_FIELD_HINTS: Dict[str, FixHint] = {
    "url": FixHint(
        type="url-help",
        title="URL format:",
        items=("https://example.com/path", "Must be a valid HTTP/HTTPS URL"),
    ),
    "datePublished": FixHint(
        type="date-help",
        title="Date format:",
        items=(
            "2024-01-01T00:00:00Z",
            "2024-01-01",
            "ISO 8601 format preferred",
        ),
    ),
    "email": FixHint(
        type="email-help",
        title="Email format:",
        items=("user@example.com", "Must be a valid email address"),
    ),
}
_FIELD_HINTS["image"] = _FIELD_HINTS["url"]
_FIELD_HINTS["dateModified"] = _FIELD_HINTS["datePublished"]


def fix_hints(
    field_name: str,
    *,
    keyword: str,
    expected: Optional[str],
    examples: Tuple[str, ...] = (),
) -> List[FixHint]:
    """
    Hints that help an author correct one structural error.

    keyword is the failing constraint keyword; expected is the type or
    format name when the keyword is 'type' or 'format'.
    """
    hints: List[FixHint] = []

    if examples:
        hints.append(
            FixHint(type="examples", title="Example values:", items=examples)
        )

    if keyword == "type" and expected:
        hints.append(
            FixHint(
                type="type-help",
                title=f"Expected type: {expected}",
                items=_TYPE_EXAMPLES.get(expected, ("Valid value",)),
            )
        )
    elif keyword == "format" and expected:
        hints.append(
            FixHint(
                type="format-help",
                title=f"Expected format: {expected}",
                items=_FORMAT_EXAMPLES.get(expected, ("Valid format",)),
            )
        )

    field_hint = _FIELD_HINTS.get(field_name)
    if field_hint is not None:
        hints.append(field_hint)

    return hints
