"""
Document and definition factories for tests.

Article documents are built against the bundled Article definition:

    required (scored):    headline, author, datePublished
    recommended (scored): 16 fields, 4 of them rich-result tagged
    optional:             11 fields
"""

import copy
from typing import Any, Dict, Optional

from curator.app.registry.registry import ProfileRegistry


ARTICLE_PROFILE_URL = (
    "https://llmprofiles.org/profiles/content/article/v1/index.jsonld"
)

ARTICLE_REQUIRED = ["headline", "author", "datePublished"]

ARTICLE_RICH_RECOMMENDED = ["description", "publisher", "articleBody", "image"]


# ---------------------------------------------------------------------------
# Article documents
# ---------------------------------------------------------------------------

def minimal_article() -> Dict[str, Any]:
    """Every required field, nothing else."""
    return {
        "@type": "Article",
        "headline": "Hello World",
        "author": "Jane Doe",
        "datePublished": "2024-01-01T00:00:00Z",
    }


def complete_article() -> Dict[str, Any]:
    """Every required and recommended field with valid values."""
    document = minimal_article()
    document.update(
        {
            "@context": "https://schema.org",
            "description": "A short summary",
            "dateModified": "2024-02-01T00:00:00Z",
            "publisher": "Example Press",
            "articleBody": "The body of the article.",
            "articleSection": "News",
            "keywords": ["python", "metadata"],
            "wordCount": 500,
            "image": "https://example.com/image.jpg",
            "url": "https://example.com/article",
            "inLanguage": "en",
            "mainEntityOfPage": "https://example.com/article",
            "speakable": {"@type": "SpeakableSpecification"},
            "about": "Structured data",
            "mentions": ["JSON-LD", {"@type": "Thing", "name": "Schema"}],
            "isPartOf": "https://example.com/series",
            "@id": "https://example.com/article#main",
        }
    )
    document.update(article_profile_properties())
    return document


def article_profile_properties() -> Dict[str, Any]:
    return {
        "additionalType": ARTICLE_PROFILE_URL,
        "schemaVersion": ARTICLE_PROFILE_URL,
        "identifier": ARTICLE_PROFILE_URL,
        "additionalProperty": {
            "@type": "PropertyValue",
            "name": "profile",
            "value": ARTICLE_PROFILE_URL,
        },
    }


# ---------------------------------------------------------------------------
# Custom definitions
# ---------------------------------------------------------------------------

def widget_definition(
    *,
    required: Optional[Dict[str, Any]] = None,
    recommended: Optional[Dict[str, Any]] = None,
    optional: Optional[Dict[str, Any]] = None,
    rich: Optional[list] = None,
    llm: Optional[list] = None,
    type_name: str = "Widget",
) -> Dict[str, Any]:
    """Raw definition data for a small technology profile."""
    return {
        "type": type_name,
        "category": "technology",
        "schemaType": f"https://schema.org/{type_name}",
        "profileUrl": (
            f"https://llmprofiles.org/profiles/technology/"
            f"{type_name.lower()}/v1/index.jsonld"
        ),
        "description": "Test profile",
        "required": copy.deepcopy(
            required if required is not None else {"@type": {"const": type_name}}
        ),
        "recommended": copy.deepcopy(recommended or {}),
        "optional": copy.deepcopy(optional or {}),
        "richResultFields": list(rich or []),
        "llmOptimizedFields": list(llm or []),
    }


def string_fields(*names: str) -> Dict[str, Any]:
    return {name: {"type": "string"} for name in names}


def registry_of(*definitions: Dict[str, Any]) -> ProfileRegistry:
    return ProfileRegistry.from_mapping(
        {definition["type"]: definition for definition in definitions}
    )
