"""
Mode transformer.

Reshapes a finished document for delivery. Runs last, after validation,
and never influences validation output.

- STRICT_SEO: deep copy of the document, unchanged.
- SPLIT_CHANNELS: a plain primary document (identifying properties
  removed) and a secondary document with an extended vocabulary context
  and the identifying properties always present.
- STANDARDS_HEADER: the plain document plus out-of-band link signals
  (rel="profile" value and an HTTP Link header).

The input document is never mutated. Every output is a fresh deep copy.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Mapping, Union

from curator.app.schemas.modes import (
    Mode,
    ModeConfig,
    SplitChannelsOutput,
    StandardsHeaderOutput,
)
from curator.app.schemas.profile_definition import (
    PROFILE_IDENTIFYING_PROPERTIES,
    ConstraintFormat,
    ConstraintType,
    FieldConstraint,
    ProfileDefinition,
    Tier,
)


VOCABULARY_CONTEXT = "https://schema.org"
PROFILE_VOCABULARY = "https://llmprofiles.org/vocab#"
PROFILE_VERSION = "1.0.0"
OPTIMIZED_FOR = ("google-rich-results", "llm-processing")

_DOCUMENT_SUFFIX = "/index.jsonld"

BuildOutput = Union[Dict[str, Any], SplitChannelsOutput, StandardsHeaderOutput]


# ---------------------------------------------------------------------------
# Profile signals
# ---------------------------------------------------------------------------


def profile_properties(definition: ProfileDefinition) -> Dict[str, Any]:
    """
    The four profile-identifying properties for a definition.
    """
    url = definition.profile_url
    return {
        "additionalType": url,
        "schemaVersion": url,
        "identifier": url,
        "additionalProperty": {
            "@type": "PropertyValue",
            "name": "profile",
            "value": url,
        },
    }


def profile_id(definition: ProfileDefinition) -> str:
    """Profile URL without its document suffix."""
    url = definition.profile_url
    if url.endswith(_DOCUMENT_SUFFIX):
        return url[: -len(_DOCUMENT_SUFFIX)]
    return url


def rel_profile_value(definition: ProfileDefinition) -> str:
    return definition.profile_url


def link_header_value(definition: ProfileDefinition) -> str:
    return f'<{definition.profile_url}>; rel="profile"'


def extended_context(definition: ProfileDefinition) -> list:
    return [
        VOCABULARY_CONTEXT,
        {
            "llmprofiles": PROFILE_VOCABULARY,
            "profile": {
                "@id": profile_id(definition),
                "version": PROFILE_VERSION,
                "category": definition.category.value,
                "optimizedFor": list(OPTIMIZED_FOR),
            },
        },
    ]


def strip_profile_properties(document: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        key: copy.deepcopy(value)
        for key, value in document.items()
        if key not in PROFILE_IDENTIFYING_PROPERTIES
    }


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------


def build(
    document: Mapping[str, Any],
    mode: Union[Mode, str],
    definition: ProfileDefinition,
) -> BuildOutput:
    """
    Shape document for the given mode.

    Raises InvalidModeError for an unknown mode string.
    """
    config = ModeConfig.for_mode(mode)

    if config.embeds_profile_properties:
        return copy.deepcopy(dict(document))

    if config.separates_llm_block:
        secondary = copy.deepcopy(dict(document))
        secondary.update(profile_properties(definition))
        if config.includes_profile_metadata:
            secondary["@context"] = extended_context(definition)

        return SplitChannelsOutput(
            primary=strip_profile_properties(document),
            secondary=secondary,
        )

    return StandardsHeaderOutput(
        document=strip_profile_properties(document),
        rel_profile=rel_profile_value(definition),
        link_header=link_header_value(definition),
    )


# ---------------------------------------------------------------------------
# Minimal examples
# ---------------------------------------------------------------------------


_FORMAT_PLACEHOLDERS = {
    ConstraintFormat.DATE: "2024-01-01",
    ConstraintFormat.DATE_TIME: "2024-01-01T00:00:00Z",
    ConstraintFormat.URI: "https://example.com",
    ConstraintFormat.URI_REFERENCE: "https://example.com",
    ConstraintFormat.EMAIL: "user@example.com",
}


def placeholder_value(field_name: str, constraint: FieldConstraint) -> Any:
    """
    A value that satisfies the constraint's shape.

    Free text becomes '[field]' so authors can spot what to replace.
    """
    if constraint.has_const:
        return copy.deepcopy(constraint.const)

    if constraint.any_of:
        return placeholder_value(field_name, constraint.any_of[0])

    t = constraint.type

    if t is ConstraintType.STRING:
        if constraint.format is not None:
            return _FORMAT_PLACEHOLDERS[constraint.format]
        return f"[{field_name}]"

    if t in (ConstraintType.INTEGER, ConstraintType.NUMBER):
        value = constraint.minimum if constraint.minimum is not None else 0
        return int(value) if t is ConstraintType.INTEGER else value

    if t is ConstraintType.BOOLEAN:
        return False

    if t is ConstraintType.ARRAY:
        return []

    if t is ConstraintType.OBJECT:
        nested = constraint.properties or {}
        return {
            name: placeholder_value(name, nested[name])
            for name in constraint.required_properties or ()
            if name in nested
        }

    return f"[{field_name}]"


def minimal_example(
    definition: ProfileDefinition,
    mode: Union[Mode, str],
) -> Dict[str, Any]:
    """
    Smallest document carrying every required field of the profile.

    Identifying properties are embedded only for modes that embed them.
    """
    config = ModeConfig.for_mode(mode)

    document: Dict[str, Any] = {
        "@context": VOCABULARY_CONTEXT,
        "@type": definition.vocabulary_type,
    }

    if config.embeds_profile_properties:
        document.update(profile_properties(definition))

    for name in definition.scored_fields(Tier.REQUIRED):
        document[name] = placeholder_value(name, definition.required[name])

    return document
