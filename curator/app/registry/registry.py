"""
Profile definition registry.

This module defines the set of profile types the engine can reason
about. Each registry entry binds together:

- a profile type name (exact, case-sensitive key)
- a category used to derive profile URLs
- three tiers of field constraints
- the rich-result and LLM-optimized field tags

Definitions are data: JSON files under ``definitions/`` (or a directory
supplied through configuration). They are parsed and checked once, at
registry construction, and are read-only afterwards. Any malformed
definition is a fatal configuration error.
"""

from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from curator.app.config import CuratorConfig
from curator.app.errors import ProfileNotFoundError, RegistryConfigurationError
from curator.app.schemas.profile_definition import (
    ProfileCategory,
    ProfileDefinition,
)


logger = logging.getLogger(__name__)

BUNDLED_DEFINITIONS_DIR = Path(__file__).parent / "definitions"

_SEPARATORS = re.compile(r"[-_\s]")


def normalize_profile_type(profile_type: str) -> str:
    """
    Case- and separator-insensitive key used by builder layers.

    The registry itself never normalizes; lookups are exact.
    """
    return _SEPARATORS.sub("", str(profile_type or "")).lower()


class ProfileRegistry:
    """
    Read-only mapping of profile type name to ProfileDefinition.

    Safe for unsynchronized concurrent reads once constructed.
    """

    def __init__(self, definitions: Iterable[ProfileDefinition]) -> None:
        profiles: Dict[str, ProfileDefinition] = {}

        for definition in definitions:
            if definition.type in profiles:
                raise RegistryConfigurationError(
                    f"Duplicate profile type '{definition.type}'"
                )
            profiles[definition.type] = definition

        self._profiles = profiles
        self._normalized = {
            normalize_profile_type(name): name for name in profiles
        }

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_directory(cls, directory: Path) -> "ProfileRegistry":
        """
        Load every ``*.json`` definition in a directory.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise RegistryConfigurationError(
                f"Profile definition directory does not exist: {directory}"
            )

        definitions = [
            load_definition_file(path)
            for path in sorted(directory.glob("*.json"))
        ]

        if not definitions:
            raise RegistryConfigurationError(
                f"No profile definitions found in {directory}"
            )

        registry = cls(definitions)
        logger.info(
            "Loaded %d profile definitions from %s",
            len(definitions),
            directory,
        )
        return registry

    @classmethod
    def from_mapping(cls, raw: Dict[str, dict]) -> "ProfileRegistry":
        """
        Build a registry from in-memory definition data keyed by type.
        """
        definitions: List[ProfileDefinition] = []
        for name, data in raw.items():
            definitions.append(parse_definition(data, source=name))
        return cls(definitions)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, profile_type: str) -> ProfileDefinition:
        try:
            return self._profiles[profile_type]
        except KeyError:
            raise ProfileNotFoundError(profile_type, self._profiles) from None

    def resolve(self, profile_type: str) -> ProfileDefinition:
        """
        Lookup tolerant of case and separators ('job-posting' -> JobPosting).
        """
        name = self._normalized.get(normalize_profile_type(profile_type))
        if name is None:
            raise ProfileNotFoundError(profile_type, self._profiles)
        return self._profiles[name]

    def list_profiles(self) -> List[str]:
        return list(self._profiles)

    def profiles_by_category(self, category: ProfileCategory | str) -> List[str]:
        category = ProfileCategory(category)
        return [
            name
            for name, definition in self._profiles.items()
            if definition.category is category
        ]

    def schema_url(self, profile_type: str) -> str:
        return self.get(profile_type).schema_type

    def rich_result_fields(self, profile_type: str) -> List[str]:
        return list(self.get(profile_type).rich_result_fields)

    def llm_optimized_fields(self, profile_type: str) -> List[str]:
        return list(self.get(profile_type).llm_optimized_fields)

    def __contains__(self, profile_type: object) -> bool:
        return profile_type in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)


# ---------------------------------------------------------------------------
# Definition parsing
# ---------------------------------------------------------------------------


def parse_definition(data: dict, *, source: str) -> ProfileDefinition:
    """
    Parse one raw definition, converting schema violations into
    RegistryConfigurationError.
    """
    try:
        return ProfileDefinition.model_validate(data)
    except ValidationError as exc:
        logger.error("Invalid profile definition %s: %s", source, exc)
        raise RegistryConfigurationError(
            f"Invalid profile definition {source}: {exc}"
        ) from exc


def load_definition_file(path: Path) -> ProfileDefinition:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.error("Profile definition %s is not valid JSON: %s", path, exc)
        raise RegistryConfigurationError(
            f"Profile definition {path.name} is not valid JSON: {exc}"
        ) from exc

    if not isinstance(data, dict):
        raise RegistryConfigurationError(
            f"Profile definition {path.name} must be a JSON object"
        )

    return parse_definition(data, source=path.name)


# ---------------------------------------------------------------------------
# Process-wide registry
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def default_registry() -> ProfileRegistry:
    """
    Registry built from configuration, loaded once per process.
    """
    config = CuratorConfig.from_env()
    return ProfileRegistry.from_directory(
        config.PROFILES_DIR or BUNDLED_DEFINITIONS_DIR
    )


def get(
    profile_type: str,
    registry: Optional[ProfileRegistry] = None,
) -> ProfileDefinition:
    return (registry or default_registry()).get(profile_type)
