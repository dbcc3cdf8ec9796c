"""
Runtime configuration for the curator engine.

This module centralizes environment-driven configuration: where profile
definitions are loaded from, whether documents are sanitized during
validation, and the limits applied by the sanitization layer.

Configuration is read-only at runtime and must not influence tier
membership or scoring outcomes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, Field, field_validator


# Schemes that can never be allow-listed for URL-valued fields
_FORBIDDEN_SCHEMES = frozenset({"javascript", "vbscript", "data", "file"})


class CuratorConfig(BaseModel):
    """
    Runtime configuration for the curator engine.

    Configuration is environment-driven and immutable once constructed.
    """

    # ------------------------------------------------------------------
    # Profile definitions
    # ------------------------------------------------------------------

    PROFILES_DIR: Path | None = Field(
        None,
        description=(
            "Optional directory of JSON profile definitions. When unset, "
            "the definitions bundled with the package are loaded."
        ),
    )

    # ------------------------------------------------------------------
    # Validation behaviour
    # ------------------------------------------------------------------

    SANITIZE_BY_DEFAULT: bool = Field(
        True,
        description=(
            "Produce a sanitized copy of the document during validation "
            "unless the caller overrides it per call"
        ),
    )

    SUGGESTION_DISPLAY_LIMIT: int = Field(
        5,
        description=(
            "Number of optional-field suggestions surfaced on a "
            "ValidationResult. Suggestion buckets themselves are never "
            "truncated."
        ),
    )

    # ------------------------------------------------------------------
    # Sanitization limits
    # ------------------------------------------------------------------

    MAX_STRING_LENGTH: int = Field(
        10_000,
        description="Maximum length of sanitized free-text values",
    )

    MAX_URL_LENGTH: int = Field(
        2048,
        description="Maximum length of sanitized URL values",
    )

    ALLOWED_URL_SCHEMES: Tuple[str, ...] = Field(
        ("http", "https", "mailto", "tel"),
        description="URI schemes accepted in URL-valued fields",
    )

    # ------------------------------------------------------------------
    # Validators (Pydantic v2)
    # ------------------------------------------------------------------

    @field_validator("PROFILES_DIR")
    @classmethod
    def profiles_dir_must_exist(cls, v: Path | None) -> Path | None:
        if v is None:
            return v
        if not v.exists():
            raise ValueError(f"Configured PROFILES_DIR does not exist: {v}")
        if not v.is_dir():
            raise ValueError(f"Configured PROFILES_DIR is not a directory: {v}")
        return v

    @field_validator(
        "SUGGESTION_DISPLAY_LIMIT",
        "MAX_STRING_LENGTH",
        "MAX_URL_LENGTH",
    )
    @classmethod
    def limits_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Limit must be a positive integer, got {v}")
        return v

    @field_validator("ALLOWED_URL_SCHEMES")
    @classmethod
    def schemes_must_be_safe(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        normalized = tuple(s.strip().lower().rstrip(":") for s in v if s.strip())
        if not normalized:
            raise ValueError("ALLOWED_URL_SCHEMES must not be empty")
        unsafe = sorted(set(normalized) & _FORBIDDEN_SCHEMES)
        if unsafe:
            raise ValueError(
                f"ALLOWED_URL_SCHEMES contains unsafe schemes: {unsafe}"
            )
        return normalized

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "CuratorConfig":
        """
        Load configuration from environment variables.

        All values are parsed once at startup and must remain immutable.
        """

        def env_bool(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if raw is None:
                return default
            return raw.lower() in {"1", "true", "yes", "on"}

        profiles_dir_env = os.getenv("CURATOR_PROFILES_DIR")
        schemes_env = os.getenv("CURATOR_ALLOWED_URL_SCHEMES")

        return cls(
            PROFILES_DIR=(
                Path(profiles_dir_env)
                if profiles_dir_env
                else None
            ),
            SANITIZE_BY_DEFAULT=env_bool(
                "CURATOR_SANITIZE_BY_DEFAULT", True
            ),
            SUGGESTION_DISPLAY_LIMIT=int(
                os.getenv("CURATOR_SUGGESTION_DISPLAY_LIMIT", "5")
            ),
            MAX_STRING_LENGTH=int(
                os.getenv("CURATOR_MAX_STRING_LENGTH", "10000")
            ),
            MAX_URL_LENGTH=int(
                os.getenv("CURATOR_MAX_URL_LENGTH", "2048")
            ),
            ALLOWED_URL_SCHEMES=(
                tuple(schemes_env.split(","))
                if schemes_env
                else ("http", "https", "mailto", "tel")
            ),
        )

    model_config = {
        "frozen": True,
    }
