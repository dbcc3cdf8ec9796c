"""
Exception hierarchy for the curator engine.

Only CONFIGURATION problems are raised. Structural violations and
advisory findings are returned as data on the ValidationResult and
never raised.
"""

from __future__ import annotations

from typing import Iterable, List


class CuratorError(Exception):
    """Base class for all curator errors."""


# ---------------------------------------------------------------------------
# Configuration errors (FATAL)
# ---------------------------------------------------------------------------


class ConfigurationError(CuratorError):
    """
    Fatal configuration problem.

    Surfaced immediately to the caller. Never downgraded to a warning.
    """


class ProfileNotFoundError(ConfigurationError, KeyError):
    """Profile type is not known to the registry."""

    def __init__(self, profile_type: str, available: Iterable[str] = ()) -> None:
        self.profile_type = profile_type
        self.available = sorted(available)
        super().__init__(profile_type)

    def __str__(self) -> str:
        if self.available:
            return (
                f"Unknown profile type '{self.profile_type}'. "
                f"Available profile types: {', '.join(self.available)}"
            )
        return f"Unknown profile type '{self.profile_type}'"


class RegistryConfigurationError(ConfigurationError):
    """
    A profile definition is malformed or violates registry invariants
    (tier conflicts, unsupported constraint keywords, duplicate types).
    """


class InvalidModeError(ConfigurationError, ValueError):
    """Output mode is not one of the fixed modes."""


# ---------------------------------------------------------------------------
# Builder-layer escalation
# ---------------------------------------------------------------------------


class MissingRequiredFieldsError(CuratorError):
    """
    Raised by builder layers that choose to abort on missing required
    fields. The engine itself only classifies and never raises this.
    """

    def __init__(self, profile_type: str, missing: List[str]) -> None:
        self.profile_type = profile_type
        self.missing = list(missing)
        super().__init__(
            f"Missing required fields for {profile_type}: "
            f"{', '.join(self.missing)}"
        )
