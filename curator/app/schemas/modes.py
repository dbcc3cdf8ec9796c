"""
Output mode schemas.

A mode decides how a finished document is shaped for delivery. ModeConfig
is a pure function of the Mode value and owns no mutable state.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field
from pydantic import ConfigDict

from curator.app.errors import InvalidModeError


class Mode(str, Enum):
    """
    Output shaping strategy.

    - STRICT_SEO: profile-identifying properties embedded in the document
    - SPLIT_CHANNELS: plain primary document plus an extended secondary one
    - STANDARDS_HEADER: no embedded properties; out-of-band link signals
    """

    STRICT_SEO = "strict-seo"
    SPLIT_CHANNELS = "split-channels"
    STANDARDS_HEADER = "standards-header"

    @classmethod
    def parse(cls, value: "Mode | str") -> "Mode":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidModeError(
                f"Invalid mode: {value!r}. Valid modes are: "
                f"{', '.join(m.value for m in cls)}"
            ) from None


class ModeConfig(BaseModel):
    """
    Capabilities of one mode.
    """

    mode: Mode

    embeds_profile_properties: bool = Field(
        ...,
        description="Profile-identifying properties stay on the primary document",
    )

    separates_llm_block: bool = Field(
        ...,
        description="Output is a primary/secondary document pair",
    )

    includes_profile_metadata: bool = Field(
        ...,
        description="Secondary document carries an extended vocabulary context",
    )

    includes_rel_profile: bool = Field(
        ...,
        description="Link-relation and link-header signals are produced",
    )

    @classmethod
    def for_mode(cls, mode: "Mode | str") -> "ModeConfig":
        mode = Mode.parse(mode)

        if mode is Mode.STRICT_SEO:
            return cls(
                mode=mode,
                embeds_profile_properties=True,
                separates_llm_block=False,
                includes_profile_metadata=False,
                includes_rel_profile=False,
            )

        if mode is Mode.SPLIT_CHANNELS:
            return cls(
                mode=mode,
                embeds_profile_properties=False,
                separates_llm_block=True,
                includes_profile_metadata=True,
                includes_rel_profile=False,
            )

        return cls(
            mode=mode,
            embeds_profile_properties=False,
            separates_llm_block=False,
            includes_profile_metadata=False,
            includes_rel_profile=True,
        )

    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Build outputs
# ---------------------------------------------------------------------------


class SplitChannelsOutput(BaseModel):
    primary: Dict[str, Any] = Field(
        ...,
        description="Plain document without profile-identifying properties",
    )
    secondary: Dict[str, Any] = Field(
        ...,
        description=(
            "Deep copy with an extended context and the profile-identifying "
            "properties always present"
        ),
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


class StandardsHeaderOutput(BaseModel):
    document: Dict[str, Any] = Field(
        ...,
        description="Document without profile-identifying properties",
    )
    rel_profile: str = Field(
        ...,
        description="Value for an HTML link rel=\"profile\" href",
    )
    link_header: str = Field(
        ...,
        description="Value for an HTTP Link header",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")
