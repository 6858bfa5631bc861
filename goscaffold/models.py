"""Pydantic v2 models for go-scaffold.

Defines the template sets discovered on disk, the options a user picks for a
scaffold, the artifacts produced by the pipeline, and the feature table.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

class TemplateSet(BaseModel):
    """A directory tree holding one buildable project skeleton."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="'<category>-<variant>', e.g. 'api-echo'")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Short description")
    category: str = Field(..., description="Application category, e.g. 'api'")
    variant: str = Field(..., description="Router flavour, e.g. 'echo'")
    path: Path = Field(..., description="Filesystem location of the template tree")


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------

class FeatureDescriptor(BaseModel):
    """An optional feature that can be switched on in a scaffold."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique identifier, e.g. 'basic-auth'")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Short description")
    is_premium: bool = Field(
        default=False, alias="isPremium", description="Whether this is a paid/gated feature"
    )


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

class GenerationOptions(BaseModel):
    """Every user-chosen parameter for one scaffold.

    JSON bodies may use either the field names or their camelCase aliases
    (``appType``, ``routerType``, ``modulePath``, ...).
    """

    model_config = ConfigDict(populate_by_name=True)

    category: str = Field(
        default="", alias="appType", description="Application category: 'api' or 'webapp'"
    )
    variant: str = Field(
        default="", alias="routerType", description="Router: 'standard', 'chi', 'echo', 'gin'"
    )
    database_type: str = Field(
        default="none", alias="databaseType", description="'none', 'postgresql', 'mysql', 'sqlite'"
    )
    config_type: str = Field(default="env", alias="configType", description="'env' or 'flags'")
    log_format: str = Field(default="text", alias="logFormat", description="'json' or 'text'")
    module_path: str = Field(
        default="", alias="modulePath", description="Go module path, e.g. 'github.com/acme/shop'"
    )
    features: list[str] = Field(default_factory=list, description="Regular feature ids")
    premium_features: list[str] = Field(
        default_factory=list, alias="premiumFeatures", description="Premium feature ids"
    )

    def has_feature(self, feature_id: str) -> bool:
        """True if *feature_id* was requested at either tier."""
        return feature_id in self.features or feature_id in self.premium_features


class GeneratedArtifact(BaseModel):
    """A packaged scaffold stored under a random handle."""

    model_config = ConfigDict(frozen=True)

    handle: str = Field(..., description="Random identifier used for download")
    options: GenerationOptions
    template_id: str = Field(..., description="Id of the template set that was rendered")
    created_at: datetime = Field(..., description="UTC creation time")
    file_path: Path = Field(..., description="Location of the zip archive")
    size: int = Field(..., ge=0, description="Archive size in bytes")
