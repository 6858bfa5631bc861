"""Request and response bodies of the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from goscaffold.models import FeatureDescriptor, TemplateSet


class HealthResponse(BaseModel):
    status: str = Field(default="OK", examples=["OK"])


class ErrorResponse(BaseModel):
    error: str


class GenerateResponse(BaseModel):
    id: str = Field(..., description="Handle to pass to /api/download/{id}")
    message: str = Field(default="Scaffold generated successfully")


class FeatureListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    features: list[FeatureDescriptor] = Field(default_factory=list)
    premium_features: list[FeatureDescriptor] = Field(
        default_factory=list, alias="premiumFeatures"
    )


class TemplateInfo(BaseModel):
    """Public view of a :class:`TemplateSet`; the filesystem path is omitted."""

    id: str
    name: str
    description: str
    category: str
    variant: str

    @classmethod
    def from_template_set(cls, template_set: TemplateSet) -> "TemplateInfo":
        return cls(
            id=template_set.id,
            name=template_set.name,
            description=template_set.description,
            category=template_set.category,
            variant=template_set.variant,
        )
