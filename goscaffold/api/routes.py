"""
API routes for scaffold generation and download.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, JSONResponse

from goscaffold.api.dependencies import get_service
from goscaffold.api.schemas import (
    ErrorResponse,
    FeatureListResponse,
    GenerateResponse,
    HealthResponse,
    TemplateInfo,
)
from goscaffold.models import GenerationOptions
from goscaffold.service import ScaffoldService
from goscaffold.utils import format_size

router = APIRouter()
logger = logging.getLogger(__name__)

ZIP_MEDIA_TYPE = "application/zip"


@router.get("/health", response_model=HealthResponse, tags=["System"])
def health():
    return HealthResponse(status="OK")


@router.get("/features", response_model=FeatureListResponse, tags=["Features"])
def list_features(service: ScaffoldService = Depends(get_service)):
    """List available features, split into regular and premium."""
    return FeatureListResponse(
        features=service.features.regular(),
        premium_features=service.features.premium(),
    )


@router.get("/templates", response_model=list[TemplateInfo], tags=["Templates"])
def list_templates(
    category: Optional[str] = None,
    service: ScaffoldService = Depends(get_service),
):
    """List template sets, optionally only those of one category."""
    if category:
        templates = service.get_templates_by_category(category)
    else:
        templates = service.get_all_templates()
    return [TemplateInfo.from_template_set(t) for t in templates]


@router.post(
    "/generate",
    response_model=GenerateResponse,
    tags=["Generator"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid options"},
        404: {"model": ErrorResponse, "description": "No template for the category"},
        500: {"model": ErrorResponse, "description": "Generation failed"},
    },
)
async def generate_scaffold(
    options: GenerationOptions,
    service: ScaffoldService = Depends(get_service),
):
    """
    Generate a scaffold project from the provided options.

    Returns the handle to download the archive with.
    """
    logger.info(
        "Generate request: %s-%s for %s",
        options.category,
        options.variant,
        options.module_path,
    )
    artifact = await service.generate_scaffold(options)
    logger.info("Scaffold %s ready (%s)", artifact.handle, format_size(artifact.size))
    return GenerateResponse(id=artifact.handle)


@router.get(
    "/download/{handle}",
    tags=["Generator"],
    responses={
        200: {"description": "Zip archive", "content": {ZIP_MEDIA_TYPE: {}}},
        404: {"model": ErrorResponse, "description": "Scaffold not found"},
    },
)
def download_scaffold(handle: str, service: ScaffoldService = Depends(get_service)):
    """Stream a generated scaffold archive by handle."""
    artifact = service.get_scaffold(handle)
    if not artifact.file_path.is_file():
        logger.warning("Archive for scaffold %s is missing: %s", handle, artifact.file_path)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Scaffold not found"},
        )

    return FileResponse(
        path=str(artifact.file_path),
        media_type=ZIP_MEDIA_TYPE,
        filename=f"{artifact.handle}.zip",
    )
