"""
FastAPI application factory for the scaffold generator.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from goscaffold import __version__
from goscaffold.api.routes import router
from goscaffold.config import Config
from goscaffold.errors import (
    GenerationError,
    NotFoundError,
    OptionsValidationError,
    ScaffoldNotFoundError,
)
from goscaffold.service import ScaffoldService

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Config] = None,
    service: Optional[ScaffoldService] = None,
) -> FastAPI:
    """Build the API app.

    The service is created eagerly from *config* (default ``Config()``) unless
    one is passed in, and attached to ``app.state``.
    """
    config = config or Config()
    service = service or ScaffoldService.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Serving templates from %s", config.template_dir)
        try:
            yield
        finally:
            if config.cleanup_on_shutdown:
                removed = service.remove_archives()
                logger.info("Removed %d generated scaffold archive(s)", removed)

    app = FastAPI(
        title="Go Scaffold Generator",
        description="Generates downloadable Go project scaffolds from templates",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.service = service

    app.include_router(router, prefix="/api")
    _register_error_handlers(app)
    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(OptionsValidationError)
    async def _validation_error(request: Request, exc: OptionsValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    @app.exception_handler(ScaffoldNotFoundError)
    async def _scaffold_not_found(request: Request, exc: ScaffoldNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": "Scaffold not found"}
        )

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)}
        )

    @app.exception_handler(GenerationError)
    async def _generation_error(request: Request, exc: GenerationError):
        logger.error("Generation failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to generate scaffold"},
        )
