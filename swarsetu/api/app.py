# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the SWARSETU API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from swarsetu import __version__
from swarsetu.api.routes import health
from swarsetu.api.v1 import router as v1_router
from swarsetu.core.config import get_settings
from swarsetu.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and loads the handwriting configuration once so
    that a broken override file is reported at startup rather than on the
    first request.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    from swarsetu.core.handwriting.config import get_handwriting_config

    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "Starting SWARSETU API",
        environment=settings.environment,
        debug=settings.debug,
    )

    config = get_handwriting_config()
    logger.info(
        "Handwriting analysis ready",
        conditions=len(config.recommendations),
        validate_input=settings.handwriting.validate_input,
    )

    yield

    logger.info("Shutting down SWARSETU API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="SWARSETU API",
        description="Handwriting screening backend for dysgraphia indicators",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
