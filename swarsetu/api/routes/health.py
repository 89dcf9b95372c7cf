# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides health and readiness endpoints for the API.
"""

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from swarsetu import __version__
from swarsetu.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class ComponentHealth(BaseModel):
    """Individual component health status."""
    status: str = Field(description="Component status")
    message: str | None = Field(None, description="Additional status message")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    components: dict[str, ComponentHealth] = Field(default_factory=dict)


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    ready: bool = Field(description="Whether the service is ready")
    checks: dict[str, Any] = Field(description="Individual check results")


def check_handwriting_config() -> ComponentHealth:
    """Check that the analysis configuration loads with recommendations."""
    try:
        from swarsetu.core.handwriting.config import get_handwriting_config

        config = get_handwriting_config()
        if not config.recommendations:
            return ComponentHealth(status="degraded", message="No recommendations loaded")
        return ComponentHealth(status="healthy")
    except Exception as e:
        logger.error("Handwriting config health check failed", error=str(e))
        return ComponentHealth(status="unhealthy", message=str(e))


def check_prompt_bank() -> ComponentHealth:
    """Check that the drawing prompt bank has an English bank."""
    try:
        from swarsetu.core.config import get_settings
        from swarsetu.core.handwriting.prompts import load_prompt_bank

        bank = load_prompt_bank(get_settings().handwriting.config_dir)
        if not bank.get("en"):
            return ComponentHealth(status="degraded", message="English prompt bank is empty")
        return ComponentHealth(status="healthy", message=f"{len(bank)} languages")
    except Exception as e:
        logger.error("Prompt bank health check failed", error=str(e))
        return ComponentHealth(status="unhealthy", message=str(e))


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check if the API is healthy with component details.

    Returns:
        HealthResponse with detailed status.
    """
    from swarsetu.core.config import get_settings

    settings = get_settings()
    now = datetime.now(timezone.utc)
    uptime = int(time.time() - _server_start_time)

    components = {
        "handwriting_config": check_handwriting_config(),
        "prompt_bank": check_prompt_bank(),
    }

    statuses = [c.status for c in components.values()]
    if all(s == "healthy" for s in statuses):
        overall_status = "healthy"
    elif any(s == "unhealthy" for s in statuses):
        overall_status = "unhealthy"
    else:
        overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        timestamp=now,
        version=__version__,
        environment=settings.environment,
        uptime_seconds=uptime,
        components=components,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """Check if the API is ready to accept traffic.

    Returns:
        ReadinessResponse with individual check results.
    """
    checks: dict[str, Any] = {}
    all_ready = True

    for name, check in (
        ("handwriting_config", check_handwriting_config),
        ("prompt_bank", check_prompt_bank),
    ):
        result = check()
        checks[name] = {"status": result.status}
        if result.status != "healthy":
            all_ready = False

    return ReadinessResponse(ready=all_ready, checks=checks)
