"""
Health Check Endpoints

Basic health and status endpoints for monitoring and load balancer checks.
"""

import time
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from backend.config import Settings
from backend.dependencies import get_config, get_project_store
from backend.projects.store import ProjectStore
from backend.utils.datetime import utcnow
from pipeline_compiler import default_registry

router = APIRouter()

# Initialize start time for uptime calculation
START_TIME = time.time()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    version: str
    environment: str
    uptime_seconds: float


class DetailedHealthResponse(HealthResponse):
    """Health check with the compiler and storage state."""

    node_types: int
    project_storage: str
    project_count: int


def _environment(settings: Settings) -> str:
    if settings.TESTING:
        return "testing"
    return "development" if settings.DEBUG else "production"


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_config)):
    """
    Basic health check endpoint.
    Returns simple status information for load balancers.
    """
    return HealthResponse(
        status="healthy",
        timestamp=utcnow(),
        version=settings.APP_VERSION,
        environment=_environment(settings),
        uptime_seconds=time.time() - START_TIME,
    )


@router.get("/health/detailed", response_model=DetailedHealthResponse)
async def detailed_health_check(
    settings: Settings = Depends(get_config),
    store: ProjectStore = Depends(get_project_store),
):
    """
    Detailed health check endpoint.
    Includes the node registry size and whether the project store is readable.
    """
    status = "healthy"
    project_count = 0
    try:
        project_count = len(store.list())
    except OSError:
        status = "degraded"

    return DetailedHealthResponse(
        status=status,
        timestamp=utcnow(),
        version=settings.APP_VERSION,
        environment=_environment(settings),
        uptime_seconds=time.time() - START_TIME,
        node_types=len(default_registry),
        project_storage=settings.PROJECT_STORAGE_TYPE,
        project_count=project_count,
    )


@router.get("/ping")
async def ping():
    """Simple ping endpoint."""
    return {"message": "pong"}
