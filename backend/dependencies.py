"""
Dependency Injection for FastAPI

Common dependencies used across the application: configuration, the project
store and the services built on top of them.
"""

from functools import lru_cache

from fastapi import Depends

from backend.config import Settings, get_settings
from backend.pipelines.service import PipelineService
from backend.projects.factory import ProjectStoreFactory
from backend.projects.service import ProjectService
from backend.projects.store import ProjectStore


def get_config() -> Settings:
    """Configuration dependency."""
    return get_settings()


@lru_cache()
def get_project_store() -> ProjectStore:
    """Process-wide project store chosen by PROJECT_STORAGE_TYPE."""
    return ProjectStoreFactory.create(get_settings())


def get_pipeline_service() -> PipelineService:
    return PipelineService()


def get_project_service(
    store: ProjectStore = Depends(get_project_store),
    settings: Settings = Depends(get_config),
) -> ProjectService:
    return ProjectService(
        store,
        default_name=settings.DEFAULT_PROJECT_NAME,
        default_user_id=settings.DEFAULT_USER_ID,
    )
