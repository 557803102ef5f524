import logging

from backend.config import Settings

from .local import LocalProjectStore
from .memory import InMemoryProjectStore
from .store import ProjectStore

logger = logging.getLogger(__name__)


class ProjectStoreFactory:
    """Builds the ProjectStore selected by ``PROJECT_STORAGE_TYPE``."""

    @staticmethod
    def create(settings: Settings) -> ProjectStore:
        storage_type = settings.PROJECT_STORAGE_TYPE
        if storage_type == "memory":
            logger.info("Using in-memory project store")
            return InMemoryProjectStore()
        if storage_type == "local":
            logger.info("Using JSON project store at %s", settings.PROJECT_STORAGE_PATH)
            return LocalProjectStore(base_path=settings.PROJECT_STORAGE_PATH)
        raise ValueError(f"Unsupported project storage type: {storage_type}")
