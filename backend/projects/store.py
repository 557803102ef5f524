from abc import ABC, abstractmethod
from typing import List, Optional

from .schemas import Project


class ProjectStore(ABC):
    """Persistence port for pipeline projects."""

    @abstractmethod
    def save(self, project: Project) -> Project:
        """Insert or replace a project and return the stored copy."""
        pass

    @abstractmethod
    def load(self, project_id: str) -> Project:
        """Load a project, raising ProjectNotFoundError when it is absent."""
        pass

    @abstractmethod
    def list(self, user_id: Optional[str] = None) -> List[Project]:
        """List projects, newest first, optionally for one user."""
        pass

    @abstractmethod
    def delete(self, project_id: str) -> None:
        """Delete a project, raising ProjectNotFoundError when it is absent."""
        pass

    def exists(self, project_id: str) -> bool:
        return any(project.id == project_id for project in self.list())


def newest_first(projects: List[Project], user_id: Optional[str] = None) -> List[Project]:
    if user_id is not None:
        projects = [project for project in projects if project.user_id == user_id]
    return sorted(projects, key=lambda project: project.updated_at, reverse=True)
