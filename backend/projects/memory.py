import threading
from typing import Dict, List, Optional

from backend.exceptions import ProjectNotFoundError

from .schemas import Project
from .store import ProjectStore, newest_first


class InMemoryProjectStore(ProjectStore):
    """Process-local store; copies on the way in and out so callers cannot alias stored state."""

    def __init__(self):
        self._projects: Dict[str, Project] = {}
        self._lock = threading.Lock()

    def save(self, project: Project) -> Project:
        with self._lock:
            self._projects[project.id] = project.model_copy(deep=True)
        return project.model_copy(deep=True)

    def load(self, project_id: str) -> Project:
        with self._lock:
            project = self._projects.get(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project.model_copy(deep=True)

    def list(self, user_id: Optional[str] = None) -> List[Project]:
        with self._lock:
            projects = [project.model_copy(deep=True) for project in self._projects.values()]
        return newest_first(projects, user_id)

    def delete(self, project_id: str) -> None:
        with self._lock:
            if self._projects.pop(project_id, None) is None:
                raise ProjectNotFoundError(project_id)

    def exists(self, project_id: str) -> bool:
        with self._lock:
            return project_id in self._projects
