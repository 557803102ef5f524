import logging
import os
import re
import tempfile
from typing import List, Optional

from pydantic import ValidationError

from backend.exceptions import ProjectNotFoundError, ProjectStoreError

from .schemas import Project
from .store import ProjectStore, newest_first

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")
_EXTENSION = ".json"


class LocalProjectStore(ProjectStore):
    """One JSON document per project under ``base_path``."""

    def __init__(self, base_path: str):
        self.base_path = base_path
        os.makedirs(self.base_path, exist_ok=True)

    def _get_path(self, project_id: str) -> str:
        # Ids become file names, so anything that could escape base_path is unknown
        if not project_id or not _SAFE_ID.match(project_id):
            raise ProjectNotFoundError(project_id)
        return os.path.join(self.base_path, project_id + _EXTENSION)

    def _read(self, path: str) -> Project:
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return Project.model_validate_json(handle.read())
        except (OSError, ValidationError) as exc:
            raise ProjectStoreError(
                f"Could not read project file {os.path.basename(path)}",
                details={"error": str(exc)},
            ) from exc

    def save(self, project: Project) -> Project:
        path = self._get_path(project.id)
        payload = project.model_dump_json(indent=2)
        fd, tmp_path = tempfile.mkstemp(dir=self.base_path, prefix=".tmp-", suffix=_EXTENSION)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_path, path)
        except OSError as exc:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise ProjectStoreError(
                f"Could not save project {project.id}", details={"error": str(exc)}
            ) from exc
        return project.model_copy(deep=True)

    def load(self, project_id: str) -> Project:
        path = self._get_path(project_id)
        if not os.path.exists(path):
            raise ProjectNotFoundError(project_id)
        return self._read(path)

    def list(self, user_id: Optional[str] = None) -> List[Project]:
        if not os.path.exists(self.base_path):
            return []
        projects: List[Project] = []
        for filename in sorted(os.listdir(self.base_path)):
            if not filename.endswith(_EXTENSION) or filename.startswith("."):
                continue
            try:
                projects.append(self._read(os.path.join(self.base_path, filename)))
            except ProjectStoreError as exc:
                logger.warning("Skipping unreadable project file %s: %s", filename, exc.details.get("error"))
        return newest_first(projects, user_id)

    def delete(self, project_id: str) -> None:
        path = self._get_path(project_id)
        if not os.path.exists(path):
            raise ProjectNotFoundError(project_id)
        try:
            os.remove(path)
        except OSError as exc:
            raise ProjectStoreError(
                f"Could not delete project {project_id}", details={"error": str(exc)}
            ) from exc

    def exists(self, project_id: str) -> bool:
        try:
            return os.path.exists(self._get_path(project_id))
        except ProjectNotFoundError:
            return False
