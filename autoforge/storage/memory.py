"""In-process project store."""
from __future__ import annotations

import threading
from typing import Dict, List, Optional

from autoforge.domain.entities import Category, Project, ProjectStatus, RenderedFileSet
from autoforge.domain.errors import NotFoundError, ProgressRegressionError
from autoforge.domain.identifiers import ProjectIdGenerator
from autoforge.storage.interface import ProjectStore


class InMemoryProjectStore(ProjectStore):
    """Ordered, lock-guarded mapping of project id -> Project.

    Records live for the lifetime of the process. Dicts keep insertion order,
    and identifiers only grow, so listing order is creation order.
    """

    def __init__(self, id_generator: Optional[ProjectIdGenerator] = None) -> None:
        self._ids = id_generator or ProjectIdGenerator()
        self._lock = threading.Lock()
        self._projects: Dict[str, Project] = {}

    def create(self, name: str, category: Category, files: RenderedFileSet) -> Project:
        with self._lock:
            # Issued and inserted together so listing order follows id order
            project = Project(
                id=self._ids.next_id(),
                name=name,
                category=Category(category),
                files=dict(files),
            )
            self._projects[project.id] = project
        return project

    def get(self, project_id: str) -> Project:
        with self._lock:
            project = self._projects.get(str(project_id))
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    def list(self) -> List[Project]:
        with self._lock:
            return list(self._projects.values())

    def update_progress(self, project_id: str, value: int) -> Project:
        value = max(0, min(100, int(value)))
        with self._lock:
            project = self._require(project_id)
            if value < project.progress:
                raise ProgressRegressionError(project.id, project.progress, value)
            project.progress = value
            return project

    def mark_completed(self, project_id: str) -> Project:
        with self._lock:
            project = self._require(project_id)
            project.progress = 100
            project.status = ProjectStatus.COMPLETED
            return project

    def remove(self, project_id: str) -> bool:
        with self._lock:
            return self._projects.pop(str(project_id), None) is not None

    def _require(self, project_id: str) -> Project:
        project = self._projects.get(str(project_id))
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project
