from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from autoforge.application.keyword_classifier import KeywordClassifier
from autoforge.domain.entities import Category, Project, ProjectSpec, RenderedFileSet
from autoforge.domain.errors import ValidationError
from autoforge.domain.events import (
    event_publisher,
    ProjectCompleted,
    ProjectCreated,
    ProjectExported,
    ProjectRolledBack,
)
from autoforge.rendering import render
from autoforge.storage.archive import ArchiveExporter
from autoforge.storage.filesystem import FileMaterializer
from autoforge.storage.interface import ProjectStore

logger = logging.getLogger(__name__)

SUCCESS_MESSAGES: Dict[Category, str] = {
    Category.WEB_APP: 'Web application "{name}" created successfully',
    Category.MOBILE_APP: 'Mobile app "{name}" created successfully',
    Category.AI_MODEL: 'AI model "{name}" created successfully',
    Category.ECOMMERCE: 'Online store "{name}" created successfully',
    Category.GAME: 'Game "{name}" created successfully',
    Category.API_SERVICE: 'API service "{name}" created successfully',
    Category.CUSTOM: 'Project "{name}" created successfully',
}

# Progress recorded after each pipeline stage
PROGRESS_RENDERED = 25
PROGRESS_REGISTERED = 50

MAX_COMMAND_LENGTH = 2000


@dataclass
class CommandResult:
    success: bool
    message: str
    project: Project


class CommandService:
    """Application service turning a text command into a materialized project.

    classify -> render -> register in the store -> write to disk -> complete.
    A failed write removes both the store record and any partial directory,
    so the store never lists a project that has no files on disk.
    """

    def __init__(
        self,
        store: ProjectStore,
        materializer: FileMaterializer,
        exporter: ArchiveExporter,
        classifier: Optional[KeywordClassifier] = None,
        renderer: Callable[[Category, ProjectSpec], RenderedFileSet] = render,
    ) -> None:
        self._store = store
        self._materializer = materializer
        self._exporter = exporter
        self._classifier = classifier or KeywordClassifier()
        self._render = renderer

    def execute(self, command: str) -> CommandResult:
        if command is None:
            raise ValidationError("Command is required")
        if len(command) > MAX_COMMAND_LENGTH:
            raise ValidationError(f"Command is longer than {MAX_COMMAND_LENGTH} characters")
        try:
            command.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValidationError(f"Command is not valid UTF-8 text ({exc.reason})") from exc

        logger.info("Executing command: %s", command)
        spec = self._classifier.classify(command)
        files = self._render(spec.category, spec)

        project = self._store.create(spec.name, spec.category, files)
        self._store.update_progress(project.id, PROGRESS_RENDERED)
        event_publisher.publish(ProjectCreated(
            aggregate_id=project.id,
            name=project.name,
            category=project.category.value,
            command=command,
        ))
        self._store.update_progress(project.id, PROGRESS_REGISTERED)

        try:
            directory = self._materializer.materialize(project.id, project.files)
        except Exception as exc:
            self._rollback(project, exc)
            raise

        project = self._store.mark_completed(project.id)
        event_publisher.publish(ProjectCompleted(
            aggregate_id=project.id,
            name=project.name,
            file_count=len(project.files),
            directory=str(directory),
        ))
        return CommandResult(
            success=True,
            message=SUCCESS_MESSAGES[project.category].format(name=project.name),
            project=project,
        )

    def prepare_download(self, project_id: str) -> Tuple[Project, Path]:
        """Build the download archive for a project. Caller cleans up the returned path."""
        project = self._store.get(project_id)
        archive_path = self._exporter.build_archive(project.id)
        event_publisher.publish(ProjectExported(
            aggregate_id=project.id,
            archive_path=str(archive_path),
            entry_count=len(project.files),
        ))
        return project, archive_path

    def _rollback(self, project: Project, exc: Exception) -> None:
        logger.error("Materialization of project %s failed, rolling back: %s", project.id, exc)
        self._store.remove(project.id)
        self._materializer.remove(project.id)
        event_publisher.publish(ProjectRolledBack(
            aggregate_id=project.id,
            name=project.name,
            reason=str(exc),
        ))
