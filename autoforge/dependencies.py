from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from autoforge.config import settings
from autoforge.application.command_service import CommandService
from autoforge.storage.archive import ArchiveExporter
from autoforge.storage.filesystem import FileMaterializer
from autoforge.storage.interface import ProjectStore
from autoforge.storage.locks import ProjectLocks
from autoforge.storage.memory import InMemoryProjectStore


@lru_cache
def get_project_store() -> ProjectStore:
    return InMemoryProjectStore()


@lru_cache
def get_project_locks() -> ProjectLocks:
    return ProjectLocks()


def get_materializer(locks: ProjectLocks = Depends(get_project_locks)) -> FileMaterializer:
    return FileMaterializer(
        base_dir=settings.PROJECTS_DIR,
        locks=locks,
        timeout=settings.IO_TIMEOUT_SECONDS,
    )


def get_archive_exporter(materializer: FileMaterializer = Depends(get_materializer)) -> ArchiveExporter:
    return ArchiveExporter(materializer=materializer, temp_dir=settings.ARCHIVE_TEMP_DIR)


def get_command_service(
    store: ProjectStore = Depends(get_project_store),
    materializer: FileMaterializer = Depends(get_materializer),
    exporter: ArchiveExporter = Depends(get_archive_exporter),
) -> CommandService:
    return CommandService(store=store, materializer=materializer, exporter=exporter)
