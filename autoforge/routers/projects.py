from fastapi import APIRouter, Path, Depends
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask
from typing import List

from autoforge.schemas.api_schemas import ErrorResponse, ProjectSummary, ProjectDetail, ProgressUpdate
from autoforge.dependencies import get_project_store, get_command_service, get_archive_exporter
from autoforge.storage.interface import ProjectStore
from autoforge.storage.archive import ArchiveExporter
from autoforge.application.command_service import CommandService

router = APIRouter(prefix="/api")

@router.get("/projects", response_model=List[ProjectSummary])
def get_all_projects(store: ProjectStore = Depends(get_project_store)):
    """
    Retrieve all projects in creation order.
    """
    return [ProjectSummary.from_project(project) for project in store.list()]

@router.get("/projects/{project_id}", response_model=ProjectDetail, responses={404: {"model": ErrorResponse}})
def get_project(
    project_id: str = Path(..., title="The ID of the project to retrieve"),
    store: ProjectStore = Depends(get_project_store)
):
    """
    Get a specific project, including its generated files.
    """
    return ProjectDetail.from_project(store.get(project_id))

@router.put(
    "/projects/{project_id}/progress",
    response_model=ProjectSummary,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def update_progress(
    update: ProgressUpdate,
    project_id: str = Path(..., title="The ID of the project to update"),
    store: ProjectStore = Depends(get_project_store)
):
    """
    Raise a project's progress. Lower values than the current one are rejected.
    """
    return ProjectSummary.from_project(store.update_progress(project_id, update.progress))

@router.get("/download/{project_id}", responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}})
def download_project(
    project_id: str = Path(..., title="The ID of the project to download"),
    service: CommandService = Depends(get_command_service),
    exporter: ArchiveExporter = Depends(get_archive_exporter)
):
    """
    Stream the project's files as a zip archive. The temporary archive is
    deleted once the response has been sent.
    """
    project, archive_path = service.prepare_download(project_id)
    return FileResponse(
        archive_path,
        media_type="application/zip",
        filename=f"{project.name}.zip",
        background=BackgroundTask(exporter.cleanup, archive_path),
    )
