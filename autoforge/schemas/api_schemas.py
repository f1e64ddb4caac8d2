"""
API Request/Response Schemas using Pydantic.

Structure of HTTP requests and responses for the Autoforge API.
"""
from pydantic import BaseModel, Field
from typing import Dict, Optional

from autoforge.domain.entities import Project


# Command schemas
class CommandRequest(BaseModel):
    command: str = Field(..., description="Natural-language description of the project to generate")

class ProjectSummary(BaseModel):
    id: str = Field(..., description="Unique identifier of the project")
    name: str = Field(..., description="Project name")
    type: str = Field(..., description="Project category (web-app, mobile-app, ...)")
    status: str = Field(..., description="creating or completed")
    progress: int = Field(..., description="Progress from 0 to 100")
    created: str = Field(..., description="ISO format creation timestamp")
    file_count: int = Field(0, description="Number of generated files")

    @classmethod
    def from_project(cls, project: Project) -> "ProjectSummary":
        return cls(**project.summary())

class ProjectDetail(ProjectSummary):
    files: Dict[str, str] = Field(default_factory=dict, description="Relative path -> generated content")

    @classmethod
    def from_project(cls, project: Project) -> "ProjectDetail":
        return cls(**project.summary(), files=dict(project.files))

class CommandResponse(BaseModel):
    success: bool = Field(..., description="Whether the command produced a project")
    message: Optional[str] = Field(None, description="Human readable outcome")
    project: Optional[ProjectDetail] = Field(None, description="The generated project")
    error: Optional[str] = Field(None, description="Failure description")

# Progress schemas
class ProgressUpdate(BaseModel):
    progress: int = Field(..., description="New progress value; clamped to [0, 100]")

class ErrorResponse(BaseModel):
    error: str = Field(..., description="Failure description")

