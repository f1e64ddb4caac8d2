"""Domain error hierarchy for clean exception handling."""
from __future__ import annotations


class DomainError(Exception):
    """Base for all domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Invalid input or state."""


class ConflictError(DomainError):
    """Request conflicts with the current state of a resource."""


class ProgressRegressionError(ConflictError):
    """Progress update lower than the value already recorded."""

    def __init__(self, project_id: str, current: int, requested: int) -> None:
        super().__init__(
            f"Progress for project {project_id} cannot go from {current} back to {requested}"
        )
        self.project_id = project_id
        self.current = current
        self.requested = requested


class FilesystemError(DomainError):
    """Directory creation or file write failed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(f"{message}: {path}" if path else message)
        self.path = path


class ArchiveError(DomainError):
    """Building a project archive failed."""


class OperationTimeoutError(DomainError):
    """A filesystem or archive operation did not finish in time. Safe to retry."""

    retryable = True


class TemplateRenderError(DomainError):
    """A template could not be rendered for a well-formed project spec."""
