from abc import ABC, abstractmethod
from typing import List

from autoforge.domain.entities import Category, Project, RenderedFileSet


class ProjectStore(ABC):
    """
    Abstract interface for project records. Callers depend on this, never on
    a concrete backend.
    """
    
    @abstractmethod
    def create(self, name: str, category: Category, files: RenderedFileSet) -> Project:
        """
        Register a new project with a fresh identifier.
        
        Args:
            name: Display name of the project
            category: Category the command was classified as
            files: Rendered file set owned by the project
            
        Returns:
            The stored project, status ``creating`` and progress 0
        """
        pass
    
    @abstractmethod
    def get(self, project_id: str) -> Project:
        """
        Retrieve a project.
        
        Raises:
            NotFoundError: No project has this identifier
        """
        pass
    
    @abstractmethod
    def list(self) -> List[Project]:
        """Return every project in insertion order."""
        pass
    
    @abstractmethod
    def update_progress(self, project_id: str, value: int) -> Project:
        """
        Raise a project's progress. ``value`` is clamped to [0, 100].
        
        Raises:
            NotFoundError: No project has this identifier
            ProgressRegressionError: ``value`` is below the current progress
        """
        pass
    
    @abstractmethod
    def mark_completed(self, project_id: str) -> Project:
        """Set progress to 100 and status to ``completed``."""
        pass
    
    @abstractmethod
    def remove(self, project_id: str) -> bool:
        """
        Drop a project record. Only used to roll back a failed creation.
        
        Returns:
            True if a record was removed, False if none existed
        """
        pass
