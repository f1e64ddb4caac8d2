import logging
import shutil
from pathlib import Path, PurePosixPath
from typing import Optional

from autoforge.domain.entities import RenderedFileSet, drop_empty
from autoforge.domain.errors import FilesystemError, NotFoundError
from autoforge.storage.locks import Deadline, ProjectLocks

logger = logging.getLogger(__name__)


class FileMaterializer:
    """
    Writes rendered file sets to the local filesystem, one directory per project.
    """
    
    def __init__(self, base_dir: str, locks: Optional[ProjectLocks] = None, timeout: float = 30.0):
        """
        Initialize the materializer.
        
        Args:
            base_dir: Root directory holding one subdirectory per project id
            locks: Lock registry shared with the archive exporter
            timeout: Seconds allowed for waiting on the project lock plus writing
        """
        self.base_dir = Path(base_dir)
        self.locks = locks or ProjectLocks()
        self.timeout = timeout
        self.base_dir.mkdir(parents=True, exist_ok=True)
    
    def project_dir(self, project_id: str) -> Path:
        return self.base_dir / str(project_id)
    
    def resolve(self, project_id: str, relative_path: str) -> Path:
        """
        Map a rendered relative path onto the project directory.
        
        Raises:
            FilesystemError: The path is absolute or escapes the project directory
        """
        pure = PurePosixPath(relative_path)
        if pure.is_absolute() or ".." in pure.parts or not pure.parts:
            raise FilesystemError("Refusing to write outside the project directory", relative_path)
        return self.project_dir(project_id).joinpath(*pure.parts)
    
    def materialize(self, project_id: str, files: RenderedFileSet) -> Path:
        """
        Write every file of ``files`` under the project's directory.
        
        Missing parent directories are created; existing files are overwritten.
        Writes for the same project id are serialized.
        
        Returns:
            The project directory
            
        Raises:
            FilesystemError: A directory or file could not be written (carries the path)
            OperationTimeoutError: The lock wait or the writes exceeded the timeout
        """
        files = drop_empty(files)
        deadline = Deadline(self.timeout, f"Materializing project {project_id}")
        with self.locks.hold(project_id, deadline):
            root = self.project_dir(project_id)
            for relative_path, content in files.items():
                deadline.check()
                target = self.resolve(project_id, relative_path)
                try:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    target.write_text(content, encoding="utf-8")
                except OSError as exc:
                    raise FilesystemError(f"Failed to write file ({exc.strerror or exc})", str(target)) from exc
                except UnicodeError as exc:
                    raise FilesystemError(f"Failed to encode file ({exc.reason})", str(target)) from exc
            root.mkdir(parents=True, exist_ok=True)
        logger.info("Materialized %d files for project %s in %s", len(files), project_id, root)
        return root
    
    def read_back(self, project_id: str) -> RenderedFileSet:
        """
        Read a materialized project into a relative path -> content mapping.
        
        Raises:
            NotFoundError: The project has no directory on disk
        """
        root = self.project_dir(project_id)
        if not root.is_dir():
            raise NotFoundError(f"No files on disk for project {project_id}")
        return {
            path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
            for path in sorted(root.rglob("*"))
            if path.is_file()
        }
    
    def remove(self, project_id: str) -> bool:
        """
        Delete a project's directory tree.
        
        Returns:
            True if a directory was removed, False if none existed
        """
        root = self.project_dir(project_id)
        if not root.exists():
            return False
        shutil.rmtree(root, ignore_errors=True)
        return True
