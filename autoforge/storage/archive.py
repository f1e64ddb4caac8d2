"""Zip export of materialized projects."""
from __future__ import annotations

import logging
import os
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from autoforge.domain.errors import ArchiveError, NotFoundError
from autoforge.storage.filesystem import FileMaterializer
from autoforge.storage.locks import Deadline

logger = logging.getLogger(__name__)


class ArchiveExporter:
    """Builds temporary zip archives of project directories for download."""

    def __init__(self, materializer: FileMaterializer, temp_dir: str, timeout: Optional[float] = None) -> None:
        self.materializer = materializer
        self.temp_dir = Path(temp_dir)
        self.timeout = materializer.timeout if timeout is None else timeout
        self.temp_dir.mkdir(parents=True, exist_ok=True)

    def build_archive(self, project_id: str) -> Path:
        """Zip the project's directory into a new temporary file and return its path.

        Waits for any in-flight materialization of the same project. The caller
        owns the returned file and must pass it to :meth:`cleanup`. On failure
        the temporary file is removed before the error propagates.

        Raises:
            NotFoundError: The project has no directory on disk.
            ArchiveError: The compressor or the underlying I/O failed.
            OperationTimeoutError: The lock wait or the archiving exceeded the timeout.
        """
        root = self.materializer.project_dir(project_id)
        deadline = Deadline(self.timeout, f"Archiving project {project_id}")
        with self.materializer.locks.hold(project_id, deadline):
            if not root.is_dir():
                raise NotFoundError(f"No files on disk for project {project_id}")

            try:
                fd, name = tempfile.mkstemp(prefix=f"{project_id}-", suffix=".zip", dir=self.temp_dir)
                os.close(fd)
            except OSError as exc:
                raise ArchiveError(f"Could not create a temporary archive in {self.temp_dir}: {exc}") from exc
            archive_path = Path(name)
            try:
                entries = 0
                with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                    for path in sorted(root.rglob("*")):
                        if not path.is_file():
                            continue
                        deadline.check()
                        archive.write(path, arcname=path.relative_to(root).as_posix())
                        entries += 1
            except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
                self.cleanup(archive_path)
                raise ArchiveError(f"Failed to archive project {project_id}: {exc}") from exc
            except BaseException:
                self.cleanup(archive_path)
                raise

        logger.info("Archived %d files of project %s into %s", entries, project_id, archive_path)
        return archive_path

    def cleanup(self, archive_path: Path) -> None:
        try:
            Path(archive_path).unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove temporary archive %s", archive_path, exc_info=True)

    @contextmanager
    def open_archive(self, project_id: str) -> Iterator[Path]:
        """Yield a freshly built archive, removing it when the block exits."""
        archive_path = self.build_archive(project_id)
        try:
            yield archive_path
        finally:
            self.cleanup(archive_path)
