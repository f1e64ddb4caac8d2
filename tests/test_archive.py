"""Tests for zip export of materialized projects."""
import zipfile

import pytest

from autoforge.domain.errors import ArchiveError, NotFoundError, OperationTimeoutError
from autoforge.storage.archive import ArchiveExporter
from autoforge.storage.locks import Deadline


FILES = {
    "package.json": '{\n  "name": "shop"\n}\n',
    "server.js": "const express = require('express');\n",
    "routes/products.js": "module.exports = [];\n",
    "client/public/index.html": "<!DOCTYPE html>\n<html></html>\n",
}


class TestBuildArchive:
    """Test archive creation and cleanup."""

    def test_archive_contains_every_file(self, materializer, exporter):
        materializer.materialize("2001", FILES)

        with exporter.open_archive("2001") as archive_path:
            with zipfile.ZipFile(archive_path) as archive:
                assert sorted(archive.namelist()) == sorted(FILES)
                for name, content in FILES.items():
                    assert archive.read(name).decode("utf-8") == content
                assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in archive.infolist())

    def test_open_archive_removes_temp_file(self, materializer, exporter, temp_dir):
        materializer.materialize("2001", FILES)

        with exporter.open_archive("2001") as archive_path:
            assert archive_path.exists()
            assert archive_path.parent == temp_dir

        assert not archive_path.exists()
        assert list(temp_dir.iterdir()) == []

    def test_caller_cleans_up_built_archive(self, materializer, exporter):
        materializer.materialize("2001", FILES)
        archive_path = exporter.build_archive("2001")
        assert zipfile.is_zipfile(archive_path)

        exporter.cleanup(archive_path)
        assert not archive_path.exists()
        exporter.cleanup(archive_path)  # already gone

    def test_missing_project_directory(self, exporter, temp_dir):
        with pytest.raises(NotFoundError):
            exporter.build_archive("missing")
        assert list(temp_dir.iterdir()) == []

    def test_compressor_failure_leaves_no_temp_file(self, materializer, exporter, temp_dir, monkeypatch):
        materializer.materialize("2001", FILES)

        def broken_write(self, *args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(zipfile.ZipFile, "write", broken_write)

        with pytest.raises(ArchiveError):
            exporter.build_archive("2001")
        assert list(temp_dir.iterdir()) == []

    def test_waits_for_in_flight_write(self, materializer, locks, temp_dir):
        materializer.materialize("2001", FILES)
        impatient = ArchiveExporter(materializer=materializer, temp_dir=str(temp_dir), timeout=0.1)

        with locks.hold("2001", Deadline(5, "in-flight write")):
            with pytest.raises(OperationTimeoutError):
                impatient.build_archive("2001")

        assert list(temp_dir.iterdir()) == []
