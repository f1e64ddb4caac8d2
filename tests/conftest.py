"""
Test configuration and fixtures for autoforge tests.
"""
import pytest
from pathlib import Path
from fastapi.testclient import TestClient

from autoforge.main import app
from autoforge.application.command_service import CommandService
from autoforge.dependencies import get_archive_exporter, get_materializer, get_project_store
from autoforge.domain.events import event_publisher
from autoforge.storage.archive import ArchiveExporter
from autoforge.storage.filesystem import FileMaterializer
from autoforge.storage.locks import ProjectLocks
from autoforge.storage.memory import InMemoryProjectStore


@pytest.fixture(autouse=True)
def reset_event_subscribers():
    """Keep subscriptions from leaking between tests."""
    event_publisher.clear_subscribers()
    yield
    event_publisher.clear_subscribers()


@pytest.fixture
def projects_dir(tmp_path) -> Path:
    return tmp_path / "projects"


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    return tmp_path / "temp"


@pytest.fixture
def store():
    """Create a fresh in-memory project store."""
    return InMemoryProjectStore()


@pytest.fixture
def locks():
    return ProjectLocks()


@pytest.fixture
def materializer(projects_dir, locks):
    """Create a materializer writing under a temporary directory."""
    return FileMaterializer(base_dir=str(projects_dir), locks=locks, timeout=5.0)


@pytest.fixture
def exporter(materializer, temp_dir):
    return ArchiveExporter(materializer=materializer, temp_dir=str(temp_dir))


@pytest.fixture
def service(store, materializer, exporter):
    return CommandService(store=store, materializer=materializer, exporter=exporter)


@pytest.fixture
def client(store, materializer, exporter):
    """Create test client wired to the temporary storage."""
    app.dependency_overrides[get_project_store] = lambda: store
    app.dependency_overrides[get_materializer] = lambda: materializer
    app.dependency_overrides[get_archive_exporter] = lambda: exporter
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_project(service):
    """Create a sample web app project through the full pipeline."""
    return service.execute("Create a Notes web app with login").project
