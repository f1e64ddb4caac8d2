"""Tests for the HTTP API."""
import io
import zipfile
from urllib.parse import unquote


class TestExecuteEndpoint:
    """Test POST /api/execute."""

    def test_execute_creates_project(self, client, materializer):
        response = client.post("/api/execute", json={"command": "Create a todo web app with login"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == 'Web application "todo web app" created successfully'
        project = data["project"]
        assert project["type"] == "web-app"
        assert project["status"] == "completed"
        assert project["progress"] == 100
        assert "middleware/auth.js" in project["files"]
        assert project["file_count"] == len(project["files"])
        assert materializer.read_back(project["id"]) == project["files"]

    def test_execute_oversized_command(self, client):
        response = client.post("/api/execute", json={"command": "x" * 2001})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_execute_unencodable_command(self, client, store):
        response = client.post(
            "/api/execute",
            content=b'{"command": "Create a web app \\ud800"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert store.list() == []

    def test_execute_requires_command(self, client):
        response = client.post("/api/execute", json={})
        assert response.status_code == 422

    def test_execute_filesystem_failure(self, client, materializer, store, monkeypatch):
        from autoforge.domain.errors import FilesystemError

        def failing(project_id, files):
            raise FilesystemError("Failed to write file", "server.js")

        monkeypatch.setattr(materializer, "materialize", failing)
        response = client.post("/api/execute", json={"command": "create a website"})

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert "server.js" in response.json()["error"]
        assert store.list() == []

    def test_execute_timeout_is_retryable(self, client, materializer, monkeypatch):
        from autoforge.domain.errors import OperationTimeoutError

        def slow(project_id, files):
            raise OperationTimeoutError("Materializing took too long")

        monkeypatch.setattr(materializer, "materialize", slow)
        response = client.post("/api/execute", json={"command": "create a website"})

        assert response.status_code == 503
        assert response.headers["retry-after"] == "1"
        assert response.json()["retryable"] is True


class TestProjectEndpoints:
    """Test project listing, retrieval and progress."""

    def test_list_in_creation_order(self, client):
        commands = ["create a game", "build a shop", "make a mobile app"]
        created = [client.post("/api/execute", json={"command": c}).json()["project"]["id"] for c in commands]

        response = client.get("/api/projects")

        assert response.status_code == 200
        listed = response.json()
        assert [project["id"] for project in listed] == created
        assert [project["type"] for project in listed] == ["game", "ecommerce", "mobile-app"]
        assert "files" not in listed[0]

    def test_list_empty(self, client):
        response = client.get("/api/projects")
        assert response.status_code == 200
        assert response.json() == []

    def test_get_project(self, client, sample_project):
        response = client.get(f"/api/projects/{sample_project.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == sample_project.id
        assert data["name"] == "Notes web app"
        assert data["files"] == sample_project.files

    def test_get_unknown_project(self, client):
        response = client.get("/api/projects/12345")
        assert response.status_code == 404
        assert "error" in response.json()

    def test_progress_update(self, client, store):
        from autoforge.domain.entities import Category

        project = store.create("Draft", Category.CUSTOM, {"README.md": "# Draft\n"})

        response = client.put(f"/api/projects/{project.id}/progress", json={"progress": 40})
        assert response.status_code == 200
        assert response.json()["progress"] == 40

        response = client.put(f"/api/projects/{project.id}/progress", json={"progress": 500})
        assert response.json()["progress"] == 100

    def test_progress_regression_conflicts(self, client, sample_project):
        response = client.put(f"/api/projects/{sample_project.id}/progress", json={"progress": 10})

        assert response.status_code == 409
        assert "error" in response.json()
        assert client.get(f"/api/projects/{sample_project.id}").json()["progress"] == 100

    def test_progress_unknown_project(self, client):
        response = client.put("/api/projects/999/progress", json={"progress": 10})
        assert response.status_code == 404


class TestDownloadEndpoint:
    """Test GET /api/download/{id}."""

    def test_download_zip(self, client, sample_project, temp_dir):
        response = client.get(f"/api/download/{sample_project.id}")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert "Notes web app.zip" in unquote(response.headers["content-disposition"])

        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            assert sorted(archive.namelist()) == sorted(sample_project.files)
            assert archive.read("package.json").decode("utf-8") == sample_project.files["package.json"]

        # Background cleanup has run once the response is complete
        assert list(temp_dir.iterdir()) == []

    def test_download_unknown_project(self, client, temp_dir):
        response = client.get("/api/download/404404")
        assert response.status_code == 404
        assert list(temp_dir.iterdir()) == []

    def test_download_without_files_on_disk(self, client, store):
        from autoforge.domain.entities import Category

        project = store.create("Ghost", Category.CUSTOM, {"README.md": "# Ghost\n"})
        response = client.get(f"/api/download/{project.id}")
        assert response.status_code == 404


class TestHealthEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Autoforge" in response.json()["message"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_storage_health_counts_projects(self, client, sample_project):
        response = client.get("/health/storage")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["directories"]["projects"] is True
        assert data["projects_in_store"] == 1
        assert data["projects_on_disk"] == 1

    def test_detailed_health(self, client):
        response = client.get("/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert "config" in data
        assert "io_timeout_seconds" in data["config"]

    def test_error_bodies_are_documented(self, client):
        schema = client.get("/openapi.json").json()
        responses = schema["paths"]["/api/projects/{project_id}/progress"]["put"]["responses"]
        for status in ("404", "409"):
            ref = responses[status]["content"]["application/json"]["schema"]["$ref"]
            assert ref.endswith("/ErrorResponse")
