"""Tests for the REST routes."""

import pytest

pytestmark = pytest.mark.integration

from fastapi.testclient import TestClient

from docsync.http_api import create_app


@pytest.fixture
def client(workspace):
    with TestClient(create_app(workspace, sync_interval=0)) as test_client:
        yield test_client


class TestDocumentsApi:
    """Test document routes end to end."""

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_startup_reconciles(self, workspace, files):
        files.drop(workspace.documents_dir, "guide.md", "# Setup Guide\n")

        with TestClient(create_app(workspace, sync_interval=0)):
            pass

        assert workspace.index.get("guide.md").category == "Guide"

    def test_create_then_read(self, client):
        response = client.post("/api/documents", json={"title": "API Notes", "category": "Spec"})
        assert response.status_code == 201
        assert response.json()["filename"] == "api-notes.md"

        content = client.get("/api/documents/api-notes.md")
        assert content.status_code == 200
        assert content.headers["content-type"].startswith("text/markdown")
        assert content.text == "# API Notes\n"

    def test_list_with_filters(self, client):
        client.post("/api/documents", json={"title": "Threat Model", "category": "Security"})
        client.post("/api/documents", json={"title": "Roadmap", "category": "Project"})

        docs = client.get("/api/documents", params={"category": "Project"}).json()["documents"]
        assert [d["title"] for d in docs] == ["Roadmap"]

        docs = client.get("/api/documents", params={"q": "threat"}).json()["documents"]
        assert [d["title"] for d in docs] == ["Threat Model"]

    def test_write_accepts_markdown_field(self, client):
        client.post("/api/documents", json={"title": "Draft"})

        response = client.put("/api/documents/draft.md", json={"markdown": "rewritten"})

        assert response.json() == {"success": True}
        assert client.get("/api/documents/draft.md").text == "rewritten"

    def test_versions_and_restore(self, client):
        client.post("/api/documents", json={"title": "Draft"})
        client.put("/api/documents/draft.md", json={"content": "second", "edited_by": "Agent"})

        versions = client.get("/api/documents/draft.md/versions").json()["versions"]
        assert len(versions) == 1
        version_id = versions[0]["version_id"]

        old = client.get(f"/api/documents/draft.md/versions/{version_id}")
        assert old.text == "# Draft\n"

        restored = client.post(f"/api/documents/draft.md/versions/{version_id}/restore")
        assert restored.json() == {"content": "# Draft\n"}
        assert client.get("/api/documents/draft.md").text == "# Draft\n"

        assert client.delete("/api/documents/draft.md/versions").json() == {"removed": 2}

    def test_metadata_duplicate_stats_delete(self, client):
        client.post("/api/documents", json={"title": "Notes", "content": "a b c"})

        meta = client.patch("/api/documents/notes.md/meta", json={"title": "Team Notes"})
        assert meta.json()["title"] == "Team Notes"

        copy = client.post("/api/documents/notes.md/duplicate")
        assert copy.status_code == 201
        assert copy.json()["title"] == "Copy of Team Notes"

        assert client.get("/api/documents/notes.md/stats").json()["words"] == 3

        assert client.delete("/api/documents/notes.md").json() == {"success": True, "deleted": True}
        assert client.get("/api/documents/notes.md").status_code == 404

    def test_sync_and_categories(self, client, workspace, files):
        files.drop(workspace.documents_dir, "daily.md", "# Daily Pulse\n")

        assert client.post("/api/documents/sync").json()["added"] == ["daily.md"]
        assert len(client.get("/api/documents/categories").json()["categories"]) == 8


class TestErrorMapping:
    """Test that service errors become the right status codes."""

    def test_missing_title(self, client):
        response = client.post("/api/documents", json={})
        assert response.status_code == 400
        assert response.json()["field"] == "title"

    def test_invalid_filename(self, client):
        assert client.get("/api/documents/notes.txt").status_code == 400

    def test_missing_document(self, client):
        response = client.get("/api/documents/ghost.md")
        assert response.status_code == 404
        assert "ghost.md" in response.json()["error"]

    def test_missing_version(self, client):
        client.post("/api/documents", json={"title": "Draft"})
        response = client.get("/api/documents/draft.md/versions/2020-01-01T00-00-00-000000Z")
        assert response.status_code == 404

    def test_unknown_metadata_target(self, client):
        assert client.patch("/api/documents/ghost.md/meta", json={"title": "X"}).status_code == 404

    def test_corrupt_index(self, client, workspace):
        workspace.index.path.write_text("{broken", encoding="utf-8")
        assert client.get("/api/documents").status_code == 500

    def test_mcp_endpoint(self, client):
        response = client.post(
            "/mcp", json={"jsonrpc": "2.0", "id": 7, "method": "tools/list", "params": {}}
        )
        assert response.json()["id"] == 7
        assert len(response.json()["result"]["tools"]) == 14
