"""
Tests for the HTTP endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from api.endpoints.files import get_disks
from main import app


@pytest.fixture
def client(disks):
    app.dependency_overrides[get_disks] = lambda: disks
    yield TestClient(app)
    app.dependency_overrides.clear()


def upload(client, name, content, content_type, **form):
    return client.post(
        "/api/v1/files",
        files={"file": (name, content, content_type)},
        data=form,
    )


class TestUploadEndpoint:

    def test_upload_image(self, client, jpeg_bytes):
        response = upload(client, "photo.jpg", jpeg_bytes, "image/jpeg",
                          user_id="7", visibility="private")

        assert response.status_code == 200
        body = response.json()
        assert body["type"] == "image"
        assert body["dimensions"] == "800x600"
        assert body["visibility"] == "private"
        assert body["user_id"] == 7
        assert body["size"] == len(jpeg_bytes)
        assert body["path"].startswith("uploads/7/image/photo_")
        assert "X-Request-ID" in response.headers

    def test_upload_to_unknown_disk(self, client):
        response = upload(client, "a.txt", b"x", "text/plain", disk="nowhere")

        assert response.status_code == 500
        assert response.json()["detail"]["code"] == "UPLOAD_FAILED"


class TestFileEndpoints:

    @pytest.fixture
    def stored(self, client):
        return upload(client, "notes.txt", b"hello world", "text/plain").json()

    def test_meta(self, client, stored):
        response = client.get("/api/v1/files/meta", params={"path": stored["path"]})

        assert response.status_code == 200
        assert response.json()["size"] == "11 B"
        assert response.json()["visibility"] == "public"

    def test_content(self, client, stored):
        response = client.get("/api/v1/files/content", params={"path": stored["path"]})

        assert response.status_code == 200
        assert response.content == b"hello world"

    def test_download(self, client, stored):
        response = client.get(
            "/api/v1/files/download",
            params={"path": stored["path"], "name": "notes.txt"},
        )

        assert response.status_code == 200
        assert "attachment" in response.headers["content-disposition"]
        assert response.content == b"hello world"

    def test_visibility(self, client, stored):
        rejected = client.put("/api/v1/files/visibility",
                              json={"path": stored["path"], "visibility": "hidden"})
        assert rejected.json()["success"] is False

        accepted = client.put("/api/v1/files/visibility",
                              json={"path": stored["path"], "visibility": "private"})
        assert accepted.json()["success"] is True

        current = client.get("/api/v1/files/visibility", params={"path": stored["path"]})
        assert current.json()["visibility"] == "private"

    def test_delete(self, client, stored):
        response = client.delete("/api/v1/files", params={"path": stored["path"]})
        assert response.json()["success"] is True

        missing = client.delete("/api/v1/files", params={"path": stored["path"]})
        assert missing.status_code == 404
        assert missing.json()["detail"]["code"] == "MISSING_FILE"

        tolerated = client.delete("/api/v1/files",
                                  params={"path": stored["path"], "missing_ok": "true"})
        assert tolerated.status_code == 200


def test_health(client):
    response = client.get("/api/v1/health/status")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
