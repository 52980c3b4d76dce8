"""Tests for the submission service endpoints."""

import pytest
from fastapi.testclient import TestClient

from wedding_songs.server.main import app
from wedding_songs.server.routes.songs import set_storage
from wedding_songs.server.storage import MemoryStorage


@pytest.fixture
def storage(catalog):
    """In-memory storage installed in the routes."""
    storage = MemoryStorage(catalog)
    set_storage(storage)
    yield storage
    set_storage(None)


@pytest.fixture
def client(storage):
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def payload():
    """Valid submission payload."""
    return {
        "coupleNames": "Anna & Marco",
        "weddingDate": "2026-06-20",
        "email": "anna.marco@example.com",
        "phone": "+39 333 1234567",
        "notes": "Please play softly",
        "songSelections": [
            {"moment": "ingresso", "songId": 1, "songTitle": "Ave Maria"},
            {"moment": "fine", "songId": 10, "songTitle": "Resta Qui Con Noi"},
        ],
    }


class TestServiceInfo:
    """Test root and health endpoints."""

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert "message" in data
        assert "version" in data

    def test_health_check(self, client):
        """Health reports catalog size."""
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["songs"] == 10
        assert data["submissions"] == 0

    def test_not_ready_without_storage(self):
        """Endpoints answer 503 before startup."""
        set_storage(None)

        response = TestClient(app).get("/api/songs")

        assert response.status_code == 503


class TestSongEndpoints:
    """Test catalog endpoints."""

    def test_list_songs(self, client):
        """All songs are returned with camelCase keys."""
        response = client.get("/api/songs")

        assert response.status_code == 200
        songs = response.json()
        assert len(songs) == 10
        assert songs[0]["suitableMoments"] == ["ingresso", "inizio"]

    def test_get_song(self, client):
        """A known id returns the song."""
        response = client.get("/api/songs/6")

        assert response.status_code == 200
        assert response.json()["title"] == "Santo Gen Verde"

    def test_invalid_song_id(self, client):
        """Non-numeric ids answer 400."""
        response = client.get("/api/songs/abc")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid song ID"}

    def test_unknown_song(self, client):
        """Unknown ids answer 404."""
        response = client.get("/api/songs/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Song not found"}


class TestSubmitSelections:
    """Test the submission endpoint."""

    def test_successful_submission(self, client, payload, storage):
        """A valid payload is stored and answered with 201."""
        response = client.post("/api/submit-selections", json=payload)

        assert response.status_code == 201
        assert response.json() == {"message": "Submission successful", "submissionId": 1}
        record = storage.get_submission(1)
        assert record.couple_names == "Anna & Marco"
        assert record.notes == "Please play softly"
        assert [s.song_id for s in storage.get_submission_songs(1)] == [1, 10]

    def test_invalid_email(self, client, payload):
        """Validation errors answer 400 with details."""
        payload["email"] = "not-an-email"

        response = client.post("/api/submit-selections", json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Validation error"
        assert data["errors"][0]["loc"] == ["email"]

    def test_empty_selection(self, client, payload):
        """At least one song is required."""
        payload["songSelections"] = []

        response = client.post("/api/submit-selections", json=payload)

        assert response.status_code == 400

    def test_duplicate_song(self, client, payload):
        """The same song cannot be used twice."""
        payload["songSelections"][1] = {"moment": "inizio", "songId": 1, "songTitle": "Ave Maria"}

        response = client.post("/api/submit-selections", json=payload)

        assert response.status_code == 400

    def test_unknown_song(self, client, payload, storage):
        """Songs must exist in the catalog."""
        payload["songSelections"][0]["songId"] = 999

        response = client.post("/api/submit-selections", json=payload)

        assert response.status_code == 400
        assert response.json()["errors"][0]["type"] == "unknown_song"
        assert storage.submission_count == 0

    def test_malformed_json(self, client):
        """A body that is not JSON answers 400."""
        response = client.post(
            "/api/submit-selections",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation error"


class TestGetSubmission:
    """Test reading stored submissions."""

    def test_get_submission_with_songs(self, client, payload):
        """Stored submissions are returned with their songs."""
        client.post("/api/submit-selections", json=payload)

        response = client.get("/api/submissions/1")

        assert response.status_code == 200
        data = response.json()
        assert data["coupleNames"] == "Anna & Marco"
        assert data["weddingDate"] == "2026-06-20"
        assert "createdAt" in data
        assert [s["moment"] for s in data["songs"]] == ["ingresso", "fine"]

    def test_unknown_submission(self, client):
        """Unknown ids answer 404."""
        assert client.get("/api/submissions/42").status_code == 404
