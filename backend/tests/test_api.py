"""
Tests for the HTTP API

Tests cover:
- Resume analysis and upload endpoints
- Rating ledger endpoints
- Error mapping (422 / 415 / 502 / 503)
- Health and metrics endpoints
"""

import pytest
from fastapi.testclient import TestClient

from gigcampus.api.deps import get_extraction_client, get_rating_ledger
from gigcampus.exceptions import ExtractionUnavailableError, PersistenceError
from gigcampus.main import app
from gigcampus.schemas.resume import ExtractionResult
from gigcampus.services.rating_ledger import RatingLedger
from gigcampus.services.rating_repository import InMemoryRatingRepository
from gigcampus.services.text_extraction import categorize_keywords

RESUME_TEXT = "Senior Developer at Google 2020. Python, React, Docker, AWS, PostgreSQL."


class FakeExtractor:
    def __init__(self, error: Exception = None):
        self.error = error

    async def extract_text(self, document):
        if self.error:
            raise self.error
        return ExtractionResult(text=RESUME_TEXT, confidence=0.9, keywords=categorize_keywords(RESUME_TEXT))


class BrokenRepository(InMemoryRatingRepository):
    async def get(self, user_id):
        raise PersistenceError("store unavailable")


@pytest.fixture
def client(ledger):
    app.dependency_overrides[get_rating_ledger] = lambda: ledger
    app.dependency_overrides[get_extraction_client] = lambda: FakeExtractor()
    yield TestClient(app)
    app.dependency_overrides.clear()


def upload(client, content_type="application/pdf", user_id=None):
    params = {"user_id": user_id} if user_id else None
    return client.post(
        "/api/resume/upload",
        params=params,
        files={"file": ("cv.pdf", b"%PDF-1.4 resume", content_type)},
    )


class TestResumeEndpoints:
    """Test /api/resume."""

    def test_analyze_text(self, client):
        response = client.post("/api/resume/analyze", json={"text": RESUME_TEXT})

        assert response.status_code == 200
        body = response.json()
        assert "Python" in body["skills"]
        assert 100 <= body["overall_rating"] <= 3000
        assert len(body["suggestions"]) <= 5

    def test_analyze_short_text(self, client):
        response = client.post("/api/resume/analyze", json={"text": "hi"})

        assert response.status_code == 422
        assert response.json()["error"] == "InvalidInputError"

    def test_upload_without_user(self, client):
        response = upload(client)

        assert response.status_code == 200
        body = response.json()
        assert body["rating_data"] is None
        assert body["analysis"]["extracted_text"] == RESUME_TEXT

    def test_upload_imports_skills(self, client):
        response = upload(client, user_id="user-1")

        assert response.status_code == 200
        skills = [skill["skill"] for skill in response.json()["rating_data"]["skills"]]
        assert "Python" in skills

    def test_upload_unsupported_type(self, client):
        response = upload(client, content_type="text/plain")

        assert response.status_code == 415
        assert "PDF, JPEG, or PNG" in response.json()["detail"]

    def test_upload_extraction_unavailable(self, client):
        app.dependency_overrides[get_extraction_client] = lambda: FakeExtractor(
            ExtractionUnavailableError("OCR service is currently unavailable.")
        )

        response = upload(client)

        assert response.status_code == 502
        assert response.json()["detail"] == "OCR service is currently unavailable."


class TestRatingEndpoints:
    """Test /api/ratings."""

    def test_unknown_user_is_zero_state(self, client):
        response = client.get("/api/ratings/nobody")

        assert response.status_code == 200
        assert response.json()["skills"] == []
        assert response.json()["overall_rating"] == 0.0

    def test_ledger_flow(self, client):
        response = client.post("/api/ratings/user-1/skills", json={"skills": ["Python", "React"]})
        assert response.status_code == 200

        response = client.post(
            "/api/ratings/user-1/projects",
            json={"outcome": "completed", "skills": ["Python"]},
        )
        assert response.status_code == 200
        assert response.json()["total_projects_completed"] == 1

        stats = client.get("/api/ratings/user-1/stats").json()
        assert stats["total_skills"] == 2
        assert stats["success_rate"] == 100.0
        assert stats["top_skills"][0]["skill"] == "Python"

        top = client.get("/api/ratings/user-1/top-skills", params={"limit": 1}).json()
        assert [skill["skill"] for skill in top] == ["Python"]

    def test_invalid_outcome(self, client):
        response = client.post(
            "/api/ratings/user-1/projects",
            json={"outcome": "abandoned", "skills": ["Python"]},
        )

        assert response.status_code == 422

    def test_clear_history(self, client):
        client.post("/api/ratings/user-1/skills", json={"skills": ["Python"]})

        response = client.delete("/api/ratings/user-1/history")

        assert response.status_code == 200
        assert response.json()["rating_history"] == []
        assert len(response.json()["skills"]) == 1

    def test_delete(self, client):
        client.post("/api/ratings/user-1/skills", json={"skills": ["Python"]})

        response = client.delete("/api/ratings/user-1")

        assert response.status_code == 204
        assert client.get("/api/ratings/user-1").json()["skills"] == []

    def test_store_unavailable(self, client):
        app.dependency_overrides[get_rating_ledger] = lambda: RatingLedger(BrokenRepository())

        response = client.get("/api/ratings/user-1/stats")

        assert response.status_code == 503
        assert response.json()["error"] == "PersistenceError"


class TestServiceEndpoints:
    """Test health and metrics."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_metrics(self, client):
        client.post("/api/resume/analyze", json={"text": RESUME_TEXT})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "resume_analyses_total" in response.text
