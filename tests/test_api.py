"""
Integration tests for the FastAPI routes.

Uses FastAPI's TestClient with the answer repository and feedback
service swapped for test doubles.
"""

import pytest
from fastapi.testclient import TestClient

from src.api import routes
from src.api.app import app
from src.api.schemas import ErrorResponse
from src.core.exceptions import StorageError


@pytest.fixture
def client(repository, fake_feedback):
    app.dependency_overrides[routes.get_answer_repo] = lambda: repository
    app.dependency_overrides[routes.get_feedback_service] = lambda: fake_feedback
    yield TestClient(app)
    app.dependency_overrides.clear()
    routes.sessions.clear()
    routes.session_created.clear()


def run_interview(client, role="Backend Developer", user_id="u1", count=3):
    """Start a session and answer every question; returns the session id."""
    response = client.post(
        "/api/session/start",
        json={"role": role, "user_id": user_id, "count": count},
    )
    assert response.status_code == 200
    session_id = response.json()["session_id"]

    while True:
        result = client.post(
            "/api/answer/submit",
            json={"session_id": session_id, "answer_text": "My answer"},
        )
        assert result.status_code == 200
        if result.json()["complete"]:
            break
    return session_id


class TestCatalogRoutes:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_roles(self, client):
        response = client.get("/api/roles")

        assert "Data Scientist" in response.json()["roles"]

    def test_categories(self, client):
        response = client.get("/api/roles/Backend Developer/categories")

        assert response.json()["categories"][0] == "API Design"

    def test_categories_unknown_role_is_empty(self, client):
        response = client.get("/api/roles/Astronaut/categories")

        assert response.status_code == 200
        assert response.json()["categories"] == []

    def test_difficulties(self, client):
        response = client.get("/api/difficulties")

        assert response.json()["difficulties"] == ["beginner", "intermediate", "advanced"]


class TestQuestionRoutes:

    def test_generate(self, client):
        response = client.post("/api/questions/generate", json={"role": "DevOps Engineer", "count": 5})

        body = response.json()
        assert response.status_code == 200
        assert len(body["questions"]) == 5
        assert len({q["question"] for q in body["questions"]}) == 5

    def test_generate_with_filters(self, client):
        response = client.post(
            "/api/questions/generate",
            json={"role": "DevOps Engineer", "count": 5, "difficulty": "advanced", "categories": ["Security"]},
        )

        [question] = response.json()["questions"]
        assert question["category"] == "Security"
        assert question["difficulty"] == "advanced"
        assert len(question["follow_up"]) == 2

    def test_generate_unknown_role_404(self, client):
        response = client.post("/api/questions/generate", json={"role": "NonexistentRole"})

        assert response.status_code == 404
        assert "NonexistentRole" in response.json()["detail"]

    def test_error_body_matches_documented_schema(self, client):
        response = client.post("/api/questions/generate", json={"role": "NonexistentRole"})
        openapi = client.get("/openapi.json").json()

        documented = openapi["paths"]["/api/questions/generate"]["post"]["responses"]["404"]
        assert documented["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
        assert ErrorResponse.model_validate(response.json()).detail == response.json()["detail"]

    def test_generate_invalid_difficulty_422(self, client):
        response = client.post(
            "/api/questions/generate",
            json={"role": "DevOps Engineer", "difficulty": "expert"},
        )

        assert response.status_code == 422

    def test_adaptive_empty_history(self, client):
        response = client.post("/api/questions/adaptive", json={"role": "Data Scientist"})

        difficulties = {q["difficulty"] for q in response.json()["questions"]}
        assert difficulties == {"intermediate"}

    def test_adaptive_weak_category(self, client):
        response = client.post(
            "/api/questions/adaptive",
            json={
                "role": "Data Scientist",
                "previous_answers": [
                    {"question": "q1", "score": 2, "category": "Data Visualization"},
                    {"question": "q2", "score": 4, "category": "Data Visualization"},
                    {"question": "q3", "score": 9, "category": "MLOps"},
                ],
            },
        )

        [question] = response.json()["questions"]
        assert question["category"] == "Data Visualization"
        assert question["difficulty"] == "beginner"


class TestSessionRoutes:

    def test_start_and_get_question(self, client):
        start = client.post("/api/session/start", json={"role": "Frontend Developer"})
        session_id = start.json()["session_id"]

        response = client.get("/api/session/question", params={"session_id": session_id})

        body = response.json()
        assert start.json()["total_questions"] == 5
        assert body["question_number"] == 1
        assert body["total_questions"] == 5
        assert body["complete"] is False
        assert body["question"]["context"]

    def test_start_unknown_role_404(self, client):
        response = client.post("/api/session/start", json={"role": "Astronaut"})

        assert response.status_code == 404

    def test_start_no_matches_400(self, client):
        response = client.post(
            "/api/session/start",
            json={"role": "Frontend Developer", "categories": ["Cooking"]},
        )

        assert response.status_code == 400

    def test_unknown_session_404(self, client):
        response = client.get("/api/session/question", params={"session_id": "nope"})

        assert response.status_code == 404

    def test_blank_answer_400(self, client):
        start = client.post("/api/session/start", json={"role": "Frontend Developer"})

        response = client.post(
            "/api/answer/submit",
            json={"session_id": start.json()["session_id"], "answer_text": "   "},
        )

        assert response.status_code == 400

    def test_resubmit_after_storage_failure(self, client, repository, monkeypatch):
        start = client.post("/api/session/start", json={"role": "Frontend Developer", "count": 2})
        session_id = start.json()["session_id"]
        real_save = repository.save

        def failing_save(record):
            raise StorageError(record.session_id, "disk full")

        monkeypatch.setattr(repository, "save", failing_save)
        failed = client.post("/api/answer/submit", json={"session_id": session_id, "answer_text": "CSS grid"})

        question = client.get("/api/session/question", params={"session_id": session_id})
        assert failed.status_code == 500
        assert question.json()["question_number"] == 1
        assert question.json()["complete"] is False

        monkeypatch.setattr(repository, "save", real_save)
        retried = client.post("/api/answer/submit", json={"session_id": session_id, "answer_text": "CSS grid"})

        assert retried.status_code == 200
        assert retried.json()["complete"] is False

    def test_full_interview_and_end(self, client, repository):
        session_id = run_interview(client, count=2)

        question = client.get("/api/session/question", params={"session_id": session_id})
        assert question.json()["complete"] is True

        end = client.post("/api/session/end", params={"session_id": session_id})
        assert end.status_code == 200
        assert end.json()["answered_questions"] == 2
        assert end.json()["average_score"] == 7
        assert session_id not in routes.sessions
        assert len(repository.list_session(session_id)) == 2

    def test_skip(self, client):
        start = client.post("/api/session/start", json={"role": "Data Scientist", "count": 2})
        session_id = start.json()["session_id"]

        first = client.post("/api/answer/skip", params={"session_id": session_id})
        second = client.post("/api/answer/skip", params={"session_id": session_id})
        third = client.post("/api/answer/skip", params={"session_id": session_id})

        assert first.json()["question_number"] == 2
        assert second.json()["complete"] is True
        assert third.status_code == 400


class TestProgressRoutes:

    def test_history_and_stats(self, client):
        run_interview(client, role="Backend Developer", count=2)
        run_interview(client, role="Data Scientist", count=1)

        history = client.get("/api/history/u1").json()
        stats = client.get("/api/stats/u1").json()

        assert len(history["sessions"]) == 2
        assert history["sessions"][0]["role"] == "Data Scientist"
        assert stats["completed_sessions"] == 2
        assert stats["total_questions"] == 3
        assert stats["average_score"] == 7
        assert stats["success_rate"] == 100
        assert {rs["role"] for rs in stats["role_stats"]} == {"Backend Developer", "Data Scientist"}

    def test_empty_stats(self, client):
        stats = client.get("/api/stats/nobody").json()

        assert stats["total_questions"] == 0
        assert stats["best_role"] == "N/A"
