"""End-to-end tests for question retrieval endpoints."""

from fastapi.testclient import TestClient


class TestLookups:

    def test_question_types_are_seeded(self, client):
        response = client.get("/api/v1/question-types")

        assert response.status_code == 200
        assert {row["id"] for row in response.json()} == {"technical", "behavioral", "situational", "competency"}

    def test_difficulty_levels_are_seeded(self, client):
        response = client.get("/api/v1/difficulty-levels")

        assert response.status_code == 200
        assert [row["id"] for row in response.json()] == ["easy", "hard", "medium"]

    def test_health(self, client):
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["speech_configured"] is True

    def test_health_without_key(self, app_factory):
        with TestClient(app_factory(openai_api_key=None)) as client:
            assert client.get("/health").json()["speech_configured"] is False


class TestGenerateQuestions:

    def test_returns_only_matching_questions_up_to_available(self, client, store):
        for i in range(3):
            store.question(f"Technical medium {i}", "technical", "medium")
        store.question("Technical hard", "technical", "hard")
        store.question("Behavioral medium", "behavioral", "medium")

        response = client.post(
            "/api/v1/questions/generate",
            json={"type": "technical", "difficulty": "medium", "limit": 10},
        )

        assert response.status_code == 200
        questions = response.json()
        assert len(questions) == 3
        assert all(q["type"] == "technical" and q["difficulty"] == "medium" for q in questions)
        assert all(q["job_description"] is None for q in questions)

    def test_default_limit_is_two(self, client, store):
        for i in range(5):
            store.question(f"Behavioral easy {i}", "behavioral", "easy")

        response = client.post("/api/v1/questions/generate", json={"type": "behavioral", "difficulty": "easy"})

        assert len(response.json()) == 2

    def test_no_matches_is_empty_list(self, client):
        response = client.post("/api/v1/questions/generate", json={"type": "competency", "difficulty": "hard"})

        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_type_is_validation_error(self, client):
        response = client.post("/api/v1/questions/generate", json={"type": "trivia", "difficulty": "hard"})

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_sample_answer_is_returned(self, client, store):
        store.question("Explain CAP.", "technical", "hard", sample_answer="Consistency, availability, partitions.")

        questions = client.post(
            "/api/v1/questions/generate", json={"type": "technical", "difficulty": "hard"}
        ).json()

        assert questions[0]["sample_answer"] == "Consistency, availability, partitions."


class TestJobDescriptions:

    def test_list_and_get(self, client, store):
        job = store.job_description("Data Engineer", "Pipelines", ["spark", "airflow"])

        listing = client.get("/api/v1/job-descriptions").json()
        single = client.get(f"/api/v1/job-descriptions/{job.id}").json()

        assert [row["title"] for row in listing] == ["Data Engineer"]
        assert single["required_skills"] == ["spark", "airflow"]

    def test_unknown_job_description(self, client):
        response = client.get("/api/v1/job-descriptions/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Job description not found", "code": "not_found"}


class TestRequestIds:

    def test_generated_request_id(self, client):
        assert client.get("/health").headers["x-request-id"]

    def test_caller_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["x-request-id"] == "req-123"
