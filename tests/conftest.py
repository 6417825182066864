"""Shared fixtures: an app on in-memory SQLite and a fake OpenAI upstream."""

from typing import List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from interview_questions.core.config import Settings
from interview_questions.main import create_app
from interview_questions.models.job_description import JobDescription
from interview_questions.models.question import Question

TEST_API_KEY = "sk-test-key"


class FakeOpenAI:
    """Answers the OpenAI endpoints the service calls and records every request."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.speech_audio = b"ID3" + bytes(range(256)) * 4
        self.transcript = "I would start by profiling the slow endpoint."
        self.feedback = "Good structure. Mention how you would measure the improvement."
        # (status, json body) returned for every call when set
        self.error: Optional[tuple] = None

    @property
    def calls(self) -> int:
        return len(self.requests)

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def fail_with(self, status: int, code: Optional[str] = None, error_type: Optional[str] = None,
                  message: str = "upstream failure") -> None:
        self.error = (status, {"error": {"message": message, "type": error_type, "code": code}})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            status, body = self.error
            return httpx.Response(status, json=body)

        path = request.url.path
        if path.endswith("/audio/speech"):
            return httpx.Response(200, content=self.speech_audio, headers={"content-type": "audio/mpeg"})
        if path.endswith("/audio/transcriptions"):
            return httpx.Response(200, json={"text": self.transcript})
        if path.endswith("/chat/completions"):
            return httpx.Response(200, json={"choices": [{"message": {"content": self.feedback}}]})
        return httpx.Response(404, json={"error": {"message": "Unknown endpoint"}})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite://",
        "openai_api_key": TEST_API_KEY,
        "environment": "test",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class StoreSeeder:
    """Writes rows straight into the app's database on the client's event loop."""

    def __init__(self, client: TestClient, app):
        self.client = client
        self.database = app.state.database

    def add(self, *rows):
        self.client.portal.call(self._insert, list(rows))
        return rows

    async def _insert(self, rows):
        async with self.database.session() as session:
            session.add_all(rows)
            await session.commit()

    def job_description(self, title: str = "Backend Engineer", description: str = "Build APIs",
                        required_skills: Optional[List[str]] = None) -> JobDescription:
        job_description = JobDescription(
            title=title,
            description=description,
            required_skills=required_skills if required_skills is not None else ["python", "sql"],
        )
        self.add(job_description)
        return job_description

    def question(self, text: str, question_type: str = "technical", difficulty: str = "medium",
                 job_description_id: Optional[str] = None, sample_answer: Optional[str] = None) -> Question:
        question = Question(
            text=text,
            type_id=question_type,
            difficulty_id=difficulty,
            job_description_id=job_description_id,
            sample_answer=sample_answer,
        )
        self.add(question)
        return question


@pytest.fixture
def upstream():
    return FakeOpenAI()


@pytest.fixture
def app_factory(upstream):
    """Build an app with settings overrides; the caller enters the TestClient."""

    def factory(**overrides):
        return create_app(make_settings(**overrides), openai_transport=upstream.transport())

    return factory


@pytest.fixture
def app(app_factory):
    return app_factory()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store(client, app):
    return StoreSeeder(client, app)


@pytest.fixture
def settings():
    return make_settings()
