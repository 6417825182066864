"""Tests for the function client and speech notices."""

import json

import httpx
import pytest

from interview_questions.client.api_client import InterviewApiClient
from interview_questions.client.speech_client import Notice, SpeechClient, notice_for_error
from interview_questions.core.errors import (
    ConfigurationError,
    DataError,
    TransportError,
    UpstreamError,
    ValidationError,
)


def make_api(handler) -> InterviewApiClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")
    return InterviewApiClient("http://testserver", http_client=http_client)


def respond(status: int, body):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, json=body)

    return handler, requests


class TestNoticeForError:

    def test_missing_key(self):
        assert notice_for_error(ConfigurationError("missing")) is Notice.MISSING_API_KEY

    @pytest.mark.parametrize("code", [UpstreamError.INVALID_CREDENTIAL, UpstreamError.QUOTA_EXHAUSTED])
    def test_rejected_key(self, code):
        assert notice_for_error(UpstreamError("rejected", code=code)) is Notice.INVALID_API_KEY

    @pytest.mark.parametrize("error", [
        UpstreamError("server error"),
        UpstreamError("slow down", code=UpstreamError.RATE_LIMITED),
        TransportError("offline"),
        ValueError("other"),
    ])
    def test_generic_failures_have_no_notice(self, error):
        assert notice_for_error(error) is None


class TestSpeechClient:

    async def test_synthesize_posts_text_and_default_voice(self):
        handler, requests = respond(200, {"audio": "SUQz"})
        speech = SpeechClient(make_api(handler))

        audio = await speech.synthesize("Tell me about yourself", response_format="wav")

        assert audio == "SUQz"
        assert requests[0].url.path == "/functions/v1/text-to-speech"
        assert json.loads(requests[0].content) == {
            "text": "Tell me about yourself",
            "voice": "alloy",
            "format": "wav",
        }

    async def test_missing_key_response(self):
        handler, _ = respond(500, {
            "error": "OpenAI API key is not configured",
            "code": "configuration_error",
            "message": "Add OPENAI_API_KEY to the service environment",
        })
        speech = SpeechClient(make_api(handler))

        with pytest.raises(ConfigurationError):
            await speech.synthesize("Question")

        result = await speech.try_synthesize("Question")
        assert not result.ok
        assert result.notice is Notice.MISSING_API_KEY
        assert result.error == "OpenAI API key is not configured"

    async def test_invalid_key_response(self):
        handler, _ = respond(401, {"error": "OpenAI API error: 401", "code": "invalid_credential"})
        speech = SpeechClient(make_api(handler))

        result = await speech.try_synthesize("Question")

        assert result.notice is Notice.INVALID_API_KEY

    async def test_generic_upstream_failure(self):
        handler, _ = respond(502, {"error": "OpenAI API error: 500", "code": "upstream_error"})
        speech = SpeechClient(make_api(handler))

        result = await speech.try_synthesize("Question")

        assert result.notice is None
        assert result.error == "OpenAI API error: 500"

    async def test_missing_audio_is_data_error(self):
        handler, _ = respond(200, {"audio": ""})
        speech = SpeechClient(make_api(handler))

        with pytest.raises(DataError):
            await speech.synthesize("Question")

    async def test_unreachable_function_is_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        speech = SpeechClient(make_api(handler))

        with pytest.raises(TransportError):
            await speech.synthesize("Question")


class TestInterviewApiClient:

    async def test_generate_questions_body(self):
        handler, requests = respond(200, [])
        api = make_api(handler)

        assert await api.generate_questions("technical", "hard", count=3) == []
        assert requests[0].url.path == "/api/v1/questions/generate"
        assert json.loads(requests[0].content) == {"type": "technical", "difficulty": "hard", "limit": 3}

    async def test_lookup_paths(self):
        handler, requests = respond(200, [{"id": "easy", "name": "Easy"}])
        api = make_api(handler)

        await api.fetch_question_types()
        levels = await api.fetch_difficulty_levels()

        assert levels == [{"id": "easy", "name": "Easy"}]
        assert [r.url.path for r in requests] == ["/api/v1/question-types", "/api/v1/difficulty-levels"]

    async def test_custom_questions_use_camel_case(self):
        handler, requests = respond(200, {"questions": [{"id": "q1"}]})
        api = make_api(handler)

        questions = await api.generate_custom_questions(job_description_id="jd-1")

        assert questions == [{"id": "q1"}]
        assert json.loads(requests[0].content) == {"jobDescriptionId": "jd-1"}

    async def test_non_json_success_is_transport_error(self):
        def gateway_page(request):
            return httpx.Response(200, text="<html>gateway</html>", headers={"content-type": "text/html"})

        api = make_api(gateway_page)

        with pytest.raises(TransportError, match="non-JSON"):
            await api.invoke("text-to-speech", {"text": "hello"})

    async def test_validation_error_is_raised(self):
        handler, _ = respond(400, {"error": "Template name is required", "code": "validation_error"})
        api = make_api(handler)

        with pytest.raises(ValidationError, match="Template name is required"):
            await api.create_template("  ")

    async def test_api_key_headers(self):
        api = InterviewApiClient("http://testserver/", api_key="anon-key")

        assert api.base_url == "http://testserver"
        assert api._http.headers["apikey"] == "anon-key"
        assert api._http.headers["authorization"] == "Bearer anon-key"
        await api.aclose()
