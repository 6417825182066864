"""Tests for error classification and wire payloads."""

import pytest

from interview_questions.core.errors import (
    ConfigurationError,
    ConflictError,
    DataError,
    NotFoundError,
    TransportError,
    UpstreamError,
    ValidationError,
    classify_upstream_status,
    error_from_payload,
)


class TestClassifyUpstreamStatus:

    @pytest.mark.parametrize("status,error_code,error_type,expected", [
        (401, "invalid_api_key", "invalid_request_error", UpstreamError.INVALID_CREDENTIAL),
        (401, None, None, UpstreamError.INVALID_CREDENTIAL),
        (403, None, None, UpstreamError.INVALID_CREDENTIAL),
        (400, "invalid_api_key", None, UpstreamError.INVALID_CREDENTIAL),
        (429, "insufficient_quota", "insufficient_quota", UpstreamError.QUOTA_EXHAUSTED),
        (429, None, "insufficient_quota", UpstreamError.QUOTA_EXHAUSTED),
        (429, "rate_limit_exceeded", "requests", UpstreamError.RATE_LIMITED),
        (500, None, "server_error", UpstreamError.GENERIC),
        (400, "invalid_value", "invalid_request_error", UpstreamError.GENERIC),
    ])
    def test_classification(self, status, error_code, error_type, expected):
        assert classify_upstream_status(status, error_code, error_type) == expected

    def test_message_text_is_not_used(self):
        # a 500 mentioning quota is still a generic failure
        assert classify_upstream_status(500, None, None) == UpstreamError.GENERIC


class TestErrorPayload:

    def test_payload_has_error_and_code(self):
        assert NotFoundError("Template not found").to_payload() == {
            "error": "Template not found",
            "code": "not_found",
        }

    def test_payload_includes_detail_as_message(self):
        payload = ConfigurationError("OpenAI API key is not configured", detail="Add OPENAI_API_KEY").to_payload()

        assert payload["code"] == "configuration_error"
        assert payload["message"] == "Add OPENAI_API_KEY"

    def test_default_status_codes(self):
        assert ValidationError("x").status_code == 400
        assert NotFoundError("x").status_code == 404
        assert ConflictError("x").status_code == 409
        assert ConfigurationError("x").status_code == 500
        assert TransportError("x").status_code == 502


class TestErrorFromPayload:

    def test_configuration_error(self):
        error = error_from_payload(500, {"error": "OpenAI API key is not configured", "code": "configuration_error"})

        assert isinstance(error, ConfigurationError)
        assert error.message == "OpenAI API key is not configured"

    @pytest.mark.parametrize("code", [UpstreamError.INVALID_CREDENTIAL, UpstreamError.QUOTA_EXHAUSTED])
    def test_credential_codes_round_trip(self, code):
        error = error_from_payload(401, {"error": "OpenAI API error", "code": code})

        assert isinstance(error, UpstreamError)
        assert error.code == code

    def test_empty_audio_is_data_error(self):
        error = error_from_payload(502, {"error": "Received empty audio buffer", "code": "empty_audio"})

        assert isinstance(error, DataError)

    def test_unknown_code_client_error_is_validation(self):
        error = error_from_payload(422, {"error": "bad"})

        assert isinstance(error, ValidationError)

    def test_unknown_code_unauthorized_is_credential(self):
        error = error_from_payload(401, {"error": "Unauthorized"})

        assert isinstance(error, UpstreamError)
        assert error.code == UpstreamError.INVALID_CREDENTIAL

    def test_unknown_code_server_error_is_upstream(self):
        error = error_from_payload(503, {"error": "Service unavailable"})

        assert isinstance(error, UpstreamError)
        assert error.code == UpstreamError.GENERIC

    def test_non_dict_payload_is_transport_error(self):
        assert isinstance(error_from_payload(502, "Bad gateway"), TransportError)
