"""Tests for request body summaries in the request log."""

import json

from interview_questions.middleware.logging_middleware import summarize_body

JSON = "application/json"


class TestSummarizeBody:

    def test_audio_and_text_are_logged_by_length(self):
        body = json.dumps({"audio": "QUJD" * 1000, "text": "Tell me about yourself", "voice": "nova"}).encode()

        fields = summarize_body(body, JSON)

        assert fields == {
            "body_audio_length": 4000,
            "body_text_length": 22,
            "body_voice": "nova",
        }

    def test_long_strings_are_truncated(self):
        fields = summarize_body(json.dumps({"name": "x" * 500}).encode(), JSON)

        assert len(fields["body_name"]) == 100

    def test_scalars_and_nested_values(self):
        fields = summarize_body(json.dumps({"limit": 3, "skills": ["sql"], "description": None}).encode(), JSON)

        assert fields == {"body_limit": 3, "body_skills": "['sql']", "body_description": None}

    def test_non_json_body_is_logged_by_length(self):
        assert summarize_body(b"plain words", "text/plain") == {"body_length": 11}
        assert summarize_body(b"{not json", JSON) == {"body_length": 9}

    def test_empty_body(self):
        assert summarize_body(b"", JSON) == {}
