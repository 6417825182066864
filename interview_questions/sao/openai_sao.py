from __future__ import annotations

import httpx
import structlog
from typing import Any, Dict, List, Optional

from interview_questions.core.config import Settings
from interview_questions.core.errors import (
    ConfigurationError,
    TransportError,
    UpstreamError,
    classify_upstream_status,
)


class OpenAISAO:
    """Service Access Object for the OpenAI speech and chat REST APIs."""

    def __init__(
        self,
        settings: Settings,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        request_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._base_url = (base_url or settings.openai_base_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self._timeout = request_timeout or settings.openai_timeout
        self._transport = transport
        self._logger = structlog.get_logger().bind(component="OpenAISAO")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._api_key.strip())

    def _headers(self, json_body: bool = True) -> Dict[str, str]:
        if not self.is_configured:
            raise ConfigurationError(
                "OpenAI API key is not configured",
                detail="Add OPENAI_API_KEY to the service environment",
            )
        headers = {"Authorization": f"Bearer {self._api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    def _raise_for_status(self, response: httpx.Response, operation: str) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            error_code, error_type, message = _parse_error_body(exc.response)
            code = classify_upstream_status(exc.response.status_code, error_code, error_type)
            self._logger.error(
                "OpenAI request rejected",
                operation=operation,
                status_code=exc.response.status_code,
                error_code=error_code,
                classified_as=code,
            )
            raise UpstreamError(
                f"OpenAI API error: {exc.response.status_code} {message}".strip(),
                code=code,
                status_code=exc.response.status_code,
            ) from exc

    async def _post(self, operation: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.post(url, **kwargs)
        except httpx.RequestError as exc:
            self._logger.error("OpenAI request failed", operation=operation, error=str(exc))
            raise TransportError(f"Could not reach OpenAI API: {exc}") from exc
        self._raise_for_status(response, operation)
        return response

    def _json(self, response: httpx.Response, operation: str) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            self._logger.error("OpenAI response is not JSON", operation=operation,
                               content_type=response.headers.get("content-type"))
            raise UpstreamError(f"OpenAI API returned an unreadable {operation} response") from exc
        return body if isinstance(body, dict) else {}

    async def synthesize_speech(self, text: str, voice: str, response_format: str = "mp3") -> bytes:
        """Synthesize ``text`` and return the raw audio bytes."""
        payload = {
            "model": self._settings.tts_model,
            "input": text,
            "voice": voice,
            "response_format": response_format,
        }
        response = await self._post(
            "synthesize_speech", "/audio/speech", json=payload, headers=self._headers()
        )
        return response.content

    async def transcribe(self, audio: bytes, filename: str = "answer.webm",
                         content_type: str = "audio/webm") -> str:
        """Transcribe a recording and return its text."""
        response = await self._post(
            "transcribe",
            "/audio/transcriptions",
            data={"model": self._settings.stt_model},
            files={"file": (filename, audio, content_type)},
            headers=self._headers(json_body=False),
        )
        return str(self._json(response, "transcribe").get("text") or "")

    async def complete_chat(self, messages: List[Dict[str, str]], temperature: float = 0.4) -> str:
        """Run a chat completion and return the first choice's content."""
        payload = {
            "model": self._settings.feedback_model,
            "messages": messages,
            "temperature": temperature,
        }
        response = await self._post(
            "complete_chat", "/chat/completions", json=payload, headers=self._headers()
        )
        choices = self._json(response, "complete_chat").get("choices") or []
        if not choices:
            return ""
        return str(choices[0].get("message", {}).get("content") or "").strip()


def _parse_error_body(response: httpx.Response):
    """Extract (code, type, message) from an OpenAI error envelope."""
    try:
        body = response.json()
    except ValueError:
        return None, None, response.text[:200]
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return None, None, response.text[:200]
    return error.get("code"), error.get("type"), str(error.get("message") or "")
