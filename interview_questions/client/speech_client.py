"""
Speech synthesis from the client side, with failures sorted into the notices
a user sees.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from interview_questions.client.api_client import InterviewApiClient
from interview_questions.core.errors import (
    CREDENTIAL_CODES,
    ConfigurationError,
    DataError,
    ServiceError,
    UpstreamError,
)

logger = structlog.get_logger()


class Notice(str, Enum):
    # the operator has to add the credential
    MISSING_API_KEY = "missing_api_key"
    # the credential exists but is rejected or out of quota
    INVALID_API_KEY = "invalid_api_key"


NOTICE_MESSAGES = {
    Notice.MISSING_API_KEY: (
        "Missing OpenAI API key. Add OPENAI_API_KEY to the service environment."
    ),
    Notice.INVALID_API_KEY: (
        "The OpenAI API key was rejected or its quota is exhausted. Check the key and billing."
    ),
}


def notice_for_error(error: BaseException) -> Optional[Notice]:
    """Return the user-facing notice for ``error``, or None for generic failures."""
    if isinstance(error, ConfigurationError):
        return Notice.MISSING_API_KEY
    if isinstance(error, UpstreamError) and error.code in CREDENTIAL_CODES:
        return Notice.INVALID_API_KEY
    return None


@dataclass
class SpeechResult:
    audio: Optional[str] = None
    error: Optional[str] = None
    notice: Optional[Notice] = None

    @property
    def ok(self) -> bool:
        return self.audio is not None


class SpeechClient:
    def __init__(self, api: InterviewApiClient, default_voice: str = "alloy"):
        self.api = api
        self.default_voice = default_voice

    async def synthesize(self, text: str, voice: Optional[str] = None,
                         response_format: Optional[str] = None) -> str:
        """Return base64 audio for ``text``. Raises ServiceError subclasses."""
        voice = voice or self.default_voice
        logger.info("Calling text-to-speech function", text=text[:50], voice=voice)
        body = {"text": text, "voice": voice}
        if response_format:
            body["format"] = response_format
        data = await self.api.invoke("text-to-speech", body)
        audio = data.get("audio") if isinstance(data, dict) else None
        if not audio:
            raise DataError("No audio data returned", code="empty_audio")
        logger.info("Received audio data", length=len(audio))
        return audio

    async def try_synthesize(self, text: str, voice: Optional[str] = None,
                             response_format: Optional[str] = None) -> SpeechResult:
        """Like ``synthesize`` but reports failures in the result."""
        try:
            return SpeechResult(audio=await self.synthesize(text, voice, response_format))
        except ServiceError as exc:
            notice = notice_for_error(exc)
            logger.error("Error synthesizing speech", code=exc.code, notice=notice.value if notice else None)
            return SpeechResult(error=exc.message, notice=notice)
