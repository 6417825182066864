"""
Voice answer capture: record, transcribe, get feedback.

The microphone stream's tracks are released when recording stops and the
preview URL is revoked when it is replaced or discarded.
"""

import base64
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import structlog

from interview_questions.client.api_client import InterviewApiClient
from interview_questions.core.errors import DataError, ValidationError
from interview_questions.media.base_media import BaseMediaBackend, CaptureSession

logger = structlog.get_logger()


class RecorderState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    PROCESSING = "processing"


@dataclass
class VoiceAnswer:
    transcript: str
    feedback: str
    preview_url: Optional[str] = None
    response_id: Optional[str] = None


class VoiceAnswerRecorder:
    def __init__(
        self,
        api: InterviewApiClient,
        media: BaseMediaBackend,
        question_id: Optional[str],
        question_text: str,
        question_type: Optional[str] = None,
        on_transcript_ready: Optional[Callable[[str, str], Any]] = None,
        save_response: bool = False,
    ):
        self.api = api
        self.media = media
        self.question_id = question_id
        self.question_text = question_text
        self.question_type = question_type
        self.on_transcript_ready = on_transcript_ready
        self.save_response = save_response
        self._state = RecorderState.IDLE
        self._session: Optional[CaptureSession] = None
        self._preview_url: Optional[str] = None

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state is RecorderState.RECORDING

    @property
    def preview_url(self) -> Optional[str]:
        return self._preview_url

    async def start(self) -> None:
        if self._state is not RecorderState.IDLE:
            raise ValidationError(f"Cannot start recording while {self._state.value}")
        self.discard()
        self._session = await self.media.capture()
        self._state = RecorderState.RECORDING
        logger.info("Recording started", question_id=self.question_id)

    async def stop(self) -> VoiceAnswer:
        """Stop recording and run the recording through the pipeline."""
        if self._state is not RecorderState.RECORDING or self._session is None:
            raise ValidationError("Not recording")
        session, self._session = self._session, None
        try:
            blob = await session.stop()
        except Exception as e:
            session.cancel()
            self._state = RecorderState.IDLE
            logger.error("Error stopping recording", question_id=self.question_id, error=str(e))
            raise
        logger.info("Recording stopped", size=len(blob))
        if blob:
            self._preview_url = self.media.create_object_url(blob, self.media.capture_mime_type)
        return await self.process(blob)

    async def process(self, blob: bytes) -> VoiceAnswer:
        """Transcribe ``blob``, fetch feedback and hand both to the callback.

        Any failure stops the pipeline and propagates to the caller.
        """
        self._state = RecorderState.PROCESSING
        try:
            if not blob:
                raise DataError("Recording is empty", code="empty_audio", status_code=400)

            audio_b64 = base64.b64encode(blob).decode("ascii")
            transcription = await self.api.invoke(
                "speech-to-text", {"audio": audio_b64, "mimeType": self.media.capture_mime_type}
            )
            transcript = (transcription or {}).get("text")
            if not transcript:
                raise DataError("No transcription received", code="empty_transcript")

            feedback_data = await self.api.invoke(
                "generate-feedback",
                {
                    "questionText": self.question_text,
                    "questionType": self.question_type,
                    "answer": transcript,
                },
            )
            feedback = (feedback_data or {}).get("feedback")
            if not feedback:
                raise DataError("No feedback received", code="empty_feedback")

            response_id = None
            if self.save_response and self.question_id:
                saved = await self.api.save_voice_response(
                    self.question_id, transcript=transcript, feedback=feedback
                )
                response_id = saved.get("id")

            if self.on_transcript_ready is not None:
                result = self.on_transcript_ready(transcript, feedback)
                if inspect.isawaitable(result):
                    await result

            logger.info("Voice answer processed", question_id=self.question_id,
                        transcript_length=len(transcript))
            return VoiceAnswer(transcript, feedback, self._preview_url, response_id)
        except Exception as e:
            logger.error("Error processing recording", question_id=self.question_id, error=str(e))
            raise
        finally:
            self._state = RecorderState.IDLE

    def cancel(self) -> None:
        """Abandon an in-progress recording."""
        if self._session is not None:
            self._session.cancel()
            self._session = None
        if self._state is RecorderState.RECORDING:
            self._state = RecorderState.IDLE

    def discard(self) -> None:
        """Revoke the preview URL."""
        if self._preview_url is not None:
            self.media.revoke_object_url(self._preview_url)
            self._preview_url = None

    def close(self) -> None:
        self.cancel()
        self.discard()
