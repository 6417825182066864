from typing import Optional, Tuple
import structlog

from interview_questions.core.audio_codec import decode_base64_audio, encode_base64_chunked
from interview_questions.core.config import Settings
from interview_questions.core.errors import DataError, ValidationError
from interview_questions.models.enums import TTSVoice
from interview_questions.sao.openai_sao import OpenAISAO

logger = structlog.get_logger()

SUPPORTED_FORMATS = ("mp3", "opus", "aac", "flac", "wav", "pcm")

# Recording MIME type -> file extension for the transcription upload
UPLOAD_EXTENSIONS = {
    "audio/webm": "webm",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp4": "m4a",
    "audio/ogg": "ogg",
    "audio/flac": "flac",
}
DEFAULT_UPLOAD_TYPE = "audio/webm"

FEEDBACK_SYSTEM_PROMPT = (
    "You are an experienced interviewer reviewing a candidate's spoken answer. "
    "Give brief, constructive feedback in at most five sentences: what worked, "
    "what was missing, and one concrete suggestion."
)


class SpeechService:
    """Logic behind the text-to-speech, speech-to-text and feedback functions."""

    def __init__(self, settings: Settings, sao: OpenAISAO):
        self.settings = settings
        self.sao = sao

    def resolve_voice(self, voice: Optional[str]) -> str:
        candidates = {v.value for v in TTSVoice}
        if voice and voice in candidates:
            return voice
        if voice:
            logger.warning("Unsupported voice requested, falling back", voice=voice)
        default = self.settings.tts_default_voice
        return default if default in candidates else TTSVoice.ALLOY.value

    def resolve_format(self, response_format: Optional[str]) -> str:
        response_format = (response_format or self.settings.tts_response_format).lower()
        if response_format not in SUPPORTED_FORMATS:
            raise ValidationError(f"Unsupported audio format: {response_format}")
        return response_format

    async def synthesize(self, text: Optional[str], voice: Optional[str] = None,
                         response_format: Optional[str] = None) -> str:
        """Synthesize ``text`` and return the audio as base64."""
        if not text or not text.strip():
            raise ValidationError("Text is required")

        voice = self.resolve_voice(voice)
        response_format = self.resolve_format(response_format)

        logger.info("Generating speech", text=text[:50], voice=voice, format=response_format)
        audio = await self.sao.synthesize_speech(text, voice, response_format)

        if not audio:
            raise DataError("Received empty audio buffer from OpenAI", code="empty_audio")

        logger.info("Received audio buffer", size=len(audio))
        encoded = encode_base64_chunked(audio, self.settings.tts_chunk_size)
        logger.info("Converted audio to base64", length=len(encoded))
        return encoded

    def resolve_upload(self, mime_type: Optional[str]) -> Tuple[str, str]:
        """File name and content type for a recording of ``mime_type``."""
        # drop parameters such as ";codecs=opus"
        content_type = (mime_type or DEFAULT_UPLOAD_TYPE).split(";")[0].strip().lower()
        extension = UPLOAD_EXTENSIONS.get(content_type)
        if extension is None:
            raise ValidationError(f"Unsupported recording type: {mime_type}")
        return f"answer.{extension}", content_type

    async def transcribe(self, audio_b64: Optional[str], mime_type: Optional[str] = None) -> str:
        filename, content_type = self.resolve_upload(mime_type)
        audio = decode_base64_audio(audio_b64 or "")
        logger.info("Transcribing recording", size=len(audio), content_type=content_type)
        text = await self.sao.transcribe(audio, filename=filename, content_type=content_type)
        logger.info("Transcription complete", length=len(text))
        return text

    async def feedback(self, question_text: str, question_type: Optional[str],
                       answer: Optional[str]) -> str:
        if not question_text or not question_text.strip():
            raise ValidationError("Question text is required")
        if not answer or not answer.strip():
            raise ValidationError("Answer is required")

        messages = [
            {"role": "system", "content": FEEDBACK_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": (
                    f"Question type: {question_type or 'general'}\n"
                    f"Question: {question_text}\n"
                    f"Candidate answer: {answer}"
                ),
            },
        ]
        feedback = await self.sao.complete_chat(messages)
        if not feedback:
            raise DataError("Received empty feedback from OpenAI", code="empty_feedback")
        return feedback
