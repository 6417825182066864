from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.core.errors import NotFoundError, StoreError
from interview_questions.dao.question_dao import question_dao
from interview_questions.dao.voice_response_dao import voice_response_dao
from interview_questions.models.voice_response import VoiceResponse
import structlog

logger = structlog.get_logger()


class VoiceResponseService:
    def __init__(self):
        self.voice_response_dao = voice_response_dao
        self.question_dao = question_dao

    async def save_voice_response(
        self,
        db: AsyncSession,
        question_id: str,
        audio_url: Optional[str] = None,
        transcript: Optional[str] = None,
        feedback: Optional[str] = None
    ) -> VoiceResponse:
        if not await self.question_dao.exists(db, question_id):
            logger.warning("Question not found", question_id=question_id)
            raise NotFoundError("Question not found")
        try:
            response = await self.voice_response_dao.create(
                db,
                obj_in={
                    "question_id": question_id,
                    "audio_url": audio_url,
                    "transcript": transcript,
                    "feedback": feedback,
                }
            )
            logger.info("Voice response saved", voice_response_id=response.id, question_id=question_id)
            return response
        except Exception as e:
            logger.error("Error saving voice response", question_id=question_id, error=str(e))
            raise StoreError("Failed to save voice response") from e

    async def get_question_responses(self, db: AsyncSession, question_id: str) -> List[VoiceResponse]:
        try:
            return await self.voice_response_dao.get_by_question_id(db, question_id)
        except Exception as e:
            logger.error("Error fetching voice responses", question_id=question_id, error=str(e))
            raise StoreError("Failed to load voice responses") from e


voice_response_service = VoiceResponseService()
