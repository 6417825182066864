from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.dao.base_dao import BaseDAO
from interview_questions.models.voice_response import VoiceResponse


class VoiceResponseDAO(BaseDAO[VoiceResponse]):
    def __init__(self):
        super().__init__(VoiceResponse)

    async def get_by_question_id(self, db: AsyncSession, question_id: str) -> List[VoiceResponse]:
        """Responses to one question, oldest first"""
        return await self.list_where(db, VoiceResponse.question_id == question_id)


voice_response_dao = VoiceResponseDAO()
