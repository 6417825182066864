from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.core.database import get_async_session
from interview_questions.schemas.voice_response_schemas import (
    VoiceResponseCreateRequest,
    VoiceResponseResponse,
)
from interview_questions.services.voice_response_service import voice_response_service
from typing import List

router = APIRouter(tags=["Voice Responses"])


@router.post("/voice-responses", response_model=VoiceResponseResponse, status_code=status.HTTP_201_CREATED)
async def save_voice_response(
    request: VoiceResponseCreateRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """Save a recorded answer with its transcript and feedback"""
    return await voice_response_service.save_voice_response(
        db,
        request.question_id,
        audio_url=request.audio_url,
        transcript=request.transcript,
        feedback=request.feedback,
    )


@router.get("/questions/{question_id}/voice-responses", response_model=List[VoiceResponseResponse])
async def get_question_voice_responses(question_id: str, db: AsyncSession = Depends(get_async_session)):
    return await voice_response_service.get_question_responses(db, question_id)
