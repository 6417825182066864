"""
Proxy functions called directly by browser clients.

Each function is a one-shot request/response wrapper around the store or the
upstream speech API. Failures are raised as ServiceError subclasses and turned
into ``{error, code, message?}`` bodies by the application's error handler.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.core.database import get_async_session
from interview_questions.core.dependencies import get_custom_question_service, get_speech_service
from interview_questions.schemas.function_schemas import (
    CustomQuestionsRequest,
    CustomQuestionsResponse,
    ErrorResponse,
    FeedbackRequest,
    FeedbackResponse,
    SpeechToTextRequest,
    SpeechToTextResponse,
    TextToSpeechRequest,
    TextToSpeechResponse,
)
from interview_questions.services.custom_question_service import CustomQuestionService
from interview_questions.services.speech_service import SpeechService

router = APIRouter(
    tags=["Functions"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.post("/text-to-speech", response_model=TextToSpeechResponse)
async def text_to_speech(
    request: TextToSpeechRequest,
    speech: SpeechService = Depends(get_speech_service)
):
    audio = await speech.synthesize(request.text, request.voice, request.format)
    return TextToSpeechResponse(audio=audio)


@router.post("/generate-custom-questions", response_model=CustomQuestionsResponse)
async def generate_custom_questions(
    request: CustomQuestionsRequest,
    db: AsyncSession = Depends(get_async_session),
    custom_questions: CustomQuestionService = Depends(get_custom_question_service)
):
    questions = await custom_questions.generate(
        db,
        question_type=request.question_type,
        difficulty=request.difficulty_level,
        job_description_id=request.job_description_id,
    )
    return CustomQuestionsResponse(questions=questions)


@router.post("/speech-to-text", response_model=SpeechToTextResponse)
async def speech_to_text(
    request: SpeechToTextRequest,
    speech: SpeechService = Depends(get_speech_service)
):
    text = await speech.transcribe(request.audio, request.mime_type)
    return SpeechToTextResponse(text=text)


@router.post("/generate-feedback", response_model=FeedbackResponse)
async def generate_feedback(
    request: FeedbackRequest,
    speech: SpeechService = Depends(get_speech_service)
):
    feedback = await speech.feedback(request.question_text, request.question_type, request.answer)
    return FeedbackResponse(feedback=feedback)
