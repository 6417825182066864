from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.core.database import get_async_session
from interview_questions.models.lookup import LookupRead
from interview_questions.schemas.question_schemas import (
    GenerateQuestionsRequest,
    JobDescriptionResponse,
    QuestionResponse,
)
from interview_questions.services.question_service import question_service
from typing import List
import structlog

logger = structlog.get_logger()

router = APIRouter(tags=["Questions"])


@router.get("/question-types", response_model=List[LookupRead])
async def get_question_types(db: AsyncSession = Depends(get_async_session)):
    """List the question types"""
    return await question_service.get_question_types(db)


@router.get("/difficulty-levels", response_model=List[LookupRead])
async def get_difficulty_levels(db: AsyncSession = Depends(get_async_session)):
    """List the difficulty levels"""
    return await question_service.get_difficulty_levels(db)


@router.post("/questions/generate", response_model=List[QuestionResponse])
async def generate_questions(
    request: GenerateQuestionsRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """Fetch up to ``limit`` questions of a type and difficulty"""
    return await question_service.generate_questions(
        db, request.type, request.difficulty, limit=request.limit
    )


@router.get("/job-descriptions", response_model=List[JobDescriptionResponse])
async def get_job_descriptions(db: AsyncSession = Depends(get_async_session)):
    """List the job descriptions a visitor can pick from"""
    return await question_service.get_job_descriptions(db)


@router.get("/job-descriptions/{job_description_id}", response_model=JobDescriptionResponse)
async def get_job_description(job_description_id: str, db: AsyncSession = Depends(get_async_session)):
    return await question_service.get_job_description(db, job_description_id)
