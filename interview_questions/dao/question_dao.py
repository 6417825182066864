from typing import List, Optional
from sqlmodel import select
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from interview_questions.dao.base_dao import BaseDAO
from interview_questions.models.question import Question
import structlog

logger = structlog.get_logger()


class QuestionDAO(BaseDAO[Question]):
    def __init__(self):
        super().__init__(Question)

    async def generate_questions(
        self,
        db: AsyncSession,
        question_type: str,
        difficulty: str,
        limit: int = 2
    ) -> List[Question]:
        """Random sample of at most ``limit`` questions of one type and difficulty"""
        try:
            result = await db.execute(
                select(Question)
                .where(Question.type_id == question_type)
                .where(Question.difficulty_id == difficulty)
                .order_by(func.random())
                .limit(limit)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error generating questions",
                         question_type=question_type,
                         difficulty=difficulty,
                         limit=limit,
                         error=str(e))
            raise

    async def get_by_job_description(
        self,
        db: AsyncSession,
        job_description_id: str,
        limit: int = 5
    ) -> List[Question]:
        """Questions attached to a job description, with the job description loaded"""
        try:
            result = await db.execute(
                select(Question)
                .where(Question.job_description_id == job_description_id)
                .options(selectinload(Question.job_description))
                .order_by(Question.created_at)
                .limit(limit)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error getting questions by job description",
                         job_description_id=job_description_id,
                         error=str(e))
            raise


question_dao = QuestionDAO()
