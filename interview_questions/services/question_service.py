from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.core.errors import NotFoundError, ServiceError, StoreError
from interview_questions.dao.job_description_dao import job_description_dao
from interview_questions.dao.lookup_dao import question_type_dao, difficulty_level_dao
from interview_questions.dao.question_dao import question_dao
from interview_questions.models.enums import (
    QuestionType, DifficultyLevel, QUESTION_TYPE_LABELS, DIFFICULTY_LABELS
)
from interview_questions.models.job_description import JobDescription
from interview_questions.models.lookup import QuestionTypeRecord, DifficultyLevelRecord
from interview_questions.schemas.question_schemas import QuestionResponse
import structlog

logger = structlog.get_logger()


class QuestionService:
    def __init__(self):
        self.question_dao = question_dao
        self.job_description_dao = job_description_dao
        self.question_type_dao = question_type_dao
        self.difficulty_level_dao = difficulty_level_dao

    async def seed_lookups(self, db: AsyncSession) -> int:
        """Insert the fixed question types and difficulty levels if missing."""
        added = await self.question_type_dao.seed(
            db, [(t.value, QUESTION_TYPE_LABELS[t]) for t in QuestionType]
        )
        added += await self.difficulty_level_dao.seed(
            db, [(d.value, DIFFICULTY_LABELS[d]) for d in DifficultyLevel]
        )
        return added

    async def get_question_types(self, db: AsyncSession) -> List[QuestionTypeRecord]:
        try:
            return await self.question_type_dao.get_all(db)
        except Exception as e:
            logger.error("Error fetching question types", error=str(e))
            raise StoreError("Could not retrieve question types") from e

    async def get_difficulty_levels(self, db: AsyncSession) -> List[DifficultyLevelRecord]:
        try:
            return await self.difficulty_level_dao.get_all(db)
        except Exception as e:
            logger.error("Error fetching difficulty levels", error=str(e))
            raise StoreError("Could not retrieve difficulty levels") from e

    async def generate_questions(
        self,
        db: AsyncSession,
        question_type: QuestionType,
        difficulty: DifficultyLevel,
        limit: int = 2
    ) -> List[QuestionResponse]:
        try:
            questions = await self.question_dao.generate_questions(
                db, question_type.value, difficulty.value, limit=limit
            )
            logger.info("Generated questions",
                        question_type=question_type.value,
                        difficulty=difficulty.value,
                        requested=limit,
                        count=len(questions))
            return [QuestionResponse.from_row(q) for q in questions]
        except Exception as e:
            logger.error("Error in generate_questions",
                         question_type=question_type.value,
                         difficulty=difficulty.value,
                         error=str(e))
            raise StoreError("Failed to generate questions") from e

    async def get_questions_for_job_description(
        self,
        db: AsyncSession,
        job_description_id: str,
        limit: int = 5
    ) -> List[QuestionResponse]:
        try:
            questions = await self.question_dao.get_by_job_description(db, job_description_id, limit=limit)
            logger.info("Retrieved questions by job description",
                        job_description_id=job_description_id,
                        count=len(questions))
            return [QuestionResponse.from_row(q, include_job_description=True) for q in questions]
        except Exception as e:
            logger.error("Error getting questions by job description",
                         job_description_id=job_description_id,
                         error=str(e))
            raise StoreError("Failed to fetch questions for job description") from e

    async def get_job_descriptions(self, db: AsyncSession) -> List[JobDescription]:
        try:
            job_descriptions = await self.job_description_dao.get_all(db)
            logger.info("Retrieved job descriptions", count=len(job_descriptions))
            return job_descriptions
        except Exception as e:
            logger.error("Error fetching job descriptions", error=str(e))
            raise StoreError("Failed to load job descriptions") from e

    async def get_job_description(self, db: AsyncSession, job_description_id: str) -> JobDescription:
        try:
            job_description = await self.job_description_dao.get_by_id(db, job_description_id)
        except Exception as e:
            logger.error("Error getting job description", job_description_id=job_description_id, error=str(e))
            raise StoreError("Could not retrieve job description") from e
        if not job_description:
            logger.warning("Job description not found", job_description_id=job_description_id)
            raise NotFoundError("Job description not found")
        return job_description


question_service = QuestionService()
