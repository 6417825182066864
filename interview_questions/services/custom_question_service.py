from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.core.config import Settings
from interview_questions.core.errors import ValidationError
from interview_questions.models.enums import QuestionType, DifficultyLevel
from interview_questions.schemas.question_schemas import QuestionResponse
from interview_questions.services.question_service import QuestionService, question_service
import structlog

logger = structlog.get_logger()


class CustomQuestionService:
    """Backs the generate-custom-questions function.

    Questions come straight from the store: by job description when one is
    given, otherwise by type and difficulty.
    """

    def __init__(self, settings: Settings, questions: Optional[QuestionService] = None):
        self.settings = settings
        self.questions = questions or question_service

    async def generate(
        self,
        db: AsyncSession,
        question_type: Optional[QuestionType] = None,
        difficulty: Optional[DifficultyLevel] = None,
        job_description_id: Optional[str] = None
    ) -> List[QuestionResponse]:
        logger.info("Custom question request",
                    question_type=question_type.value if question_type else None,
                    difficulty=difficulty.value if difficulty else None,
                    job_description_id=job_description_id)

        if job_description_id:
            return await self.questions.get_questions_for_job_description(
                db, job_description_id, limit=self.settings.custom_questions_limit
            )

        if question_type is None or difficulty is None:
            raise ValidationError("questionType and difficultyLevel are required without jobDescriptionId")

        return await self.questions.generate_questions(
            db, question_type, difficulty, limit=self.settings.generate_questions_limit
        )
