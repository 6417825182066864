from typing import List, Tuple
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.dao.base_dao import BaseDAO
from interview_questions.models.question import Question
from interview_questions.models.question_template import QuestionTemplate, TemplateQuestion
import structlog

logger = structlog.get_logger()


class QuestionTemplateDAO(BaseDAO[QuestionTemplate]):
    def __init__(self):
        super().__init__(QuestionTemplate)

    async def get_all(self, db: AsyncSession) -> List[QuestionTemplate]:
        return await self.list_where(db, order_by=QuestionTemplate.created_at)

    async def get_template_questions(
        self,
        db: AsyncSession,
        template_id: str
    ) -> List[Tuple[TemplateQuestion, Question]]:
        """Template entries joined with their questions, in order_index order"""
        try:
            result = await db.execute(
                select(TemplateQuestion, Question)
                .join(Question, Question.id == TemplateQuestion.question_id)
                .where(TemplateQuestion.template_id == template_id)
                .order_by(TemplateQuestion.order_index)
            )
            return [(link, question) for link, question in result.all()]
        except Exception as e:
            logger.error("Error getting template questions", template_id=template_id, error=str(e))
            raise


class TemplateQuestionDAO(BaseDAO[TemplateQuestion]):
    def __init__(self):
        super().__init__(TemplateQuestion)


question_template_dao = QuestionTemplateDAO()
template_question_dao = TemplateQuestionDAO()
