import re
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.core.errors import ConflictError, NotFoundError, StoreError
from interview_questions.dao.question_dao import question_dao
from interview_questions.dao.template_dao import question_template_dao, template_question_dao
from interview_questions.models.question_template import QuestionTemplate, TemplateQuestion
from interview_questions.schemas.template_schemas import TemplateQuestionResponse
import structlog

logger = structlog.get_logger()


class TemplateService:
    def __init__(self):
        self.template_dao = question_template_dao
        self.template_question_dao = template_question_dao
        self.question_dao = question_dao

    async def create_template(self, db: AsyncSession, name: str, description: Optional[str] = None) -> QuestionTemplate:
        try:
            template = await self.template_dao.create(
                db, obj_in={"name": name, "description": description}
            )
            logger.info("Template created successfully", template_id=template.id, name=name)
            return template
        except Exception as e:
            logger.error("Error creating template", name=name, error=str(e))
            raise StoreError("Failed to create template") from e

    async def get_templates(self, db: AsyncSession) -> List[QuestionTemplate]:
        try:
            templates = await self.template_dao.get_all(db)
            logger.info("Retrieved templates", count=len(templates))
            return templates
        except Exception as e:
            logger.error("Error fetching templates", error=str(e))
            raise StoreError("Failed to load templates") from e

    async def get_template(self, db: AsyncSession, template_id: str) -> QuestionTemplate:
        try:
            template = await self.template_dao.get_by_id(db, template_id)
        except Exception as e:
            logger.error("Error getting template", template_id=template_id, error=str(e))
            raise StoreError("Could not retrieve template") from e
        if not template:
            logger.warning("Template not found", template_id=template_id)
            raise NotFoundError("Template not found")
        return template

    async def get_template_questions(self, db: AsyncSession, template_id: str) -> List[TemplateQuestionResponse]:
        await self.get_template(db, template_id)
        try:
            rows = await self.template_dao.get_template_questions(db, template_id)
        except Exception as e:
            logger.error("Error fetching template questions", template_id=template_id, error=str(e))
            raise StoreError("Failed to load template questions") from e
        return [
            TemplateQuestionResponse(
                question_id=question.id,
                text=question.text,
                type=question.type_id,
                difficulty=question.difficulty_id,
                order_index=link.order_index,
            )
            for link, question in rows
        ]

    async def add_question_to_template(
        self,
        db: AsyncSession,
        template_id: str,
        question_id: str,
        order_index: int
    ) -> TemplateQuestion:
        await self.get_template(db, template_id)
        if not await self.question_dao.exists(db, question_id):
            logger.warning("Question not found", question_id=question_id)
            raise NotFoundError("Question not found")

        try:
            link = await self.template_question_dao.create(
                db,
                obj_in={
                    "template_id": template_id,
                    "question_id": question_id,
                    "order_index": order_index,
                }
            )
        except IntegrityError as e:
            logger.warning("Duplicate template order index",
                           template_id=template_id,
                           order_index=order_index)
            raise ConflictError(
                f"Order index {order_index} is already used in this template"
            ) from e
        except Exception as e:
            logger.error("Error adding question to template",
                         template_id=template_id,
                         question_id=question_id,
                         error=str(e))
            raise StoreError("Failed to add question to template") from e

        logger.info("Question added to template",
                    template_id=template_id,
                    question_id=question_id,
                    order_index=order_index)
        return link

    async def export_template(self, db: AsyncSession, template_id: str) -> Tuple[str, str]:
        """Render a template as plain text. Returns (filename, content)."""
        template = await self.get_template(db, template_id)
        questions = await self.get_template_questions(db, template_id)
        if not questions:
            raise NotFoundError("No questions to export")
        return export_filename(template.name), render_template_export(template, questions)


def render_template_export(template: QuestionTemplate, questions: List[TemplateQuestionResponse]) -> str:
    questions_text = "\n\n".join(
        f"{index}. [{q.type.value.upper()}] {q.text}"
        for index, q in enumerate(questions, start=1)
    )
    return (
        f"# {template.name}\n"
        f"{template.description or ''}\n"
        f"\n"
        f"## Questions\n"
        f"{questions_text}\n"
    )


def export_filename(name: str) -> str:
    slug = re.sub(r"\s+", "-", name.strip().lower())
    return f"{slug}-template.txt"


template_service = TemplateService()
