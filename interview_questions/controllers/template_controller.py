from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
from interview_questions.core.database import get_async_session
from interview_questions.schemas.template_schemas import (
    AddTemplateQuestionRequest,
    TemplateCreateRequest,
    TemplateQuestionResponse,
    TemplateResponse,
)
from interview_questions.services.template_service import template_service
from typing import List
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/templates", tags=["Templates"])


@router.get("", response_model=List[TemplateResponse])
async def get_templates(db: AsyncSession = Depends(get_async_session)):
    """List saved templates"""
    return await template_service.get_templates(db)


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    template: TemplateCreateRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """Create a named template"""
    return await template_service.create_template(db, template.name, template.description)


@router.get("/{template_id}/questions", response_model=List[TemplateQuestionResponse])
async def get_template_questions(template_id: str, db: AsyncSession = Depends(get_async_session)):
    """List a template's questions in order"""
    return await template_service.get_template_questions(db, template_id)


@router.post(
    "/{template_id}/questions",
    response_model=TemplateQuestionResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_question_to_template(
    template_id: str,
    request: AddTemplateQuestionRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """Append a question to a template at the given order index"""
    await template_service.add_question_to_template(
        db, template_id, request.question_id, request.order_index
    )
    questions = await template_service.get_template_questions(db, template_id)
    return next(q for q in questions if q.order_index == request.order_index)


@router.get("/{template_id}/export", response_class=PlainTextResponse)
async def export_template(template_id: str, db: AsyncSession = Depends(get_async_session)):
    """Download a template as a text document"""
    filename, content = await template_service.export_template(db, template_id)
    return PlainTextResponse(
        content,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
