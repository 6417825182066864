"""
Pydantic schemas for question template endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from interview_questions.models.enums import QuestionType, DifficultyLevel


class TemplateCreateRequest(BaseModel):
    """Schema for creating a named template."""
    name: str = Field(..., description="Template name")
    description: Optional[str] = Field(None, description="Optional template description")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Template name is required")
        return value.strip()


class TemplateResponse(BaseModel):
    """Schema for a template."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime


class AddTemplateQuestionRequest(BaseModel):
    """Schema for appending a question to a template at a given position."""
    question_id: str = Field(..., description="Question identifier")
    order_index: int = Field(..., ge=0, description="Position of the question in the template")


class TemplateQuestionResponse(BaseModel):
    """Schema for a question inside a template."""
    question_id: str
    text: str
    type: QuestionType
    difficulty: DifficultyLevel
    order_index: int
