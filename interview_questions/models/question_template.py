from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import UniqueConstraint
from typing import Optional, List
from datetime import datetime
import uuid

from .timestamps import created_at_field


class QuestionTemplateBase(SQLModel):
    name: str
    description: Optional[str] = None


class QuestionTemplate(QuestionTemplateBase, table=True):
    __tablename__ = "question_templates"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    created_at: datetime = created_at_field()

    # Relationships
    question_links: List["TemplateQuestion"] = Relationship(back_populates="template")


class TemplateQuestionBase(SQLModel):
    template_id: str = Field(index=True)
    question_id: str = Field(index=True)
    order_index: int


class TemplateQuestion(TemplateQuestionBase, table=True):
    __tablename__ = "template_questions"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    created_at: datetime = created_at_field()

    # Foreign keys
    template_id: str = Field(foreign_key="question_templates.id", index=True)
    question_id: str = Field(foreign_key="questions.id", index=True)

    # Relationships
    template: "QuestionTemplate" = Relationship(back_populates="question_links")
    question: "Question" = Relationship(back_populates="template_links")

    # Unique constraint
    __table_args__ = (
        UniqueConstraint("template_id", "order_index"),
    )
