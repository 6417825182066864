from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import datetime
import uuid

from .timestamps import created_at_field


class QuestionBase(SQLModel):
    text: str
    type_id: str = Field(index=True)
    difficulty_id: str = Field(index=True)
    sample_answer: Optional[str] = None
    job_description_id: Optional[str] = Field(default=None, index=True)


class Question(QuestionBase, table=True):
    __tablename__ = "questions"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    created_at: datetime = created_at_field()

    # Foreign keys
    type_id: str = Field(foreign_key="question_types.id", index=True)
    difficulty_id: str = Field(foreign_key="difficulty_levels.id", index=True)
    job_description_id: Optional[str] = Field(default=None, foreign_key="job_descriptions.id", index=True)

    # Relationships
    job_description: Optional["JobDescription"] = Relationship(back_populates="questions")
    template_links: List["TemplateQuestion"] = Relationship(back_populates="question")
    voice_responses: List["VoiceResponse"] = Relationship(back_populates="question")
