from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON
from typing import Optional, List
from datetime import datetime
import uuid

from .timestamps import created_at_field


class JobDescriptionBase(SQLModel):
    title: str
    description: str
    required_skills: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))


class JobDescription(JobDescriptionBase, table=True):
    __tablename__ = "job_descriptions"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    created_at: datetime = created_at_field()

    # Relationships
    questions: List["Question"] = Relationship(back_populates="job_description")


class JobDescriptionSummary(SQLModel):
    """Job description fields embedded in questions sourced by job description."""

    id: str
    title: str
    description: str
    required_skills: List[str] = []
