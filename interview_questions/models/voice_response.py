from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import datetime
import uuid

from .timestamps import created_at_field


class VoiceResponseBase(SQLModel):
    question_id: str = Field(index=True)
    audio_url: Optional[str] = None
    transcript: Optional[str] = None
    feedback: Optional[str] = None


class VoiceResponse(VoiceResponseBase, table=True):
    __tablename__ = "voice_responses"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    created_at: datetime = created_at_field()

    # Foreign key
    question_id: str = Field(foreign_key="questions.id", index=True)

    # Relationships
    question: "Question" = Relationship(back_populates="voice_responses")
