"""
Pydantic schemas for voice response endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class VoiceResponseCreateRequest(BaseModel):
    """Schema for saving a recorded answer."""
    question_id: str = Field(..., description="Question the answer belongs to")
    audio_url: Optional[str] = Field(None, description="Reference to the stored recording")
    transcript: Optional[str] = Field(None, description="Transcript of the answer")
    feedback: Optional[str] = Field(None, description="Feedback on the answer")


class VoiceResponseResponse(BaseModel):
    """Schema for a saved voice response."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    question_id: str
    audio_url: Optional[str] = None
    transcript: Optional[str] = None
    feedback: Optional[str] = None
    created_at: datetime
