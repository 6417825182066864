"""
Pydantic schemas for the proxy functions.

Request bodies keep the camelCase field names used by browser clients.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from interview_questions.models.enums import QuestionType, DifficultyLevel
from interview_questions.schemas.question_schemas import QuestionResponse


class TextToSpeechRequest(BaseModel):
    """Schema for a speech synthesis request."""
    text: Optional[str] = Field(None, description="Text to synthesize")
    voice: Optional[str] = Field(None, description="Voice identifier, defaults to alloy")
    format: Optional[str] = Field(None, description="Audio container, defaults to mp3")


class TextToSpeechResponse(BaseModel):
    """Schema for a successful synthesis."""
    audio: str = Field(..., description="Base64-encoded audio")


class CustomQuestionsRequest(BaseModel):
    """Schema for the custom question generation function."""
    model_config = ConfigDict(populate_by_name=True)

    question_type: Optional[QuestionType] = Field(None, alias="questionType")
    difficulty_level: Optional[DifficultyLevel] = Field(None, alias="difficultyLevel")
    job_description_id: Optional[str] = Field(None, alias="jobDescriptionId")
    # free text pasted by the visitor; accepted but not used for selection
    job_description: Optional[str] = Field(None, alias="jobDescription")
    resume_text: Optional[str] = Field(None, alias="resumeText")


class CustomQuestionsResponse(BaseModel):
    """Schema for generated questions."""
    questions: List[QuestionResponse] = Field(default_factory=list)


class SpeechToTextRequest(BaseModel):
    """Schema for a transcription request."""
    model_config = ConfigDict(populate_by_name=True)

    audio: Optional[str] = Field(None, description="Base64-encoded recording")
    mime_type: Optional[str] = Field(None, alias="mimeType", description="Recording type, defaults to audio/webm")


class SpeechToTextResponse(BaseModel):
    """Schema for a transcription."""
    text: str


class FeedbackRequest(BaseModel):
    """Schema for an answer feedback request."""
    model_config = ConfigDict(populate_by_name=True)

    question_text: str = Field(..., alias="questionText")
    question_type: Optional[str] = Field(None, alias="questionType")
    answer: Optional[str] = Field(None, description="Transcribed answer")


class FeedbackResponse(BaseModel):
    """Schema for answer feedback."""
    feedback: str


class ErrorResponse(BaseModel):
    """Schema for every error body."""
    error: str
    code: str
    message: Optional[str] = None
