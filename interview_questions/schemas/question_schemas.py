"""
Pydantic schemas for question retrieval endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from interview_questions.models.enums import QuestionType, DifficultyLevel
from interview_questions.models.job_description import JobDescriptionSummary


class GenerateQuestionsRequest(BaseModel):
    """Schema for a bounded question request by type and difficulty."""
    type: QuestionType = Field(..., description="Question type")
    difficulty: DifficultyLevel = Field(..., description="Difficulty level")
    limit: int = Field(2, ge=1, le=50, description="Maximum number of questions returned")


class QuestionResponse(BaseModel):
    """Schema for a question as seen by clients."""
    id: str = Field(..., description="Question identifier")
    text: str = Field(..., description="Question text")
    type: QuestionType = Field(..., description="Question type")
    difficulty: DifficultyLevel = Field(..., description="Difficulty level")
    sample_answer: Optional[str] = Field(None, description="Sample answer, when one is stored")
    job_description: Optional[JobDescriptionSummary] = Field(
        None, description="Parent job description, when sourced by job description"
    )

    @classmethod
    def from_row(cls, question, include_job_description: bool = False) -> "QuestionResponse":
        job_description = None
        if include_job_description and question.job_description is not None:
            jd = question.job_description
            job_description = JobDescriptionSummary(
                id=jd.id,
                title=jd.title,
                description=jd.description,
                required_skills=list(jd.required_skills or []),
            )
        return cls(
            id=question.id,
            text=question.text,
            type=question.type_id,
            difficulty=question.difficulty_id,
            sample_answer=question.sample_answer,
            job_description=job_description,
        )


class JobDescriptionResponse(BaseModel):
    """Schema for a job description listing entry."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    required_skills: List[str] = []
