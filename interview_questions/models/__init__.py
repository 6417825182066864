# Import all models so every table is registered on SQLModel.metadata
from .enums import QuestionType, DifficultyLevel, TTSVoice
from .lookup import QuestionTypeRecord, DifficultyLevelRecord, LookupRead
from .job_description import JobDescription, JobDescriptionSummary
from .question import Question
from .question_template import QuestionTemplate, TemplateQuestion
from .voice_response import VoiceResponse

__all__ = [
    # Enums
    "QuestionType", "DifficultyLevel", "TTSVoice",

    # Lookup tables
    "QuestionTypeRecord", "DifficultyLevelRecord", "LookupRead",

    # Job descriptions and questions
    "JobDescription", "JobDescriptionSummary", "Question",

    # Templates and recorded answers
    "QuestionTemplate", "TemplateQuestion", "VoiceResponse",
]
