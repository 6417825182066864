from enum import Enum


class QuestionType(str, Enum):
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    SITUATIONAL = "situational"
    COMPETENCY = "competency"


class DifficultyLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class TTSVoice(str, Enum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


QUESTION_TYPE_LABELS = {
    QuestionType.TECHNICAL: "Technical",
    QuestionType.BEHAVIORAL: "Behavioral",
    QuestionType.SITUATIONAL: "Situational",
    QuestionType.COMPETENCY: "Competency-based",
}

DIFFICULTY_LABELS = {
    DifficultyLevel.EASY: "Easy",
    DifficultyLevel.MEDIUM: "Medium",
    DifficultyLevel.HARD: "Hard",
}
