from fastapi import Request

from interview_questions.services.custom_question_service import CustomQuestionService
from interview_questions.services.speech_service import SpeechService


def get_speech_service(request: Request) -> SpeechService:
    return request.app.state.speech_service


def get_custom_question_service(request: Request) -> CustomQuestionService:
    return request.app.state.custom_question_service
