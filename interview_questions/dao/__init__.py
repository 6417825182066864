# Export all DAO classes
from .base_dao import BaseDAO
from .lookup_dao import question_type_dao, difficulty_level_dao
from .question_dao import question_dao
from .job_description_dao import job_description_dao
from .template_dao import question_template_dao, template_question_dao
from .voice_response_dao import voice_response_dao

__all__ = [
    "BaseDAO",
    "question_type_dao",
    "difficulty_level_dao",
    "question_dao",
    "job_description_dao",
    "question_template_dao",
    "template_question_dao",
    "voice_response_dao",
]
