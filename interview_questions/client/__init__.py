from .api_client import InterviewApiClient
from .speech_client import Notice, NOTICE_MESSAGES, SpeechClient, SpeechResult, notice_for_error

__all__ = [
    "InterviewApiClient",
    "Notice",
    "NOTICE_MESSAGES",
    "SpeechClient",
    "SpeechResult",
    "notice_for_error",
]
