"""
Retry decisions for the synthesize-then-play flow.

``RetryPolicy.decide`` is a pure function of the attempt number and the
error, so the policy is tested without any network or audio.
"""

from dataclasses import dataclass
from enum import Enum

from interview_questions.core.config import Settings
from interview_questions.core.errors import (
    CREDENTIAL_CODES,
    ConfigurationError,
    ConflictError,
    DataError,
    NotFoundError,
    ServiceError,
    UpstreamError,
    ValidationError,
)
from interview_questions.playback.errors import PlaybackAborted, PlaybackError


class RetryAction(str, Enum):
    RETRY = "retry"
    # terminal, shown to the user as a key notice
    NOTIFY = "notify"
    FAIL = "fail"
    ABORT = "abort"


@dataclass(frozen=True)
class RetryDecision:
    action: RetryAction
    delay: float = 0.0
    reason: str = ""

    @property
    def should_retry(self) -> bool:
        return self.action is RetryAction.RETRY


TERMINAL_ERRORS = (ValidationError, NotFoundError, ConflictError, DataError)


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 2
    delay: float = 1.0
    backoff: float = 1.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(max_retries=settings.playback_max_retries, delay=settings.playback_retry_delay)

    def delay_for(self, attempt: int) -> float:
        return self.delay * (self.backoff ** max(0, attempt - 1))

    def decide(self, attempt: int, error: BaseException) -> RetryDecision:
        """Decide what to do after failed attempt number ``attempt`` (1-based)."""
        if isinstance(error, PlaybackAborted):
            return RetryDecision(RetryAction.ABORT, reason="aborted")
        if isinstance(error, ConfigurationError):
            return RetryDecision(RetryAction.NOTIFY, reason="missing credential")
        if isinstance(error, UpstreamError) and error.code in CREDENTIAL_CODES:
            return RetryDecision(RetryAction.NOTIFY, reason=error.code)
        if isinstance(error, TERMINAL_ERRORS):
            return RetryDecision(RetryAction.FAIL, reason=getattr(error, "code", "terminal"))
        if not isinstance(error, (ServiceError, PlaybackError)):
            return RetryDecision(RetryAction.FAIL, reason=type(error).__name__)
        if attempt > self.max_retries:
            return RetryDecision(RetryAction.FAIL, reason="retries exhausted")
        return RetryDecision(RetryAction.RETRY, delay=self.delay_for(attempt), reason="transient")
