"""
Synthesize-then-play with a bounded retry.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

import structlog

from interview_questions.client.speech_client import NOTICE_MESSAGES, Notice, SpeechClient, notice_for_error
from interview_questions.core.errors import ServiceError
from interview_questions.playback.audio_player import AudioPlayer
from interview_questions.playback.errors import PlaybackError
from interview_questions.playback.events import ATTEMPT_FAILED, NOTICE, PlaybackEvent, PlaybackEventBus
from interview_questions.playback.retry import RetryAction, RetryPolicy

logger = structlog.get_logger()


class PlaybackStatus(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"
    # stopped on a credential problem; ``notice`` says which
    NOTIFIED = "notified"
    FAILED = "failed"


@dataclass
class PlaybackResult:
    status: PlaybackStatus
    attempts: int
    notice: Optional[Notice] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is PlaybackStatus.COMPLETED


class SpeechPlayback:
    def __init__(
        self,
        speech: SpeechClient,
        player: AudioPlayer,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        events: Optional[PlaybackEventBus] = None,
    ):
        self.speech = speech
        self.player = player
        self.policy = policy or RetryPolicy()
        self.sleep = sleep
        self.events = events

    async def speak(self, text: str, voice: Optional[str] = None) -> PlaybackResult:
        """Speak ``text``; failures are reported in the result, never raised."""
        attempt = 0
        token = None
        try:
            while True:
                attempt += 1
                token = await self.player.begin()
                try:
                    audio = await self.speech.synthesize(
                        text, voice, response_format=self.player.media.preferred_format
                    )
                    if token.aborted:
                        return PlaybackResult(PlaybackStatus.ABORTED, attempt)
                    await self.player.play(audio, token)
                    return PlaybackResult(PlaybackStatus.COMPLETED, attempt)
                except (ServiceError, PlaybackError) as exc:
                    await self.player.reset(token)
                    decision = self.policy.decide(attempt, exc)
                    logger.warning(
                        "Speech attempt failed",
                        attempt=attempt,
                        action=decision.action.value,
                        reason=decision.reason,
                        error=str(exc),
                    )

                    if decision.action is RetryAction.RETRY:
                        await self._publish(PlaybackEvent(
                            ATTEMPT_FAILED, message=str(exc), data={"attempt": attempt, "delay": decision.delay}
                        ))
                        await self.sleep(decision.delay)
                        if token.aborted:
                            return PlaybackResult(PlaybackStatus.ABORTED, attempt)
                        continue

                    if decision.action is RetryAction.ABORT:
                        return PlaybackResult(PlaybackStatus.ABORTED, attempt)

                    if decision.action is RetryAction.NOTIFY:
                        notice = notice_for_error(exc)
                        await self._publish(PlaybackEvent(
                            NOTICE, message=NOTICE_MESSAGES.get(notice), data={"notice": notice.value if notice else None}
                        ))
                        return PlaybackResult(PlaybackStatus.NOTIFIED, attempt, notice=notice, error=str(exc))

                    return PlaybackResult(PlaybackStatus.FAILED, attempt, error=str(exc))
        finally:
            if token is not None:
                await self.player.finish(token)

    async def stop(self) -> bool:
        return await self.player.stop()

    async def _publish(self, event: PlaybackEvent) -> None:
        if self.events is not None:
            await self.events.publish(event)
