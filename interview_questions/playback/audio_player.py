"""
Single-resource audio player.

States: IDLE -> LOADING -> PLAYING -> IDLE on completion, LOADING -> IDLE on
error or abort, PLAYING -> IDLE on ``stop``. At most one resource is live;
starting again or stopping releases the previous one.

Every attempt carries an ``AbortToken``. Continuations check it after each
await and a superseded attempt never touches player state.
"""

import asyncio
import inspect
from enum import Enum
from typing import Any, Callable, Optional

import structlog

from interview_questions.core.audio_codec import decode_base64_audio
from interview_questions.media.base_media import AudioResource, BaseMediaBackend
from interview_questions.playback.errors import PlaybackAborted, PlaybackTimeout
from interview_questions.playback.events import STATE_CHANGED, PlaybackEvent, PlaybackEventBus

logger = structlog.get_logger()


class PlayerState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"


class AbortToken:
    def __init__(self):
        self._aborted = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    def abort(self) -> None:
        self._aborted = True

    def check(self) -> None:
        if self._aborted:
            raise PlaybackAborted()


class AudioPlayer:
    def __init__(
        self,
        media: BaseMediaBackend,
        ready_timeout: float = 15.0,
        on_complete: Optional[Callable[[], Any]] = None,
        events: Optional[PlaybackEventBus] = None,
    ):
        self.media = media
        self.ready_timeout = ready_timeout
        self.on_complete = on_complete
        self.events = events
        self._state = PlayerState.IDLE
        self._resource: Optional[AudioResource] = None
        self._token: Optional[AbortToken] = None

    @property
    def state(self) -> PlayerState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlayerState.PLAYING

    @property
    def is_loading(self) -> bool:
        return self._state is PlayerState.LOADING

    async def begin(self) -> AbortToken:
        """Abort and tear down any previous attempt, then enter LOADING."""
        if self._token is not None:
            self._token.abort()
        self._release_resource()
        token = AbortToken()
        self._token = token
        await self._set_state(PlayerState.LOADING)
        return token

    async def play(self, audio_b64: str, token: Optional[AbortToken] = None) -> None:
        """Decode and play ``audio_b64`` until it finishes.

        Raises DataError for bad payloads, PlaybackTimeout when the resource
        is not ready within ``ready_timeout``, PlaybackAborted when superseded
        or stopped, and PlaybackError for media failures.
        """
        owns_token = token is None
        if owns_token:
            token = await self.begin()
        try:
            audio = decode_base64_audio(audio_b64)
            token.check()

            resource = self.media.play(audio)
            if token is not self._token:
                resource.release()
                raise PlaybackAborted()
            self._resource = resource

            try:
                await asyncio.wait_for(resource.wait_ready(), timeout=self.ready_timeout)
            except asyncio.TimeoutError:
                logger.warning("Audio loading timeout", timeout=self.ready_timeout)
                raise PlaybackTimeout()
            token.check()

            await resource.start()
            token.check()
            await self._set_state(PlayerState.PLAYING)
            logger.info("Audio playback started", size=len(audio))

            await resource.wait_finished()
            token.check()
            if resource.released:
                raise PlaybackAborted("Audio resource was released")
        except (Exception, asyncio.CancelledError):
            if owns_token:
                await self.finish(token)
            elif token is self._token and not token.aborted:
                await self.reset(token)
            raise

        logger.info("Audio playback completed")
        await self.finish(token)
        if self.on_complete is not None:
            result = self.on_complete()
            if inspect.isawaitable(result):
                await result

    async def reset(self, token: AbortToken) -> None:
        """Release the resource and go IDLE, if ``token`` is still current."""
        if token is not self._token:
            return
        self._release_resource()
        await self._set_state(PlayerState.IDLE)

    async def finish(self, token: AbortToken) -> None:
        """Close out ``token`` as the current attempt; a later ``stop`` has nothing to abort."""
        if token is not self._token:
            return
        self._token = None
        self._release_resource()
        await self._set_state(PlayerState.IDLE)

    async def stop(self) -> bool:
        """Abort the current attempt. Returns False if there was nothing to stop."""
        token, self._token = self._token, None
        if token is not None:
            token.abort()
        if self._state is PlayerState.IDLE:
            # an attempt waiting between retries holds no resource
            if token is not None:
                logger.info("Pending playback aborted")
            return token is not None
        self._release_resource()
        await self._set_state(PlayerState.IDLE)
        logger.info("Audio playback stopped")
        return True

    async def close(self) -> None:
        await self.stop()
        self.media.stop()

    def _release_resource(self) -> None:
        resource, self._resource = self._resource, None
        if resource is not None:
            resource.release()

    async def _set_state(self, state: PlayerState) -> None:
        if state is self._state:
            return
        self._state = state
        if self.events is not None:
            await self.events.publish(PlaybackEvent(STATE_CHANGED, state=state.value))
