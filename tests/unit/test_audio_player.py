"""Tests for the single-resource audio player."""

import asyncio
import base64

import pytest

from interview_questions.core.errors import DataError
from interview_questions.media.memory_media import MemoryMediaBackend
from interview_questions.playback.audio_player import AudioPlayer, PlayerState
from interview_questions.playback.errors import PlaybackAborted, PlaybackError, PlaybackTimeout
from interview_questions.playback.events import STATE_CHANGED, PlaybackEventBus

AUDIO_B64 = base64.b64encode(b"ID3 first clip").decode()
OTHER_AUDIO_B64 = base64.b64encode(b"ID3 second clip").decode()


async def wait_until(predicate, attempts: int = 200):
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


class TestAudioPlayer:

    async def test_natural_completion_cleans_up(self):
        media = MemoryMediaBackend(auto_finish=True)
        completed = []
        player = AudioPlayer(media, on_complete=lambda: completed.append(True))

        await player.play(AUDIO_B64)

        assert player.state is PlayerState.IDLE
        assert completed == [True]
        assert media.created[0].audio == b"ID3 first clip"
        assert media.created[0].released
        assert media.active_resources == []
        assert media.live_urls == []

    async def test_async_on_complete_is_awaited(self):
        completed = []

        async def on_complete():
            completed.append(True)

        player = AudioPlayer(MemoryMediaBackend(auto_finish=True), on_complete=on_complete)

        await player.play(AUDIO_B64)

        assert completed == [True]

    async def test_stop_when_idle_is_a_no_op(self):
        media = MemoryMediaBackend()
        player = AudioPlayer(media)

        assert await player.stop() is False
        assert player.state is PlayerState.IDLE
        assert media.created == []

    async def test_stop_after_completion_is_a_no_op(self):
        player = AudioPlayer(MemoryMediaBackend(auto_finish=True))
        await player.play(AUDIO_B64)

        assert await player.stop() is False

    async def test_cancelled_play_releases_resource(self):
        media = MemoryMediaBackend()
        player = AudioPlayer(media)

        task = asyncio.create_task(player.play(AUDIO_B64))
        await wait_until(lambda: player.is_playing)
        resource = media.current

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert resource.released
        assert media.live_urls == []
        assert player.state is PlayerState.IDLE
        assert await player.stop() is False

    async def test_stop_while_playing_releases_resource(self):
        media = MemoryMediaBackend()
        completed = []
        player = AudioPlayer(media, on_complete=lambda: completed.append(True))

        task = asyncio.create_task(player.play(AUDIO_B64))
        await wait_until(lambda: player.is_playing)
        resource = media.current

        assert await player.stop() is True

        with pytest.raises(PlaybackAborted):
            await task
        assert resource.released
        assert resource.url not in media.live_urls
        assert player.state is PlayerState.IDLE
        assert completed == []

    async def test_stop_while_loading_aborts(self):
        media = MemoryMediaBackend(auto_ready=False)
        player = AudioPlayer(media, ready_timeout=5.0)

        task = asyncio.create_task(player.play(AUDIO_B64))
        await wait_until(lambda: media.current is not None)

        assert player.is_loading
        assert await player.stop() is True
        with pytest.raises(PlaybackAborted):
            await task
        assert media.started == []
        assert media.live_urls == []

    async def test_new_play_supersedes_previous(self):
        media = MemoryMediaBackend()
        player = AudioPlayer(media)

        first = asyncio.create_task(player.play(AUDIO_B64))
        await wait_until(lambda: player.is_playing)

        second = asyncio.create_task(player.play(OTHER_AUDIO_B64))
        with pytest.raises(PlaybackAborted):
            await first
        await wait_until(lambda: len(media.started) == 2)

        assert media.created[0].released
        assert media.active_resources == [media.created[1]]
        assert media.live_urls == [media.created[1].url]
        assert player.is_playing

        media.created[1].finish()
        await second

        assert player.state is PlayerState.IDLE
        assert media.live_urls == []

    async def test_watchdog_fails_resource_that_never_loads(self):
        media = MemoryMediaBackend(auto_ready=False)
        player = AudioPlayer(media, ready_timeout=0.05)

        with pytest.raises(PlaybackTimeout, match="Audio loading timeout"):
            await player.play(AUDIO_B64)

        assert player.state is PlayerState.IDLE
        assert media.active_resources == []
        assert media.live_urls == []

    async def test_load_failure_cleans_up(self):
        media = MemoryMediaBackend(load_error=PlaybackError("could not decode"))
        player = AudioPlayer(media)

        with pytest.raises(PlaybackError, match="could not decode"):
            await player.play(AUDIO_B64)

        assert player.state is PlayerState.IDLE
        assert media.live_urls == []

    async def test_device_refusal_cleans_up(self):
        media = MemoryMediaBackend(play_error=PlaybackError("autoplay blocked"))
        player = AudioPlayer(media)

        with pytest.raises(PlaybackError, match="autoplay blocked"):
            await player.play(AUDIO_B64)

        assert player.state is PlayerState.IDLE
        assert media.live_urls == []

    async def test_invalid_payload_creates_no_resource(self):
        media = MemoryMediaBackend()
        player = AudioPlayer(media)

        with pytest.raises(DataError):
            await player.play("")

        assert media.created == []
        assert player.state is PlayerState.IDLE

    async def test_state_changes_are_published(self):
        bus = PlaybackEventBus()
        states = []

        async def record(event):
            states.append(event.state)

        bus.subscribe(STATE_CHANGED, record)
        player = AudioPlayer(MemoryMediaBackend(auto_finish=True), events=bus)

        await player.play(AUDIO_B64)

        assert states == ["loading", "playing", "idle"]

    async def test_close_releases_everything(self):
        media = MemoryMediaBackend()
        player = AudioPlayer(media)
        task = asyncio.create_task(player.play(AUDIO_B64))
        await wait_until(lambda: player.is_playing)

        await player.close()

        with pytest.raises(PlaybackAborted):
            await task
        assert media.active_resources == []
        assert media.live_urls == []
