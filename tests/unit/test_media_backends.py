"""Tests for the media backend factory, the in-memory backend and the event bus."""

import pytest

from interview_questions.media import MediaService, MemoryMediaBackend
from interview_questions.playback.errors import PlaybackError
from interview_questions.playback.events import NOTICE, STATE_CHANGED, PlaybackEvent, PlaybackEventBus


class TestMediaService:

    def test_memory_provider_passes_options(self):
        backend = MediaService().create("Memory", auto_finish=True)

        assert isinstance(backend, MemoryMediaBackend)
        assert backend.auto_finish is True

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported media provider"):
            MediaService().create("alsa")


class TestMemoryMediaBackend:

    def test_object_urls_are_tracked_until_revoked(self):
        backend = MemoryMediaBackend()

        url = backend.create_object_url(b"abc", "audio/webm")
        assert url in backend.live_urls

        backend.revoke_object_url(url)
        assert url not in backend.live_urls

    def test_release_frees_resource_and_url(self):
        backend = MemoryMediaBackend()
        resource = backend.play(b"audio")

        resource.release()

        assert resource.released
        assert backend.active_resources == []
        assert backend.live_urls == []

    async def test_capture_returns_recorded_chunks(self):
        backend = MemoryMediaBackend(recorded_chunks=[b"ab", b"", b"cd"])

        session = await backend.capture()
        blob = await session.stop()

        assert blob == b"abcd"
        assert backend.open_streams == []

    async def test_capture_error(self):
        backend = MemoryMediaBackend(capture_error=PlaybackError("Microphone access denied"))

        with pytest.raises(PlaybackError):
            await backend.capture()


class TestPlaybackEventBus:

    async def test_subscribers_receive_only_their_event_type(self):
        bus = PlaybackEventBus()
        seen = []

        async def on_state(event):
            seen.append(event.state)

        bus.subscribe(STATE_CHANGED, on_state)
        await bus.publish(PlaybackEvent(STATE_CHANGED, state="loading"))
        await bus.publish(PlaybackEvent(NOTICE, message="ignored"))

        assert seen == ["loading"]

    async def test_failing_subscriber_does_not_block_others(self):
        bus = PlaybackEventBus()
        seen = []

        async def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(NOTICE, broken)
        bus.subscribe(NOTICE, lambda event: seen.append(event.message))
        await bus.publish(PlaybackEvent(NOTICE, message="hello"))

        assert seen == ["hello"]

    def test_unsubscribe(self):
        bus = PlaybackEventBus()

        def callback(event):
            pass

        bus.subscribe(NOTICE, callback)
        assert bus.get_subscriber_count(NOTICE) == 1

        assert bus.unsubscribe(NOTICE, callback) is True
        assert bus.unsubscribe(NOTICE, callback) is False
        assert bus.get_subscriber_count(NOTICE) == 0
