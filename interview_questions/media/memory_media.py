"""
In-memory media backend.

Nothing is played or recorded; every resource and URL is tracked so callers
can check that cleanup happened. The test drives readiness and completion.
"""

import asyncio
import itertools
from typing import Dict, List, Optional

from interview_questions.media.base_media import AudioResource, BaseMediaBackend, CaptureSession
from interview_questions.playback.errors import PlaybackError


class MemoryAudioResource(AudioResource):
    def __init__(self, backend: "MemoryMediaBackend", audio: bytes, url: str):
        self.backend = backend
        self.audio = audio
        self.url = url
        self.playing = False
        self._ready = asyncio.Event()
        self._finished = asyncio.Event()
        self._load_error: Optional[Exception] = None
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def mark_ready(self) -> None:
        self._ready.set()

    def fail_load(self, error: Exception) -> None:
        self._load_error = error
        self._ready.set()

    def finish(self) -> None:
        self.playing = False
        self._finished.set()

    async def wait_ready(self) -> None:
        await self._ready.wait()
        if self._load_error is not None:
            raise self._load_error

    async def start(self) -> None:
        if self.backend.play_error is not None:
            raise self.backend.play_error
        if self._released:
            raise PlaybackError("Resource was released")
        self.playing = True
        self.backend.started.append(self)
        if self.backend.auto_finish:
            asyncio.get_running_loop().call_soon(self.finish)

    async def wait_finished(self) -> None:
        await self._finished.wait()

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self.playing = False
        self.backend.revoke_object_url(self.url)
        self.backend._resources.remove(self)
        # wake anyone waiting on this resource
        self._ready.set()
        self._finished.set()


class MemoryCaptureSession(CaptureSession):
    def __init__(self, backend: "MemoryMediaBackend"):
        self.backend = backend
        self.tracks_live = True

    async def stop(self) -> bytes:
        if self.backend.stop_error is not None:
            raise self.backend.stop_error
        self._release_tracks()
        return b"".join(chunk for chunk in self.backend.recorded_chunks if chunk)

    def cancel(self) -> None:
        self._release_tracks()

    def _release_tracks(self) -> None:
        if self.tracks_live:
            self.tracks_live = False
            self.backend._streams.remove(self)


class MemoryMediaBackend(BaseMediaBackend):
    preferred_format = "mp3"
    capture_mime_type = "audio/webm"

    def __init__(
        self,
        auto_ready: bool = True,
        auto_finish: bool = False,
        load_error: Optional[Exception] = None,
        play_error: Optional[Exception] = None,
        recorded_chunks: Optional[List[bytes]] = None,
        capture_error: Optional[Exception] = None,
        stop_error: Optional[Exception] = None,
    ):
        self.auto_ready = auto_ready
        self.auto_finish = auto_finish
        self.load_error = load_error
        self.play_error = play_error
        self.capture_error = capture_error
        self.stop_error = stop_error
        self.recorded_chunks: List[bytes] = list(recorded_chunks or [])
        self.created: List[MemoryAudioResource] = []
        self.started: List[MemoryAudioResource] = []
        self._resources: List[MemoryAudioResource] = []
        self._streams: List[MemoryCaptureSession] = []
        self._urls: Dict[str, bytes] = {}
        self._url_ids = itertools.count(1)

    @property
    def active_resources(self) -> List[MemoryAudioResource]:
        return list(self._resources)

    @property
    def open_streams(self) -> List[MemoryCaptureSession]:
        return list(self._streams)

    @property
    def live_urls(self) -> List[str]:
        return list(self._urls)

    @property
    def current(self) -> Optional[MemoryAudioResource]:
        return self._resources[-1] if self._resources else None

    async def capture(self) -> CaptureSession:
        if self.capture_error is not None:
            raise self.capture_error
        session = MemoryCaptureSession(self)
        self._streams.append(session)
        return session

    def play(self, audio: bytes) -> AudioResource:
        url = self.create_object_url(audio, "audio/mpeg")
        resource = MemoryAudioResource(self, audio, url)
        self.created.append(resource)
        self._resources.append(resource)
        if self.load_error is not None:
            resource.fail_load(self.load_error)
        elif self.auto_ready:
            resource.mark_ready()
        return resource

    def stop(self) -> None:
        for resource in list(self._resources):
            resource.release()
        for session in list(self._streams):
            session.cancel()

    def create_object_url(self, data: bytes, mime_type: str) -> str:
        url = f"blob:memory/{next(self._url_ids)}"
        self._urls[url] = data
        return url

    def revoke_object_url(self, url: str) -> None:
        self._urls.pop(url, None)
