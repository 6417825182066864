"""
PyAudio media backend for running the client on a machine with a sound card.

Plays and records uncompressed WAV, so text-to-speech is asked for ``wav``.
Object URLs are temporary files exposed as ``file://`` URLs.
"""

import asyncio
import io
import os
import tempfile
import threading
import wave
from pathlib import Path
from typing import List, Optional

import structlog

from interview_questions.media.base_media import AudioResource, BaseMediaBackend, CaptureSession
from interview_questions.playback.errors import PlaybackError

logger = structlog.get_logger()

FRAMES_PER_BUFFER = 1024


def _open_pyaudio():
    # PyAudio is imported lazily so the server never needs PortAudio
    try:
        import pyaudio
    except ImportError as exc:
        raise PlaybackError(
            "PyAudio is not installed. Install the 'audio' extra to use the sound card."
        ) from exc
    return pyaudio, pyaudio.PyAudio()


class PyAudioResource(AudioResource):
    def __init__(self, backend: "PyAudioMediaBackend", audio: bytes, url: str):
        self.backend = backend
        self.url = url
        self._audio = audio
        self._wav: Optional[wave.Wave_read] = None
        self._stop = threading.Event()
        self._task: Optional[asyncio.Task] = None
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    async def wait_ready(self) -> None:
        if self._released:
            return
        try:
            self._wav = wave.open(io.BytesIO(self._audio), "rb")
        except (wave.Error, EOFError) as exc:
            raise PlaybackError(f"Audio could not be decoded: {exc}") from exc

    async def start(self) -> None:
        if self._released or self._wav is None:
            raise PlaybackError("Audio is not loaded")
        self._task = asyncio.create_task(asyncio.to_thread(self._play_blocking))

    def _play_blocking(self) -> None:
        _, pa = _open_pyaudio()
        wav = self._wav
        stream = None
        try:
            stream = pa.open(
                format=pa.get_format_from_width(wav.getsampwidth()),
                channels=wav.getnchannels(),
                rate=wav.getframerate(),
                output=True,
            )
            data = wav.readframes(FRAMES_PER_BUFFER)
            while data and not self._stop.is_set():
                stream.write(data)
                data = wav.readframes(FRAMES_PER_BUFFER)
        finally:
            if stream is not None:
                stream.stop_stream()
                stream.close()
            pa.terminate()

    async def wait_finished(self) -> None:
        if self._task is None:
            return
        try:
            await self._task
        except OSError as exc:
            raise PlaybackError(f"Playback failed: {exc}") from exc

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._stop.set()
        if self._wav is not None:
            self._wav.close()
            self._wav = None
        self.backend.revoke_object_url(self.url)
        self.backend._resources.discard(self)


class PyAudioCaptureSession(CaptureSession):
    def __init__(self, backend: "PyAudioMediaBackend", sample_rate: int, channels: int):
        self.backend = backend
        self.sample_rate = sample_rate
        self.channels = channels
        self._chunks: List[bytes] = []
        self._stop = threading.Event()
        self._cancelled = False
        self._sample_width = 2
        self._pa = None
        self._stream = None
        self._task: Optional[asyncio.Task] = None

    async def open(self) -> None:
        """Open the input device, then start reading in a worker thread."""
        await asyncio.to_thread(self._open_blocking)
        self._task = asyncio.create_task(asyncio.to_thread(self._record_blocking))

    def _open_blocking(self) -> None:
        pyaudio, pa = _open_pyaudio()
        try:
            self._sample_width = pa.get_sample_size(pyaudio.paInt16)
            self._stream = pa.open(
                format=pyaudio.paInt16,
                channels=self.channels,
                rate=self.sample_rate,
                input=True,
                frames_per_buffer=FRAMES_PER_BUFFER,
            )
        except Exception as exc:
            pa.terminate()
            raise PlaybackError(f"Microphone could not be opened: {exc}") from exc
        self._pa = pa

    def _record_blocking(self) -> None:
        try:
            while not self._stop.is_set():
                chunk = self._stream.read(FRAMES_PER_BUFFER, exception_on_overflow=False)
                if chunk:
                    self._chunks.append(chunk)
        finally:
            self._close_device()

    def _close_device(self) -> None:
        stream, self._stream = self._stream, None
        pa, self._pa = self._pa, None
        if stream is not None:
            stream.stop_stream()
            stream.close()
        if pa is not None:
            pa.terminate()

    async def stop(self) -> bytes:
        self._stop.set()
        try:
            if self._task is not None:
                await self._task
        except OSError as exc:
            raise PlaybackError(f"Recording failed: {exc}") from exc
        finally:
            self.backend._streams.discard(self)
        if self._cancelled or not self._chunks:
            return b""
        buffer = io.BytesIO()
        with wave.open(buffer, "wb") as wav:
            wav.setnchannels(self.channels)
            wav.setsampwidth(self._sample_width)
            wav.setframerate(self.sample_rate)
            wav.writeframes(b"".join(self._chunks))
        return buffer.getvalue()

    def cancel(self) -> None:
        self._stop.set()
        self._cancelled = True
        self._chunks.clear()
        if self._task is None:
            self._close_device()
        self.backend._streams.discard(self)


class PyAudioMediaBackend(BaseMediaBackend):
    preferred_format = "wav"
    capture_mime_type = "audio/wav"

    def __init__(self, sample_rate: int = 16000, channels: int = 1):
        self.sample_rate = sample_rate
        self.channels = channels
        self._resources = set()
        self._streams = set()
        self._files = {}

    @property
    def open_streams(self) -> List[PyAudioCaptureSession]:
        return list(self._streams)

    async def capture(self) -> CaptureSession:
        session = PyAudioCaptureSession(self, self.sample_rate, self.channels)
        await session.open()
        self._streams.add(session)
        logger.info("Microphone capture started", sample_rate=self.sample_rate, channels=self.channels)
        return session

    def play(self, audio: bytes) -> AudioResource:
        url = self.create_object_url(audio, "audio/wav")
        resource = PyAudioResource(self, audio, url)
        self._resources.add(resource)
        return resource

    def stop(self) -> None:
        for resource in list(self._resources):
            resource.release()
        for session in list(self._streams):
            session.cancel()

    def create_object_url(self, data: bytes, mime_type: str) -> str:
        suffix = ".wav" if "wav" in mime_type else ".bin"
        fd, path = tempfile.mkstemp(prefix="interview-audio-", suffix=suffix)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        url = Path(path).as_uri()
        self._files[url] = path
        return url

    def revoke_object_url(self, url: str) -> None:
        path = self._files.pop(url, None)
        if path is None:
            return
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
