"""
Media capability used by playback and voice capture.

The player and the recorder only talk to these interfaces; whether audio goes
to a sound card or into memory is a backend detail.
"""

from abc import ABC, abstractmethod


class AudioResource(ABC):
    """One playable resource with a backing URL.

    Lifecycle: created loading, ``wait_ready`` resolves once the whole clip can
    play, ``start`` begins playback, ``wait_finished`` resolves on completion
    or release. ``release`` is idempotent.
    """

    url: str

    @abstractmethod
    async def wait_ready(self) -> None:
        """Resolve when playable; raise PlaybackError if loading fails."""

    @abstractmethod
    async def start(self) -> None:
        """Begin playback; raise PlaybackError if the device refuses."""

    @abstractmethod
    async def wait_finished(self) -> None:
        """Resolve when playback ends or the resource is released."""

    @abstractmethod
    def release(self) -> None:
        """Pause, clear the source and revoke the backing URL."""

    @property
    @abstractmethod
    def released(self) -> bool:
        pass


class CaptureSession(ABC):
    """An open microphone stream accumulating chunks."""

    @abstractmethod
    async def stop(self) -> bytes:
        """Stop recording, release the stream's tracks, return the recording."""

    @abstractmethod
    def cancel(self) -> None:
        """Release the stream's tracks and drop what was recorded."""


class BaseMediaBackend(ABC):
    """Capability interface: ``capture()``, ``play(bytes)``, ``stop()``."""

    # container requested from text-to-speech for playback
    preferred_format: str = "mp3"
    # container produced by capture
    capture_mime_type: str = "audio/webm"

    @abstractmethod
    async def capture(self) -> CaptureSession:
        """Acquire the microphone and start recording."""

    @abstractmethod
    def play(self, audio: bytes) -> AudioResource:
        """Create a resource for ``audio`` and start loading it."""

    @abstractmethod
    def stop(self) -> None:
        """Release every live resource and open stream."""

    @abstractmethod
    def create_object_url(self, data: bytes, mime_type: str) -> str:
        """Expose ``data`` under a URL that must later be revoked."""

    @abstractmethod
    def revoke_object_url(self, url: str) -> None:
        """Release a URL from ``create_object_url``. Unknown URLs are ignored."""
