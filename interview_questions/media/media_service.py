"""
Service for creating media backends by provider name.
"""

from interview_questions.media.base_media import BaseMediaBackend
from interview_questions.media.memory_media import MemoryMediaBackend
from interview_questions.media.pyaudio_media import PyAudioMediaBackend


class MediaService:
    """Service for creating media backend implementations."""

    def create(self, provider: str, **kwargs) -> BaseMediaBackend:
        """Create a media backend.

        Args:
            provider: "pyaudio" for the sound card, "memory" for an in-process fake
            **kwargs: Provider-specific arguments

        Returns:
            BaseMediaBackend instance
        """
        name = provider.lower()
        if name == "pyaudio":
            return PyAudioMediaBackend(
                sample_rate=kwargs.get("sample_rate", 16000),
                channels=kwargs.get("channels", 1),
            )
        if name == "memory":
            return MemoryMediaBackend(**kwargs)
        raise ValueError(f"Unsupported media provider: {provider}")
