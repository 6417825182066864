"""
Media package: playback and capture behind one capability interface.
"""

from .base_media import AudioResource, BaseMediaBackend, CaptureSession
from .memory_media import MemoryMediaBackend
from .media_service import MediaService

__all__ = [
    "AudioResource",
    "BaseMediaBackend",
    "CaptureSession",
    "MemoryMediaBackend",
    "MediaService",
]
