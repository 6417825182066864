"""
Base64 helpers for audio payloads crossing the proxy functions.
"""

import base64
import binascii
from typing import Iterator

from interview_questions.core.errors import DataError

DEFAULT_CHUNK_SIZE = 3072


def _iter_chunks(data: bytes, chunk_size: int) -> Iterator[bytes]:
    view = memoryview(data)
    for start in range(0, len(view), chunk_size):
        yield view[start:start + chunk_size].tobytes()


def encode_base64_chunked(data: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Base64-encode ``data`` a bounded chunk at a time.

    The chunk size is rounded down to a multiple of 3 so that every chunk but
    the last encodes without padding and the pieces concatenate into exactly
    ``base64.b64encode(data)``.
    """
    chunk_size = max(3, chunk_size - chunk_size % 3)
    return "".join(
        base64.b64encode(chunk).decode("ascii") for chunk in _iter_chunks(data, chunk_size)
    )


def decode_base64_audio(payload: str) -> bytes:
    """Decode a base64 audio payload, rejecting empty or malformed input."""
    if not payload:
        raise DataError("Audio payload is empty", code="empty_audio", status_code=400)
    # tolerate data URLs as produced by FileReader.readAsDataURL
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        audio = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DataError("Audio payload is not valid base64", code="invalid_audio", status_code=400) from exc
    if not audio:
        raise DataError("Audio payload is empty", code="empty_audio", status_code=400)
    return audio


def decoded_size(payload: str) -> int:
    """Number of bytes a padded base64 string decodes to."""
    if not payload:
        return 0
    padding = len(payload) - len(payload.rstrip("="))
    return (len(payload) // 4) * 3 - padding
