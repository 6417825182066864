class PlaybackError(Exception):
    """The media layer failed to load or play a resource."""


class PlaybackAborted(PlaybackError):
    """The attempt was superseded or stopped. Never retried."""

    def __init__(self, message: str = "Playback was aborted"):
        super().__init__(message)


class PlaybackTimeout(PlaybackError):
    """The resource never became ready."""

    def __init__(self, message: str = "Audio loading timeout"):
        super().__init__(message)
