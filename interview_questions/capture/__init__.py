from .voice_recorder import RecorderState, VoiceAnswer, VoiceAnswerRecorder

__all__ = ["RecorderState", "VoiceAnswer", "VoiceAnswerRecorder"]
