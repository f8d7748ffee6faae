"""
Audio module - Audio capture and processing utilities.
"""

from .processor import AudioProcessor
from .recorder import AudioRecorder, CaptureState
from .sources import AudioStream, BaseAudioSource, ClipSource

__all__ = [
    "AudioProcessor",
    "AudioRecorder",
    "AudioStream",
    "BaseAudioSource",
    "CaptureState",
    "ClipSource",
]
