"""
Abstract base class for Speech-to-Text providers.

All STT implementations (Gemini multimodal, local Whisper) must implement
this interface, so the recorder never depends on a specific backend.
"""

from abc import ABC, abstractmethod

from src.core.models import AudioPayload


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, payload: AudioPayload) -> str:
        """Transcribe one completed recording to plain text.

        Args:
            payload: The recorded audio bytes and their MIME type.

        Returns:
            The trimmed transcript. Empty when nothing was recognised.

        Raises:
            ConfigurationError: If the provider needs a credential and has none.
            TranscriptionError: If the backend fails.
        """
