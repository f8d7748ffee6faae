"""Gemini STT implementation using a multimodal ``generate_content`` call.

The recording travels as an inline data part next to a fixed instruction.
The reply is unstructured prose, so it is only trimmed, never parsed.
"""

import logging

from google.genai import types as genai_types

from src.core.config import get_settings
from src.core.exceptions import TranscriptionError
from src.core.models import AudioPayload
from src.services.llm.gemini import GeminiClientMixin
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)

TRANSCRIPTION_INSTRUCTION = (
    "Transcribe the following audio recording accurately. "
    "Return only the transcribed text, with no additional commentary or formatting."
)

DEFAULT_AUDIO_MIME_TYPE = "audio/webm"


class GeminiSTT(GeminiClientMixin, BaseSTT):
    """Speech-to-text through the Gemini multimodal API.

    Args:
        api_key: Gemini API key (defaults to settings).
        model: Multimodal model name (defaults to settings).
    """

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.gemini_api_key
        self._model = model or settings.gemini_model
        self._client = None

    async def transcribe(self, payload: AudioPayload) -> str:
        """Send the recording with the transcription instruction.

        ``Part.from_bytes`` keeps raw bytes; the SDK base64-encodes inline
        data when it serialises the request.
        """
        # Fail before building the request when no key is configured.
        self._get_client()

        audio_part = genai_types.Part.from_bytes(
            data=payload.data,
            mime_type=payload.mime_type or DEFAULT_AUDIO_MIME_TYPE,
        )
        logger.debug("Transcribing %d bytes of %s", payload.size, payload.mime_type)

        try:
            text = await self._call_api([audio_part, TRANSCRIPTION_INSTRUCTION])
        except PermissionError as exc:
            raise TranscriptionError(
                detail="Invalid API key for transcription. "
                "Please check your GEMINI_API_KEY environment variable.",
                invalid_credential=True,
            ) from exc
        except Exception as exc:
            logger.error("Gemini transcription failed: %s", exc)
            raise TranscriptionError(
                detail="Failed to transcribe audio using Gemini API."
            ) from exc

        return text.strip()
