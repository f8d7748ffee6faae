"""Whisper STT implementation using faster-whisper.

Runs fully offline, so it needs no credential. The WhisperModel is loaded
lazily and cached at module level to avoid repeated initialization overhead.
"""

import asyncio
import logging

import numpy as np
from faster_whisper import WhisperModel

from src.core.config import get_settings
from src.core.exceptions import TranscriptionError
from src.core.models import AudioPayload
from src.services.audio.processor import AudioProcessor
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)

_model_cache: WhisperModel | None = None


class WhisperSTT(BaseSTT):
    """Speech-to-text provider using faster-whisper (CTranslate2).

    Args:
        model_size: Whisper model size (tiny, base, small, medium, large-v3).
        device: Computation device ("cpu" or "cuda").
        compute_type: CTranslate2 compute type ("int8", "float16", etc.).
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        model_size: str | None = None,
        device: str = "cpu",
        compute_type: str = "int8",
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._model_size = model_size or self._settings.whisper_model
        self._language = self._settings.whisper_default_language or None
        self._device = device
        self._compute_type = compute_type
        self._processor = AudioProcessor()

    def _get_model(self) -> WhisperModel:
        """Return the cached WhisperModel, loading it on first use."""
        global _model_cache  # noqa: PLW0603
        if _model_cache is None:
            logger.info(
                "Loading Whisper model: %s (device=%s, compute=%s)",
                self._model_size,
                self._device,
                self._compute_type,
            )
            _model_cache = WhisperModel(
                self._model_size,
                device=self._device,
                compute_type=self._compute_type,
            )
        return _model_cache

    def _run_transcription(self, audio: np.ndarray) -> str:
        """Run synchronous transcription (CPU-bound).

        Must be called via asyncio.to_thread(). The segment iterator is
        materialized inside this function to avoid CTranslate2
        thread-safety issues.
        """
        model = self._get_model()
        segments_iter, _info = model.transcribe(
            audio,
            language=self._language,
            beam_size=5,
            vad_filter=True,
        )
        segments = list(segments_iter)
        return " ".join(seg.text.strip() for seg in segments if seg.text.strip())

    async def transcribe(self, payload: AudioPayload) -> str:
        """Decode the payload and transcribe it in a worker thread."""
        try:
            audio = self._processor.decode_to_mono(payload.data)
        except Exception as exc:
            raise TranscriptionError(
                detail=f"Could not decode {payload.mime_type} audio: {exc}"
            ) from exc

        try:
            text = await asyncio.to_thread(self._run_transcription, audio)
        except Exception as exc:
            raise TranscriptionError(detail=f"Whisper transcription failed: {exc}") from exc

        return text.strip()
