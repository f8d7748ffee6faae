"""Recording lifecycle: idle -> acquiring -> recording -> transcribing -> idle.

``AudioRecorder`` owns one capture at a time. It drains the source's stream
into a chunk list while recording, assembles a single ``AudioPayload`` on
stop, releases the device, and only then hands the payload to the STT
provider. A failed device acquisition leaves it in ``error``; a failed
transcription returns it to ``idle`` because re-recording is always possible.
"""

import asyncio
import logging
from enum import StrEnum

from src.core.exceptions import (
    DeviceError,
    RecordingAlreadyActiveError,
    RecordingNotActiveError,
    TranscriptionError,
)
from src.core.models import AudioPayload
from src.services.audio.sources import AudioStream, BaseAudioSource
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class CaptureState(StrEnum):
    """Possible states of the recorder."""

    idle = "idle"
    acquiring = "acquiring"
    recording = "recording"
    transcribing = "transcribing"
    error = "error"


class AudioRecorder:
    """Records one clip at a time and transcribes it on stop.

    Args:
        stt: Provider used to transcribe the finished recording.
    """

    def __init__(self, stt: BaseSTT) -> None:
        self._stt = stt
        self._state = CaptureState.idle
        self._stream: AudioStream | None = None
        self._pump: asyncio.Task | None = None
        self._chunks: list[bytes] = []
        # Bumped by close() so an open() finishing afterwards is discarded.
        self._generation = 0

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def is_busy(self) -> bool:
        """True from device acquisition until the transcript is returned."""
        return self._state in (
            CaptureState.acquiring,
            CaptureState.recording,
            CaptureState.transcribing,
        )

    async def start(self, source: BaseAudioSource) -> None:
        """Acquire the source and begin buffering chunks.

        Raises:
            RecordingAlreadyActiveError: If already acquiring, recording or transcribing.
            DeviceError: If the device cannot be acquired (state becomes ``error``).
        """
        if self.is_busy:
            raise RecordingAlreadyActiveError()

        # Claimed before the await so a concurrent start sees the recorder busy.
        self._state = CaptureState.acquiring
        generation = self._generation
        try:
            stream = await source.open()
        except DeviceError as exc:
            logger.warning("Recording could not start: %s", exc.detail)
            self._state = CaptureState.error
            raise
        except BaseException:
            self._state = CaptureState.idle
            raise

        if generation != self._generation:
            logger.info("Recorder closed while the device was opening; releasing it")
            stream.close()
            return

        self._stream = stream
        self._chunks = []
        self._pump = asyncio.create_task(self._collect(stream))
        self._state = CaptureState.recording
        logger.info("Recording started")

    async def _collect(self, stream: AudioStream) -> None:
        """Append chunks until the stream reports its end."""
        while True:
            chunk = await stream.read()
            if chunk is None:
                return
            if chunk:
                self._chunks.append(chunk)

    async def stop(self) -> str:
        """Finish the recording, release the device, and transcribe.

        Returns:
            The transcript text (possibly empty).

        Raises:
            RecordingNotActiveError: If no recording is in progress.
            TranscriptionError: If nothing was captured or the provider failed.
            ConfigurationError: If the STT provider has no credential.
        """
        if self._state != CaptureState.recording or self._stream is None:
            raise RecordingNotActiveError()

        stream = self._stream
        try:
            await stream.stop_capture()
            if self._pump is not None:
                await self._pump
            data = stream.finalize(self._chunks) if self._chunks else b""
        except Exception as exc:
            self._state = CaptureState.idle
            raise TranscriptionError(detail=f"Could not assemble the recording: {exc}") from exc
        finally:
            self._release()

        self._state = CaptureState.transcribing
        try:
            if not data:
                raise TranscriptionError(
                    detail="No audio was captured. Please try recording again."
                )
            payload = AudioPayload(data=data, mime_type=stream.mime_type)
            logger.info("Recording stopped (%d bytes); transcribing", payload.size)
            return await self._stt.transcribe(payload)
        finally:
            self._state = CaptureState.idle

    async def close(self) -> None:
        """Tear down: release the device if a recording is still open."""
        if self._pump is not None and not self._pump.done():
            if self._stream is not None:
                await self._stream.stop_capture()
            self._pump.cancel()
            try:
                await self._pump
            except asyncio.CancelledError:
                pass
        self._generation += 1
        if self._state == CaptureState.acquiring:
            self._state = CaptureState.idle
        elif self._state == CaptureState.recording:
            logger.info("Recording discarded on teardown")
            self._state = CaptureState.idle
        self._release()

    def _release(self) -> None:
        if self._stream is not None:
            self._stream.close()
        self._stream = None
        self._pump = None
        self._chunks = []
