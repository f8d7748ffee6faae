"""Microphone capture through sounddevice (PortAudio).

PortAudio delivers 16-bit PCM blocks on its own thread; they are handed to
the event loop with ``call_soon_threadsafe`` so the recorder can await them.
"""

import asyncio
import logging

from src.core.config import get_settings
from src.core.exceptions import DeviceError, DeviceErrorCause
from src.services.audio.processor import AudioProcessor
from src.services.audio.sources import AudioStream, BaseAudioSource

logger = logging.getLogger(__name__)

_PERMISSION_HINTS = ("permission", "denied", "not authorized")


class MicrophoneStream(AudioStream):
    """An open PortAudio input stream."""

    mime_type = "audio/wav"

    def __init__(
        self,
        stream,
        queue: asyncio.Queue,
        loop: asyncio.AbstractEventLoop,
        processor: AudioProcessor,
    ) -> None:
        self._stream = stream
        self._queue = queue
        self._loop = loop
        self._processor = processor
        self._active = True
        self._closed = False

    async def read(self) -> bytes | None:
        return await self._queue.get()

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        self._stream.stop()
        # Queued after any chunk the callback already scheduled.
        self._loop.call_soon(self._queue.put_nowait, None)

    async def stop_capture(self) -> None:
        if not self._active:
            return
        self._active = False
        # Pa_StopStream blocks until the in-flight buffer has been delivered.
        await asyncio.to_thread(self._stream.stop)
        # Chunks scheduled by the callback before the stop ran are already queued.
        self._queue.put_nowait(None)

    def close(self) -> None:
        if self._closed:
            return
        self.stop()
        self._stream.close()
        self._closed = True
        logger.debug("Microphone released")

    def finalize(self, chunks: list[bytes]) -> bytes:
        return self._processor.pcm_to_wav_bytes(b"".join(chunks))


def _is_permission_error(exc: Exception) -> bool:
    if isinstance(exc, PermissionError):
        return True
    message = str(exc).lower()
    return any(hint in message for hint in _PERMISSION_HINTS)


class MicrophoneSource(BaseAudioSource):
    """The default (or a named) system input device.

    Args:
        device: sounddevice device id or name; None for the system default.
        sample_rate: Capture rate in Hz (defaults to settings).
        channels: Channel count (defaults to settings).
    """

    def __init__(
        self,
        device: int | str | None = None,
        sample_rate: int | None = None,
        channels: int | None = None,
    ) -> None:
        settings = get_settings()
        self._device = device
        self._sample_rate = sample_rate or settings.sample_rate
        self._channels = channels or settings.channels

    async def open(self) -> MicrophoneStream:
        try:
            # Importing fails with OSError when the PortAudio library is absent.
            import sounddevice as sd
        except (ImportError, OSError) as exc:
            logger.warning("PortAudio is not available: %s", exc)
            raise DeviceError(DeviceErrorCause.unsupported) from exc

        try:
            sd.query_devices(self._device, kind="input")
        except (ValueError, sd.PortAudioError) as exc:
            logger.warning("No usable input device: %s", exc)
            raise DeviceError(DeviceErrorCause.device_unavailable) from exc

        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[bytes | None] = asyncio.Queue()

        def _callback(indata, _frames, _time, status) -> None:
            if status:
                logger.debug("Input status: %s", status)
            loop.call_soon_threadsafe(queue.put_nowait, bytes(indata))

        stream = None
        try:
            stream = sd.RawInputStream(
                samplerate=self._sample_rate,
                channels=self._channels,
                dtype="int16",
                device=self._device,
                callback=_callback,
            )
            stream.start()
        except (PermissionError, sd.PortAudioError) as exc:
            if stream is not None:
                stream.close()
            cause = (
                DeviceErrorCause.permission_denied
                if _is_permission_error(exc)
                else DeviceErrorCause.device_unavailable
            )
            logger.warning("Could not open microphone (%s): %s", cause, exc)
            raise DeviceError(cause) from exc

        logger.info(
            "Microphone opened (%d Hz, %d channel(s))", self._sample_rate, self._channels
        )
        processor = AudioProcessor(
            sample_rate=self._sample_rate, sample_width=2, channels=self._channels
        )
        return MicrophoneStream(stream, queue, loop, processor)
