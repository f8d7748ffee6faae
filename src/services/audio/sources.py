"""Audio sources feeding the recorder.

A source acquires a device (or wraps audio captured elsewhere) and hands the
recorder an ``AudioStream``. The recorder drains the stream chunk by chunk,
then asks it to assemble the chunks into one payload and release whatever
it holds.
"""

from abc import ABC, abstractmethod


class AudioStream(ABC):
    """An open capture producing audio chunks until stopped."""

    mime_type: str = "audio/wav"

    @abstractmethod
    async def read(self) -> bytes | None:
        """Wait for the next chunk; ``None`` once the stream has ended."""

    @abstractmethod
    def stop(self) -> None:
        """Stop producing chunks. ``read()`` returns ``None`` after the backlog."""

    async def stop_capture(self) -> None:
        """Stop producing chunks from a coroutine without blocking the event loop."""
        self.stop()

    @abstractmethod
    def close(self) -> None:
        """Release the underlying device. Safe to call more than once."""

    def finalize(self, chunks: list[bytes]) -> bytes:
        """Assemble captured chunks into the payload bytes."""
        return b"".join(chunks)


class BaseAudioSource(ABC):
    """Something that can be opened for recording."""

    @abstractmethod
    async def open(self) -> AudioStream:
        """Acquire the device and start capturing.

        Raises:
            DeviceError: If the device cannot be acquired, with the cause.
        """


class _ClipStream(AudioStream):
    def __init__(self, data: bytes, mime_type: str) -> None:
        self.mime_type = mime_type
        self._pending = [data] if data else []

    async def read(self) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        return None

    def stop(self) -> None:
        # The whole clip was captured before the stream was opened.
        return None

    def close(self) -> None:
        self._pending.clear()


class ClipSource(BaseAudioSource):
    """Audio that was already captured, e.g. by the browser or read from a file."""

    def __init__(self, data: bytes, mime_type: str = "audio/wav") -> None:
        self._data = data
        self._mime_type = mime_type

    async def open(self) -> AudioStream:
        return _ClipStream(self._data, self._mime_type)
