"""Audio processing utilities for PCM data.

Wraps raw microphone PCM in a WAV container and decodes recorded audio
back into the 16 kHz mono float32 arrays local STT models expect.
"""

import io
import wave

import numpy as np
import soundfile as sf


class AudioProcessor:
    """Handles PCM audio data conversion.

    Provides utilities for packaging PCM as WAV bytes and decoding
    arbitrary WAV/FLAC/OGG bytes to mono float32 at a target sample rate.
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        sample_width: int = 2,
        channels: int = 1,
    ) -> None:
        """Initialize the audio processor.

        Args:
            sample_rate: Audio sample rate in Hz (default: 16 kHz).
            sample_width: Bytes per sample (2 = 16-bit signed PCM).
            channels: Number of audio channels (1 = mono).
        """
        self.sample_rate = sample_rate
        self.sample_width = sample_width
        self.channels = channels

    def pcm_to_wav_bytes(self, pcm_data: bytes) -> bytes:
        """Wrap raw PCM bytes in an in-memory WAV container.

        Args:
            pcm_data: Raw PCM bytes matching this processor's format.

        Returns:
            Complete WAV file bytes.

        Raises:
            ValueError: If pcm_data is empty.
        """
        if not pcm_data:
            raise ValueError("Cannot encode empty PCM data to WAV")
        buffer = io.BytesIO()
        with wave.open(buffer, "wb") as wf:
            wf.setnchannels(self.channels)
            wf.setsampwidth(self.sample_width)
            wf.setframerate(self.sample_rate)
            wf.writeframes(pcm_data)
        return buffer.getvalue()

    def decode_to_mono(self, audio_bytes: bytes) -> np.ndarray:
        """Decode encoded audio bytes to float32 mono at ``sample_rate``.

        Resampling is linear interpolation, which is adequate for speech.
        """
        data, source_rate = sf.read(io.BytesIO(audio_bytes), dtype="float32")

        # Convert to mono if stereo
        if data.ndim > 1:
            data = data.mean(axis=1)

        if source_rate != self.sample_rate and len(data) > 0:
            duration = len(data) / source_rate
            num_samples = int(duration * self.sample_rate)
            indices = np.linspace(0, len(data) - 1, num_samples)
            data = np.interp(indices, np.arange(len(data)), data)

        return data.astype(np.float32)
