"""Tests for AudioProcessor (WAV packaging and decoding).

Validates that raw microphone PCM is wrapped in a well-formed WAV container
and that encoded recordings decode to 16 kHz mono float32, including
stereo down-mixing and resampling from other rates.
"""

import io
import wave

import numpy as np
import pytest
import soundfile as sf

from src.services.audio.processor import AudioProcessor


@pytest.fixture
def processor():
    """Create an AudioProcessor configured for 16 kHz, 16-bit mono audio."""
    return AudioProcessor(sample_rate=16000, sample_width=2, channels=1)


def _encode_wav(samples: np.ndarray, sample_rate: int) -> bytes:
    buffer = io.BytesIO()
    sf.write(buffer, samples, sample_rate, format="WAV", subtype="PCM_16")
    return buffer.getvalue()


class TestPcmToWavBytes:
    """Verify PCM is wrapped in a WAV header matching the processor format."""

    def test_header_matches_format(self, processor, sample_pcm_bytes):
        wav_bytes = processor.pcm_to_wav_bytes(sample_pcm_bytes)

        with wave.open(io.BytesIO(wav_bytes), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 16000
            assert wf.getnframes() == 16000

    def test_payload_preserved(self, processor, sample_pcm_bytes):
        wav_bytes = processor.pcm_to_wav_bytes(sample_pcm_bytes)

        with wave.open(io.BytesIO(wav_bytes), "rb") as wf:
            assert wf.readframes(wf.getnframes()) == sample_pcm_bytes

    def test_rejects_empty_data(self, processor):
        with pytest.raises(ValueError, match="empty"):
            processor.pcm_to_wav_bytes(b"")


class TestDecodeToMono:
    """Verify decoding to the float32 mono arrays local STT expects."""

    def test_decodes_wav(self, processor, sample_wav_bytes):
        audio = processor.decode_to_mono(sample_wav_bytes)

        assert audio.dtype == np.float32
        assert audio.ndim == 1
        assert len(audio) == 16000
        assert audio.max() <= 1.0
        assert audio.min() >= -1.0

    def test_stereo_downmixed(self, processor):
        left = np.full(1600, 0.5, dtype=np.float32)
        right = np.zeros(1600, dtype=np.float32)
        stereo = np.stack([left, right], axis=1)

        audio = processor.decode_to_mono(_encode_wav(stereo, 16000))

        assert audio.ndim == 1
        assert np.allclose(audio, 0.25, atol=1e-3)

    def test_resampled_to_target_rate(self, processor):
        samples = np.zeros(8000, dtype=np.float32)  # 1 second at 8 kHz

        audio = processor.decode_to_mono(_encode_wav(samples, 8000))

        assert len(audio) == 16000
        assert audio.dtype == np.float32

    def test_rejects_garbage(self, processor):
        with pytest.raises(sf.LibsndfileError):
            processor.decode_to_mono(b"definitely not audio")
