"""Shared pytest fixtures for the Feedback Analyzer test suite.

Provides mock LLM/STT providers, canned model replies, and generated audio
so no test touches the network or a real microphone.
"""

import io
import json
import math
import struct
import wave
from unittest.mock import AsyncMock

import pytest

# ---------------------------------------------------------------------------
# Model replies
# ---------------------------------------------------------------------------

SCENARIO_A_REPLY = {
    "sentiment": "Negative",
    "intensity": 0.8,
    "summary": "Employee finds new policy confusing and stressful.",
    "moderation": {
        "action": "Allow",
        "reason": "Constructive criticism, not offensive.",
    },
    "actionable_insight": "Schedule a clarifying session on the new policy.",
}


@pytest.fixture
def valid_reply() -> dict:
    """A reply dict that satisfies the analysis contract."""
    return json.loads(json.dumps(SCENARIO_A_REPLY))


@pytest.fixture
def valid_reply_json(valid_reply) -> str:
    return json.dumps(valid_reply)


# ---------------------------------------------------------------------------
# LLM Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm(valid_reply_json):
    """Create a mock LLM provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseLLM interface whose
        ``generate`` returns a contract-valid analysis reply.
    """
    from src.services.llm.base import BaseLLM

    llm = AsyncMock(spec=BaseLLM)
    llm.generate.return_value = valid_reply_json
    return llm


# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface with a
        default transcript.
    """
    from src.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = "The new policy is confusing and stressful"
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_pcm_bytes():
    """Generate 1 second of 440Hz sine-wave PCM audio (16kHz, 16-bit, mono).

    Returns:
        bytes: Raw PCM audio data.
    """
    sample_rate = 16000
    duration = 1.0
    frequency = 440.0
    amplitude = 16000  # ~50% of max int16

    samples = []
    for i in range(int(sample_rate * duration)):
        value = int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate))
        samples.append(struct.pack("<h", value))
    return b"".join(samples)


@pytest.fixture
def sample_wav_bytes(sample_pcm_bytes):
    """Wrap the sample PCM in an in-memory WAV container.

    Returns:
        bytes: Complete WAV file contents.
    """
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(16000)
        wf.writeframes(sample_pcm_bytes)
    return buffer.getvalue()
