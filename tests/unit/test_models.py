"""Unit tests for the shared data model."""

import pytest
from pydantic import ValidationError

from src.core.models import (
    AnalysisResult,
    AudioPayload,
    Moderation,
    ModerationAction,
    Sentiment,
)


def _result(**overrides) -> AnalysisResult:
    data = {
        "sentiment": "Positive",
        "intensity": 0.4,
        "summary": "Likes the team.",
        "moderation": Moderation(action="Allow", reason="Positive feedback."),
        "actionable_insight": "Share with the team lead.",
    }
    data.update(overrides)
    return AnalysisResult(**data)


class TestEnumTolerance:
    """Off-list values stay as strings and map to ``unknown``."""

    def test_known_sentiment(self):
        assert _result(sentiment="Mixed").sentiment_kind is Sentiment.mixed

    def test_unknown_sentiment_kept_verbatim(self):
        result = _result(sentiment="Ambivalent")
        assert result.sentiment == "Ambivalent"
        assert result.sentiment_kind is Sentiment.unknown

    def test_known_moderation_action(self):
        moderation = Moderation(action="Request Rephrasing", reason="Rude tone.")
        assert moderation.kind is ModerationAction.request_rephrasing

    def test_unknown_moderation_action(self):
        moderation = Moderation(action="Escalate", reason="Needs HR.")
        assert moderation.kind is ModerationAction.unknown


class TestImmutability:
    def test_result_is_frozen(self):
        result = _result()
        with pytest.raises(ValidationError):
            result.summary = "changed"

    def test_moderation_is_frozen(self):
        moderation = Moderation(action="Allow", reason="ok")
        with pytest.raises(ValidationError):
            moderation.action = "Block"


class TestAudioPayload:
    def test_size(self):
        payload = AudioPayload(data=b"\x00" * 10, mime_type="audio/webm")
        assert payload.size == 10

    def test_default_mime_type(self):
        assert AudioPayload(data=b"x").mime_type == "audio/wav"

    def test_repr_hides_bytes(self):
        assert "\\x00" not in repr(AudioPayload(data=b"\x00" * 4))
