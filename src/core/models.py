"""
Pydantic v2 models shared by the analysis client and the front-ends.

``AnalysisResult`` is the response contract: the analysis client builds it
only after every field has passed shape validation, and the presentation
layer reads it without further checks.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Sentiment(StrEnum):
    """Nominal sentiment labels the model is asked to choose from."""

    positive = "Positive"
    negative = "Negative"
    neutral = "Neutral"
    mixed = "Mixed"
    unknown = "Unknown"


class ModerationAction(StrEnum):
    """Nominal moderation dispositions the model is asked to choose from."""

    allow = "Allow"
    block = "Block"
    request_rephrasing = "Request Rephrasing"
    unknown = "Unknown"


# ---------------------------------------------------------------------------
# Analysis result
# ---------------------------------------------------------------------------


class Moderation(BaseModel):
    """Suggested disposition for a piece of feedback."""

    model_config = ConfigDict(frozen=True)

    # Kept as plain strings: values outside the enumeration are tolerated.
    action: str
    reason: str

    @property
    def kind(self) -> ModerationAction:
        """The action as a ``ModerationAction``, ``unknown`` when off-list."""
        try:
            return ModerationAction(self.action)
        except ValueError:
            return ModerationAction.unknown


class AnalysisResult(BaseModel):
    """Structured analysis of one piece of employee feedback."""

    model_config = ConfigDict(frozen=True)

    sentiment: str
    intensity: float
    summary: str
    moderation: Moderation
    actionable_insight: str

    @property
    def sentiment_kind(self) -> Sentiment:
        """The sentiment as a ``Sentiment``, ``unknown`` when off-list."""
        try:
            return Sentiment(self.sentiment)
        except ValueError:
            return Sentiment.unknown


# ---------------------------------------------------------------------------
# Audio
# ---------------------------------------------------------------------------


class AudioPayload(BaseModel):
    """One completed recording, ready for transcription."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False)
    mime_type: str = "audio/wav"

    @property
    def size(self) -> int:
        return len(self.data)
