"""Unit tests for the display mapping helpers of the analysis card."""

import pytest

from src.core.models import AnalysisResult, Moderation
from src.ui.components.analysis_display import (
    intensity_band,
    intensity_percent,
    moderation_color,
    sentiment_color,
)


def _result(sentiment: str = "Positive", action: str = "Allow") -> AnalysisResult:
    return AnalysisResult(
        sentiment=sentiment,
        intensity=0.5,
        summary="s",
        moderation=Moderation(action=action, reason="r"),
        actionable_insight="a",
    )


class TestColors:
    @pytest.mark.parametrize(
        ("sentiment", "color"),
        [("Positive", "green"), ("Negative", "red"), ("Neutral", "blue"), ("Mixed", "orange")],
    )
    def test_sentiment_colors(self, sentiment, color):
        assert sentiment_color(_result(sentiment=sentiment)) == color

    def test_unknown_sentiment_is_gray(self):
        assert sentiment_color(_result(sentiment="Confused")) == "gray"

    @pytest.mark.parametrize(
        ("action", "color"),
        [("Allow", "green"), ("Block", "red"), ("Request Rephrasing", "orange")],
    )
    def test_moderation_colors(self, action, color):
        assert moderation_color(_result(action=action)) == color

    def test_unknown_action_is_gray(self):
        assert moderation_color(_result(action="Escalate")) == "gray"


class TestIntensity:
    @pytest.mark.parametrize(
        ("intensity", "percent"),
        [(0.0, 0), (0.8, 80), (0.333, 33), (1.0, 100), (1.7, 100), (-0.2, 0)],
    )
    def test_percent_clamped(self, intensity, percent):
        assert intensity_percent(intensity) == percent

    @pytest.mark.parametrize(
        ("percent", "band"),
        [(10, "green"), (25, "green"), (26, "blue"), (51, "orange"), (76, "red")],
    )
    def test_bands(self, percent, band):
        assert intensity_band(percent) == band
