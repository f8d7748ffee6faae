"""
Analysis display component.

Maps a validated ``AnalysisResult`` to visual indicators: a coloured
sentiment badge, an intensity bar, and a moderation panel styled per action.
Values outside the nominal enumerations render in neutral grey.
"""

import streamlit as st

from src.core.models import AnalysisResult, ModerationAction, Sentiment

# Streamlit markdown colour names
SENTIMENT_COLORS = {
    Sentiment.positive: "green",
    Sentiment.negative: "red",
    Sentiment.neutral: "blue",
    Sentiment.mixed: "orange",
}

MODERATION_COLORS = {
    ModerationAction.allow: "green",
    ModerationAction.block: "red",
    ModerationAction.request_rephrasing: "orange",
}

MODERATION_ICONS = {
    ModerationAction.allow: "✅",
    ModerationAction.block: "⛔",
    ModerationAction.request_rephrasing: "✏️",
}


def sentiment_color(result: AnalysisResult) -> str:
    return SENTIMENT_COLORS.get(result.sentiment_kind, "gray")


def moderation_color(result: AnalysisResult) -> str:
    return MODERATION_COLORS.get(result.moderation.kind, "gray")


def intensity_percent(intensity: float) -> int:
    """Intensity as a whole percentage, clamped for display."""
    return max(0, min(100, round(intensity * 100)))


def intensity_band(percent: int) -> str:
    """Colour band for the intensity bar."""
    if percent > 75:
        return "red"
    if percent > 50:
        return "orange"
    if percent > 25:
        return "blue"
    return "green"


def render_analysis(result: AnalysisResult) -> None:
    """Render the full analysis card."""
    with st.container(border=True):
        st.subheader("Feedback Analysis")

        col1, col2 = st.columns(2)
        with col1:
            st.caption("Overall Sentiment")
            st.markdown(f"**:{sentiment_color(result)}[{result.sentiment}]**")
        with col2:
            percent = intensity_percent(result.intensity)
            st.caption(f"Sentiment Intensity (:{intensity_band(percent)}[{percent}%])")
            st.progress(percent / 100)

        st.caption("Summary")
        st.info(result.summary)

        st.caption("Moderation Suggestion")
        kind = result.moderation.kind
        icon = MODERATION_ICONS.get(kind, "")
        with st.container(border=True):
            st.markdown(
                f"Moderation Action: {icon} **:{moderation_color(result)}[{result.moderation.action}]**"
            )
            st.caption(f"Reason: {result.moderation.reason}")

        st.caption("Actionable Insight for HR")
        st.success(result.actionable_insight)
