"""
Feedback input component: browser recording, text entry, Analyze button.

The browser widget captures the microphone; the finished clip is run through
the session's recording lifecycle once (tracked by digest across reruns).
"""

import asyncio
import hashlib

import streamlit as st

from src.services.session import FeedbackSession

_TEXT_KEY = "feedback_text_input"
_CLIP_DIGEST_KEY = "last_clip_digest"


def _on_text_change(session: FeedbackSession) -> None:
    session.edit_text(st.session_state[_TEXT_KEY])


def _handle_clip(session: FeedbackSession, audio) -> None:
    """Transcribe a newly recorded clip; reruns of the same clip are skipped."""
    clip = audio.getvalue()
    digest = hashlib.sha256(clip).hexdigest()
    if digest == st.session_state.get(_CLIP_DIGEST_KEY):
        return
    st.session_state[_CLIP_DIGEST_KEY] = digest

    with st.spinner("Transcribing audio... Please wait."):
        asyncio.run(session.transcribe_clip(clip, audio.type or "audio/wav"))
    # Widget state must follow the transcript before the text area renders.
    st.session_state[_TEXT_KEY] = session.state.feedback_text


def render_feedback_input(session: FeedbackSession) -> None:
    """Render recording, manual entry, and the Analyze action."""
    state = session.state

    st.markdown("**Record Employee Feedback**")
    audio = st.audio_input(
        "Record audio",
        disabled=not state.can_start_recording,
        label_visibility="collapsed",
    )
    if audio is not None:
        _handle_clip(session, audio)

    st.markdown("<p style='text-align:center;color:gray'>OR</p>", unsafe_allow_html=True)

    st.session_state.setdefault(_TEXT_KEY, state.feedback_text)
    st.text_area(
        "Enter the feedback:",
        key=_TEXT_KEY,
        height=120,
        placeholder="Enter employee feedback here, or record audio above...",
        disabled=not state.can_edit,
        on_change=_on_text_change,
        args=(session,),
    )

    if state.from_audio and state.feedback_text:
        st.caption("Transcribed Audio:")
        st.code(state.feedback_text, language=None, wrap_lines=True)

    if st.button(
        "Analyze Feedback",
        type="primary",
        use_container_width=True,
        disabled=not state.can_analyze,
    ):
        with st.spinner("Analyzing..."):
            asyncio.run(session.analyze())
