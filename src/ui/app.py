"""
Employee Feedback Analyzer Streamlit UI: main entry point.

Run with: ``streamlit run src/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from src.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (src/ui/),
# which removes the project root needed for absolute ``src.*`` imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from src.core.config import get_settings  # noqa: E402
from src.core.utils import configure_logging  # noqa: E402
from src.services.session import FeedbackSession  # noqa: E402
from src.ui.components.analysis_display import render_analysis  # noqa: E402
from src.ui.components.feedback_input import render_feedback_input  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Employee Feedback Analyzer",
    page_icon="\U0001f4ac",
    layout="centered",
)

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
if "feedback_session" not in st.session_state:
    _settings = get_settings()
    configure_logging(_settings.log_level)
    st.session_state.feedback_session = FeedbackSession.from_settings()

session: FeedbackSession = st.session_state.feedback_session

# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------
st.title("Employee Feedback Analyzer")
st.caption(
    "Leverage AI to understand employee sentiment, identify key themes, "
    "and derive actionable insights from feedback."
)

with st.container(border=True):
    render_feedback_input(session)

if session.state.error:
    st.error(f"**Error**\n\n{session.state.error}")
elif session.state.result is not None:
    render_analysis(session.state.result)
