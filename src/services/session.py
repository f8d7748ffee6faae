"""Session controller for one user's feedback interaction.

All UI-visible state lives in one ``SessionState`` owned by
``FeedbackSession``. Front-ends render from that state and call the
session's intents; every intent catches ``FeedbackAnalyzerError`` at its own
boundary and stores a readable message instead of raising.

Usage::

    session = FeedbackSession.from_settings()
    await session.start_recording()
    await session.stop_recording()
    session.edit_text("...")
    await session.analyze()
    print(session.state.result)
"""

import logging
from dataclasses import dataclass

from src.core.config import get_settings
from src.core.exceptions import FeedbackAnalyzerError
from src.core.models import AnalysisResult
from src.services.analysis.analyzer import FeedbackAnalyzer
from src.services.audio.recorder import AudioRecorder, CaptureState
from src.services.audio.sources import BaseAudioSource, ClipSource
from src.services.llm import create_llm
from src.services.transcription import create_stt

logger = logging.getLogger(__name__)

EMPTY_FEEDBACK_MESSAGE = "Please record or provide some feedback to analyze."


@dataclass
class SessionState:
    """Everything a front-end needs to render the session."""

    feedback_text: str = ""
    from_audio: bool = False
    capture_state: CaptureState = CaptureState.idle
    is_analyzing: bool = False
    error: str | None = None
    result: AnalysisResult | None = None

    @property
    def is_capturing(self) -> bool:
        return self.capture_state in (
            CaptureState.acquiring,
            CaptureState.recording,
            CaptureState.transcribing,
        )

    @property
    def can_start_recording(self) -> bool:
        return not self.is_capturing and not self.is_analyzing

    @property
    def can_stop_recording(self) -> bool:
        return self.capture_state == CaptureState.recording and not self.is_analyzing

    @property
    def can_edit(self) -> bool:
        return not self.is_capturing and not self.is_analyzing

    @property
    def can_analyze(self) -> bool:
        return self.can_edit and bool(self.feedback_text.strip())


class FeedbackSession:
    """Top-level controller tying the recorder and the analyzer together.

    Args:
        recorder: Recording state machine with its STT provider.
        analyzer: Feedback analysis client.
        source: Default audio source for ``start_recording()`` (microphone).
    """

    def __init__(
        self,
        recorder: AudioRecorder,
        analyzer: FeedbackAnalyzer,
        source: BaseAudioSource | None = None,
    ) -> None:
        self.state = SessionState()
        self._recorder = recorder
        self._analyzer = analyzer
        self._source = source

    @classmethod
    def from_settings(cls, source: BaseAudioSource | None = None) -> "FeedbackSession":
        """Build a session from the configured providers."""
        settings = get_settings()
        recorder = AudioRecorder(create_stt(provider=settings.stt_provider))
        analyzer = FeedbackAnalyzer(create_llm(provider=settings.llm_provider))
        return cls(recorder, analyzer, source=source)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    async def start_recording(self, source: BaseAudioSource | None = None) -> bool:
        """Clear the text field and begin recording from ``source``.

        Returns ``True`` once the recording is live; ``False`` when the start
        was ignored or the device could not be acquired.
        """
        state = self.state
        if not state.can_start_recording:
            logger.info(
                "Ignoring start: capture=%s analyzing=%s",
                state.capture_state,
                state.is_analyzing,
            )
            return False

        source = source or self._source
        if source is None:
            raise ValueError("No audio source configured for this session")

        state.error = None
        state.feedback_text = ""
        state.from_audio = False

        state.capture_state = CaptureState.acquiring
        try:
            await self._recorder.start(source)
        except FeedbackAnalyzerError as exc:
            state.error = exc.detail
        finally:
            state.capture_state = self._recorder.state
        return state.capture_state == CaptureState.recording

    async def stop_recording(self) -> None:
        """Stop recording and publish the transcript into the text field."""
        state = self.state
        if not state.can_stop_recording:
            logger.info("Ignoring stop: capture=%s", state.capture_state)
            return

        state.capture_state = CaptureState.transcribing
        try:
            text = await self._recorder.stop()
        except FeedbackAnalyzerError as exc:
            logger.warning("Transcription failed: %s", exc.detail)
            state.error = f"Transcription failed: {exc.detail}"
            state.from_audio = False
        else:
            state.feedback_text = text
            state.from_audio = bool(text)
        finally:
            state.capture_state = self._recorder.state

    async def transcribe_clip(self, data: bytes, mime_type: str = "audio/wav") -> None:
        """Run an already-captured clip through the recording lifecycle."""
        if not await self.start_recording(ClipSource(data, mime_type)):
            return
        await self.stop_recording()

    # ------------------------------------------------------------------
    # Text & analysis
    # ------------------------------------------------------------------

    def edit_text(self, text: str) -> None:
        """Replace the feedback text with user input."""
        state = self.state
        state.feedback_text = text
        state.from_audio = False
        if state.error:
            state.error = None

    async def analyze(self) -> None:
        """Analyze the current feedback text; one request at a time."""
        state = self.state
        if state.is_analyzing or state.is_capturing:
            logger.info("Ignoring analyze: an operation is already in flight")
            return

        if not state.feedback_text.strip():
            state.error = EMPTY_FEEDBACK_MESSAGE
            state.result = None
            return

        state.is_analyzing = True
        state.error = None
        state.result = None
        try:
            state.result = await self._analyzer.analyze(state.feedback_text)
        except FeedbackAnalyzerError as exc:
            logger.warning("Analysis failed (%s): %s", exc.code, exc.detail)
            state.error = f"Analysis failed: {exc.detail}"
        finally:
            state.is_analyzing = False

    def clear(self) -> None:
        """Reset text, result and error; only allowed when idle."""
        if not self.state.can_edit:
            return
        self.state = SessionState(capture_state=self._recorder.state)

    async def close(self) -> None:
        """Release the microphone if the session is torn down mid-recording."""
        await self._recorder.close()
        self.state.capture_state = self._recorder.state
