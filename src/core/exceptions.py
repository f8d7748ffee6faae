"""
Feedback Analyzer exception hierarchy.

All application-specific exceptions inherit from FeedbackAnalyzerError,
so front-ends can turn any of them into a user-readable message at the
boundary of the operation that failed.
"""

from datetime import UTC, datetime
from enum import StrEnum


class FeedbackAnalyzerError(Exception):
    """Base exception for all Feedback Analyzer errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "FEEDBACK_ANALYZER_ERROR",
    ) -> None:
        self.detail = detail
        self.code = code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class ConfigurationError(FeedbackAnalyzerError):
    """Raised when a required setting (the API credential) is missing."""

    def __init__(self, detail: str = "API key is not configured") -> None:
        super().__init__(detail=detail, code="CONFIGURATION_ERROR")


class DeviceErrorCause(StrEnum):
    """Why the microphone could not be acquired."""

    permission_denied = "permission_denied"
    device_unavailable = "device_unavailable"
    unsupported = "unsupported"


_DEVICE_MESSAGES = {
    DeviceErrorCause.permission_denied: (
        "Microphone access denied. Please allow microphone access in your system settings."
    ),
    DeviceErrorCause.device_unavailable: (
        "Could not access microphone. Please ensure it is connected and enabled."
    ),
    DeviceErrorCause.unsupported: "Audio recording is not supported on this system.",
}


class DeviceError(FeedbackAnalyzerError):
    """Raised when the microphone cannot be acquired."""

    def __init__(self, cause: DeviceErrorCause) -> None:
        self.cause = cause
        super().__init__(
            detail=_DEVICE_MESSAGES[cause],
            code=f"DEVICE_{cause.value.upper()}",
        )


class RecordingAlreadyActiveError(FeedbackAnalyzerError):
    """Raised when trying to start a recording while one is active or transcribing."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="RECORDING_ALREADY_ACTIVE",
        )


class RecordingNotActiveError(FeedbackAnalyzerError):
    """Raised when trying to stop a recording that was never started."""

    def __init__(self) -> None:
        super().__init__(
            detail="No recording is active",
            code="RECORDING_NOT_ACTIVE",
        )


class TranscriptionError(FeedbackAnalyzerError):
    """Raised when speech-to-text processing fails."""

    def __init__(
        self,
        detail: str = "Failed to transcribe audio",
        invalid_credential: bool = False,
    ) -> None:
        self.invalid_credential = invalid_credential
        super().__init__(
            detail=detail,
            code="INVALID_API_KEY" if invalid_credential else "TRANSCRIPTION_ERROR",
        )


class AnalysisError(FeedbackAnalyzerError):
    """Raised when the analysis request itself fails (network, quota, credential)."""

    def __init__(
        self,
        detail: str = "Failed to get analysis from the model",
        invalid_credential: bool = False,
    ) -> None:
        self.invalid_credential = invalid_credential
        super().__init__(
            detail=detail,
            code="INVALID_API_KEY" if invalid_credential else "ANALYSIS_ERROR",
        )


class ParseError(FeedbackAnalyzerError):
    """Raised when the model reply is not valid JSON after de-fencing."""

    def __init__(self, raw_excerpt: str) -> None:
        self.raw_excerpt = raw_excerpt
        super().__init__(
            detail=f"Failed to parse analysis data. Raw response: {raw_excerpt}",
            code="PARSE_ERROR",
        )


class SchemaError(FeedbackAnalyzerError):
    """Raised when the parsed reply is missing fields or has the wrong types."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__(
            detail="Received malformed analysis data: " + "; ".join(problems),
            code="SCHEMA_ERROR",
        )
