"""
Feedback analysis service.

Sends the feedback text inside the analysis prompt to the configured LLM
provider, strips optional code fences from the reply, parses it and
validates its shape. Every step has its own error type so callers can tell
a transport failure from a malformed reply.
"""

import json
import logging
import math

from src.core.config import get_settings
from src.core.exceptions import AnalysisError, ParseError, SchemaError
from src.core.models import AnalysisResult
from src.core.utils import excerpt, strip_code_fences
from src.services.analysis.contract import validate_analysis_payload
from src.services.analysis.prompts import build_analysis_prompt
from src.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} overflows a float")
    return value


class FeedbackAnalyzer:
    """Analyzes one piece of feedback per call using an LLM provider.

    Each call is a single attempt; there is no retry and no cached fallback.
    """

    def __init__(
        self,
        llm: BaseLLM,
        temperature: float | None = None,
        excerpt_chars: int | None = None,
    ) -> None:
        """Initialize with the configured LLM provider.

        Args:
            llm: An LLM provider implementing ``BaseLLM``.
            temperature: Sampling temperature (defaults to settings, 0.2).
            excerpt_chars: Raw reply prefix kept on ``ParseError``.
        """
        settings = get_settings()
        self._llm = llm
        self._temperature = (
            temperature if temperature is not None else settings.analysis_temperature
        )
        self._excerpt_chars = (
            excerpt_chars if excerpt_chars is not None else settings.raw_excerpt_chars
        )

    async def analyze(self, feedback_text: str) -> AnalysisResult:
        """Analyze feedback text and return the validated result.

        Args:
            feedback_text: The feedback, typed or transcribed.

        Returns:
            An ``AnalysisResult`` whose fields all passed shape validation.

        Raises:
            ConfigurationError: If the provider has no credential (no call made).
            AnalysisError: If the request fails; ``invalid_credential`` is set
                when the provider rejected the key.
            ParseError: If the reply is not JSON after de-fencing.
            SchemaError: If the JSON lacks a field or has a wrong type.
        """
        prompt = build_analysis_prompt(feedback_text)

        try:
            raw_response = await self._llm.generate(
                prompt,
                json_mode=True,
                temperature=self._temperature,
            )
        except PermissionError as exc:
            raise AnalysisError(
                detail="Invalid API key for analysis. Please check your API key configuration.",
                invalid_credential=True,
            ) from exc
        except (ConnectionError, TimeoutError, RuntimeError) as exc:
            logger.error("Analysis request failed: %s", exc)
            raise AnalysisError(detail=f"Failed to get analysis from the model: {exc}") from exc

        logger.debug("Raw analysis reply: %s", raw_response)
        json_str = strip_code_fences(raw_response)

        try:
            data = json.loads(
                json_str,
                parse_constant=_reject_constant,
                parse_float=_parse_finite_float,
            )
        except ValueError as exc:
            logger.warning("Analysis reply is not valid JSON: %s", exc)
            raise ParseError(excerpt(raw_response, self._excerpt_chars)) from exc

        try:
            return validate_analysis_payload(data)
        except SchemaError as exc:
            logger.warning("Analysis reply does not match the expected structure: %s", exc.problems)
            raise
