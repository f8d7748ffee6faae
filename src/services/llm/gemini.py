"""
Gemini LLM provider implementation.

Uses the Google GenAI SDK (``google.genai.Client``) through its async
surface. The SDK client is created lazily so that a missing API key is
reported as ``ConfigurationError`` on first use rather than at start-up.
"""

import logging

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from src.core.config import get_settings
from src.core.exceptions import ConfigurationError
from src.services.llm.base import INVALID_API_KEY_MARKER, BaseLLM

logger = logging.getLogger(__name__)

MISSING_KEY_DETAIL = "API key is not configured. Please set the GEMINI_API_KEY environment variable."


class GeminiClientMixin:
    """Shared credential handling and error translation for Gemini callers."""

    _api_key: str
    _model: str
    _client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        """Return the SDK client, failing fast when no key is configured."""
        if not self._api_key:
            raise ConfigurationError(MISSING_KEY_DETAIL)
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def _call_api(
        self,
        contents,
        config: genai_types.GenerateContentConfig | None = None,
    ) -> str:
        """Send one ``generate_content`` request and return the reply text.

        SDK exceptions are translated to standard Python exceptions so that
        callers can tell transport problems from a rejected key.
        """
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=contents,
                config=config,
            )
            return response.text or ""

        except genai_errors.APIError as exc:
            if INVALID_API_KEY_MARKER in str(exc):
                logger.warning("Gemini rejected the API key: %s", exc)
                raise PermissionError(f"Gemini API key not valid: {exc}") from exc
            if exc.code == 429:
                logger.warning("Gemini API rate limit hit: %s", exc)
                raise ConnectionError(f"Gemini API rate limit exceeded: {exc}") from exc
            logger.error("Gemini API error: %s", exc)
            raise RuntimeError(f"Gemini API error: {exc}") from exc
        except TimeoutError as exc:
            logger.warning("Gemini API timeout: %s", exc)
            raise TimeoutError(f"Gemini API request timed out: {exc}") from exc
        except ConnectionError as exc:
            logger.warning("Gemini API connection error: %s", exc)
            raise ConnectionError(f"Failed to connect to Gemini API: {exc}") from exc
        except Exception as exc:
            logger.error("Unexpected Gemini API error: %s", exc)
            raise RuntimeError(f"Gemini API error: {exc}") from exc


class GeminiLLM(GeminiClientMixin, BaseLLM):
    """Gemini text provider with JSON response mode."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float = 0.7,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.gemini_api_key
        self._model = model or settings.gemini_model
        self._temperature = temperature
        self._client = None

    async def generate(
        self,
        prompt: str,
        *,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> str:
        """Generate a response, requesting ``application/json`` in JSON mode."""
        config = genai_types.GenerateContentConfig(
            temperature=temperature if temperature is not None else self._temperature,
            response_mime_type="application/json" if json_mode else None,
        )
        return await self._call_api(prompt, config=config)
