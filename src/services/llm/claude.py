"""
Claude LLM provider implementation.

Uses the Anthropic Python SDK (``anthropic.AsyncAnthropic``) to interact with
the Claude API. The Messages API has no response-format switch, so JSON mode
is expressed as a system instruction.
"""

import logging

from anthropic import (
    APIConnectionError,
    APITimeoutError,
    AsyncAnthropic,
    AuthenticationError,
    RateLimitError,
)

from src.core.config import get_settings
from src.core.exceptions import ConfigurationError
from src.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)

JSON_SYSTEM_PROMPT = (
    "Output ONLY a single valid JSON object. "
    "No markdown fences or extra text."
)


class ClaudeLLM(BaseLLM):
    """Claude API LLM provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.claude_api_key
        self._model = model or settings.claude_model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._client: AsyncAnthropic | None = None

    def _get_client(self) -> AsyncAnthropic:
        if not self._api_key:
            raise ConfigurationError(
                "API key is not configured. Please set the CLAUDE_API_KEY environment variable."
            )
        if self._client is None:
            self._client = AsyncAnthropic(api_key=self._api_key)
        return self._client

    async def _call_api(
        self,
        user_prompt: str,
        system: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Send one request to Claude.

        All SDK exceptions are translated to standard Python exceptions so that
        the analysis client can tell a rejected key from a transport failure.
        """
        client = self._get_client()
        try:
            kwargs: dict = {
                "model": self._model,
                "max_tokens": self._max_tokens,
                "temperature": temperature if temperature is not None else self._temperature,
                "messages": [{"role": "user", "content": user_prompt}],
            }
            if system:
                kwargs["system"] = system

            response = await client.messages.create(**kwargs)
            return response.content[0].text

        except APITimeoutError as exc:
            logger.warning("Claude API timeout: %s", exc)
            raise TimeoutError(f"Claude API request timed out: {exc}") from exc
        except APIConnectionError as exc:
            logger.warning("Claude API connection error: %s", exc)
            raise ConnectionError(f"Failed to connect to Claude API: {exc}") from exc
        except RateLimitError as exc:
            logger.warning("Claude API rate limit hit: %s", exc)
            raise ConnectionError(f"Claude API rate limit exceeded: {exc}") from exc
        except AuthenticationError as exc:
            logger.warning("Claude rejected the API key: %s", exc)
            raise PermissionError(f"Claude API key not valid: {exc}") from exc
        except Exception as exc:
            logger.error("Unexpected Claude API error: %s", exc)
            raise RuntimeError(f"Claude API error: {exc}") from exc

    async def generate(
        self,
        prompt: str,
        *,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> str:
        """Generate a response; JSON mode adds a JSON-only system instruction."""
        return await self._call_api(
            user_prompt=prompt,
            system=JSON_SYSTEM_PROMPT if json_mode else None,
            temperature=temperature,
        )
