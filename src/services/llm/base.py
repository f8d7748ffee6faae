"""
Abstract base class for LLM providers.

All LLM implementations (Gemini, Claude, Ollama) must implement this interface,
enabling provider-agnostic business logic in the analysis client.

Providers translate SDK exceptions into standard Python exceptions:
``TimeoutError`` and ``ConnectionError`` for transport problems and rate
limits, ``PermissionError`` for a rejected credential, ``RuntimeError`` for
anything else. A missing credential raises ``ConfigurationError`` before any
SDK client is created.
"""

from abc import ABC, abstractmethod

# Substring the Google API puts in its error when the key is rejected.
INVALID_API_KEY_MARKER = "API key not valid"


class BaseLLM(ABC):
    """Interface that every LLM provider must implement."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> str:
        """Generate a text response for a single prompt.

        Args:
            prompt: The full prompt to send to the model.
            json_mode: Ask the provider for a JSON-only reply where supported.
            temperature: Sampling temperature; provider default when None.

        Returns:
            The model's raw text response.
        """
