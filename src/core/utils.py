"""Shared utility functions for Feedback Analyzer."""

import logging
import re

# Optional language tag, optional newline, lazy body, closing fence at the very end.
_FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a markdown code fence wrapping JSON from an LLM response.

    Text without a complete leading and trailing fence is only trimmed.
    """
    text = text.strip()
    match = _FENCE_RE.match(text)
    if match and match.group(2):
        return match.group(2).strip()
    return text


def excerpt(text: str, limit: int) -> str:
    """Return at most ``limit`` characters of ``text``, marking truncation."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for a front-end process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
