"""
Shape validation for analysis replies.

``validate_analysis_payload`` is the single point where data produced by the
model becomes an ``AnalysisResult``. It checks presence and primitive type of
every field and either returns a complete result or raises ``SchemaError``.
Nothing is coerced: ``"0.8"`` is not a number, ``true`` is not a number.
Enumeration membership and the numeric range of ``intensity`` are not checked.
"""

from typing import Any

from src.core.exceptions import SchemaError
from src.core.models import AnalysisResult, Moderation

_TOP_LEVEL_FIELDS: tuple[tuple[str, str], ...] = (
    ("sentiment", "string"),
    ("intensity", "number"),
    ("summary", "string"),
    ("moderation", "object"),
    ("actionable_insight", "string"),
)

_MODERATION_FIELDS: tuple[tuple[str, str], ...] = (
    ("action", "string"),
    ("reason", "string"),
)


def _json_type(value: Any) -> str:
    """Name the JSON primitive type of a value produced by ``json.loads``."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _check_fields(
    data: dict[str, Any],
    fields: tuple[tuple[str, str], ...],
    prefix: str = "",
) -> list[str]:
    problems = []
    for name, expected in fields:
        path = f"{prefix}{name}"
        if name not in data:
            problems.append(f"'{path}' is missing")
            continue
        actual = _json_type(data[name])
        if actual != expected:
            problems.append(f"'{path}' must be a {expected}, got {actual}")
    return problems


def validate_analysis_payload(data: Any) -> AnalysisResult:
    """Turn a parsed JSON value into an ``AnalysisResult`` or raise.

    Args:
        data: The value returned by ``json.loads`` on the model reply.

    Returns:
        A frozen ``AnalysisResult`` with every field present.

    Raises:
        SchemaError: If the value is not an object, or any field is missing
            or has the wrong primitive type.
    """
    if not isinstance(data, dict):
        raise SchemaError([f"reply must be a JSON object, got {_json_type(data)}"])

    problems = _check_fields(data, _TOP_LEVEL_FIELDS)
    moderation = data.get("moderation")
    if isinstance(moderation, dict):
        problems.extend(_check_fields(moderation, _MODERATION_FIELDS, prefix="moderation."))
    if problems:
        raise SchemaError(problems)

    try:
        intensity = float(data["intensity"])
    except OverflowError:
        raise SchemaError(["'intensity' is out of range"]) from None

    return AnalysisResult(
        sentiment=data["sentiment"],
        intensity=intensity,
        summary=data["summary"],
        moderation=Moderation(action=moderation["action"], reason=moderation["reason"]),
        actionable_insight=data["actionable_insight"],
    )
