"""Extraction and normalization of the model's JSON reply.

Model replies are untrusted.  ``parse_ai_response`` always returns a fully
populated ``AIResponse`` or raises ``InvalidAIResponseError``; the only
unrecoverable shape is a reply whose JSON carries no answer.
"""

from __future__ import annotations

import json
from typing import Any

import structlog

from kisanmitra.errors import InvalidAIResponseError
from kisanmitra.schemas.advice import AIResponse

logger = structlog.get_logger()

PROVIDER_NAME = "Gemini AI"
VALID_CONFIDENCE_LEVELS: tuple[str, ...] = ("High", "Medium", "Low")
DEFAULT_CONFIDENCE = "Medium"
DEFAULT_SOURCES: tuple[str, ...] = (PROVIDER_NAME,)
DEFAULT_SUGGESTIONS: tuple[str, ...] = ()


def extract_json_object(text: str) -> str | None:
    """Return the slice from the first ``{`` to the last ``}``, or None.

    Heuristic: a stray brace in prose before the real object breaks it.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start : end + 1]


def fallback_response(raw_text: str) -> AIResponse:
    """Wrap non-JSON model output as a Medium-confidence answer."""
    if not raw_text:
        raise InvalidAIResponseError("Invalid AI response: missing answer field")
    return AIResponse(
        answer=raw_text,
        confidence=DEFAULT_CONFIDENCE,
        sources=list(DEFAULT_SOURCES),
        suggestions=list(DEFAULT_SUGGESTIONS),
    )


def _string_list(value: Any, default: tuple[str, ...]) -> list[str]:
    if not isinstance(value, list):
        return list(default)
    return [item if isinstance(item, str) else json.dumps(item) for item in value]


def normalize_ai_response(payload: dict[str, Any]) -> AIResponse:
    """Apply the default confidence/sources/suggestions to a parsed reply."""
    answer = payload.get("answer")
    if not answer:
        raise InvalidAIResponseError("Invalid AI response: missing answer field")
    if not isinstance(answer, str):
        answer = json.dumps(answer, ensure_ascii=False)

    confidence = payload.get("confidence")
    if confidence not in VALID_CONFIDENCE_LEVELS:
        confidence = DEFAULT_CONFIDENCE

    return AIResponse(
        answer=answer,
        confidence=confidence,
        sources=_string_list(payload.get("sources"), DEFAULT_SOURCES),
        suggestions=_string_list(payload.get("suggestions"), DEFAULT_SUGGESTIONS),
    )


def parse_ai_response(raw_text: str) -> AIResponse:
    """Parse *raw_text* from the model into a normalized ``AIResponse``."""
    candidate = extract_json_object(raw_text)
    if candidate is None:
        logger.warning("ai_response_not_json", reason="no_object", raw_length=len(raw_text))
        return fallback_response(raw_text)

    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning(
            "ai_response_not_json", reason="decode_error", error=str(exc), raw_length=len(raw_text)
        )
        return fallback_response(raw_text)

    return normalize_ai_response(payload)
