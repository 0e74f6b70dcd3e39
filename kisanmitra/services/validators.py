"""Request validators shared by the callable operations.

All functions are pure and fail fast by raising a subclass of
``InvalidRequestError``; on success they return the (possibly normalized)
value so callers can validate and bind in one step.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from kisanmitra.errors import (
    InvalidInputError,
    MissingFieldError,
    TextTooLongError,
    UnsupportedLanguageError,
)
from kisanmitra.services.languages import SUPPORTED_LANGUAGES

AUDIO_PATH_PREFIX = "audio/"
QUESTION_MAX_LENGTH = 1000
SPEECH_TEXT_MAX_LENGTH = 5000


def validate_required_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Fail with ``MissingFieldError`` naming every absent, null or empty field."""
    missing = [field for field in fields if data.get(field) is None or data.get(field) == ""]
    if missing:
        raise MissingFieldError(missing)


def validate_language(code: Any) -> str:
    """Return *code* unchanged if it is a supported language code.

    Matching is exact: ``"EN"`` is rejected.
    """
    if not isinstance(code, str) or code not in SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(
            f"Unsupported language: {code}. Supported: {', '.join(SUPPORTED_LANGUAGES)}"
        )
    return code


def validate_text_length(text: Any, max_length: int = SPEECH_TEXT_MAX_LENGTH) -> str:
    """Return *text* trimmed, after checking type and the *max_length* cap.

    The cap applies to the text as sent, before trimming.
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidInputError("Invalid text input")
    if len(text) > max_length:
        raise TextTooLongError(max_length)
    return text.strip()


def validate_audio_path(path: Any) -> str:
    """Return *path* unchanged if it is a storage path under ``audio/``."""
    if not isinstance(path, str) or not path:
        raise InvalidInputError("Invalid audio path")
    if not path.startswith(AUDIO_PATH_PREFIX):
        raise InvalidInputError(
            f"Invalid audio path format. Must start with '{AUDIO_PATH_PREFIX}'"
        )
    return path
