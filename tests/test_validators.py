"""Tests for the request validators."""

import pytest

from kisanmitra.errors import (
    InvalidInputError,
    InvalidRequestError,
    MissingFieldError,
    TextTooLongError,
    UnsupportedLanguageError,
)
from kisanmitra.services.validators import (
    validate_audio_path,
    validate_language,
    validate_required_fields,
    validate_text_length,
)

# ---------------------------------------------------------------------------
# validate_required_fields
# ---------------------------------------------------------------------------


def test_required_fields_all_present() -> None:
    data = {"question": "q", "farmProfile": {}, "language": "en"}
    assert validate_required_fields(data, ["question", "farmProfile", "language"]) is None


def test_required_fields_lists_every_missing_field() -> None:
    """Both missing names are reported, not just the first."""
    with pytest.raises(MissingFieldError) as exc_info:
        validate_required_fields({"farmProfile": {}}, ["question", "farmProfile", "language"])

    assert exc_info.value.fields == ["question", "language"]
    assert str(exc_info.value) == "Missing required fields: question, language"


def test_required_fields_treats_none_and_empty_string_as_missing() -> None:
    data = {"text": "", "language": None, "audioPath": "audio/u/x.webm"}
    with pytest.raises(MissingFieldError) as exc_info:
        validate_required_fields(data, ["text", "language", "audioPath"])

    assert exc_info.value.fields == ["text", "language"]


def test_required_fields_keeps_falsy_non_empty_values() -> None:
    """0, False and {} are present values; only None and "" are missing."""
    validate_required_fields({"a": 0, "b": False, "c": {}}, ["a", "b", "c"])


# ---------------------------------------------------------------------------
# validate_language
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("code", ["en", "hi", "ta", "te"])
def test_language_accepts_supported_codes(code: str) -> None:
    assert validate_language(code) == code


@pytest.mark.parametrize("code", ["EN", "Hi", "mr", "", "en-IN", None, 1])
def test_language_rejects_everything_else(code: object) -> None:
    with pytest.raises(UnsupportedLanguageError, match="Unsupported language"):
        validate_language(code)


def test_language_error_lists_supported_codes() -> None:
    with pytest.raises(UnsupportedLanguageError) as exc_info:
        validate_language("fr")
    assert "Supported: en, hi, ta, te" in str(exc_info.value)


# ---------------------------------------------------------------------------
# validate_text_length
# ---------------------------------------------------------------------------


def test_text_length_boundary() -> None:
    assert validate_text_length("x" * 1000, 1000) == "x" * 1000

    with pytest.raises(TextTooLongError) as exc_info:
        validate_text_length("x" * 1001, 1000)
    assert exc_info.value.max_length == 1000
    assert "Maximum length: 1000" in str(exc_info.value)


def test_text_length_returns_trimmed_text() -> None:
    assert validate_text_length("  when to sow wheat?  ", 1000) == "when to sow wheat?"


@pytest.mark.parametrize("text", [None, 42, ["list"], "", "   "])
def test_text_length_rejects_missing_or_non_string(text: object) -> None:
    with pytest.raises(InvalidInputError, match="Invalid text input"):
        validate_text_length(text, 1000)


def test_text_length_defaults_to_speech_cap() -> None:
    assert validate_text_length("y" * 5000) == "y" * 5000
    with pytest.raises(TextTooLongError):
        validate_text_length("y" * 5001)


# ---------------------------------------------------------------------------
# validate_audio_path
# ---------------------------------------------------------------------------


def test_audio_path_accepts_audio_prefix() -> None:
    assert validate_audio_path("audio/u123/rec.webm") == "audio/u123/rec.webm"


@pytest.mark.parametrize("path", ["images/foo.png", "/audio/u123/rec.webm", "Audio/x", "", None])
def test_audio_path_rejects_other_paths(path: object) -> None:
    with pytest.raises(InvalidInputError):
        validate_audio_path(path)


def test_validation_errors_share_a_base_class() -> None:
    for error in (MissingFieldError(["a"]), InvalidInputError("x"), UnsupportedLanguageError("x")):
        assert isinstance(error, InvalidRequestError)
    assert isinstance(TextTooLongError(10), InvalidRequestError)
