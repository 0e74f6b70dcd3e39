"""Supported language codes and their per-provider identifiers.

The four codes below are the only values accepted anywhere in the service.
Each speech provider gets its own lookup table; unknown codes fall back to
English, although request validation rejects them before a lookup happens.
"""

from __future__ import annotations

from dataclasses import dataclass

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "hi", "ta", "te")
DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "hi": "Hindi",
    "ta": "Tamil",
    "te": "Telugu",
}

# Speech-to-Text locale codes
SPEECH_LOCALES: dict[str, str] = {
    "en": "en-IN",
    "hi": "hi-IN",
    "ta": "ta-IN",
    "te": "te-IN",
}


@dataclass(frozen=True)
class VoiceConfig:
    """Text-to-Speech voice selection for one language."""

    language_code: str
    name: str
    ssml_gender: str = "FEMALE"


TTS_VOICES: dict[str, VoiceConfig] = {
    "en": VoiceConfig("en-IN", "en-IN-Wavenet-D"),
    "hi": VoiceConfig("hi-IN", "hi-IN-Wavenet-D"),
    "ta": VoiceConfig("ta-IN", "ta-IN-Wavenet-A"),
    # No Wavenet voice for Telugu
    "te": VoiceConfig("te-IN", "te-IN-Standard-A"),
}


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, LANGUAGE_NAMES[DEFAULT_LANGUAGE])


def speech_locale(code: str) -> str:
    return SPEECH_LOCALES.get(code, SPEECH_LOCALES[DEFAULT_LANGUAGE])


def tts_voice(code: str) -> VoiceConfig:
    return TTS_VOICES.get(code, TTS_VOICES[DEFAULT_LANGUAGE])
