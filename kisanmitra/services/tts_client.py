"""Text-to-Speech abstraction with protocol-based swappable implementations.

``GoogleSpeechSynthesizer`` wraps the synchronous
``google-cloud-texttospeech`` client in ``asyncio.to_thread``.
``InMemorySpeechSynthesizer`` returns canned audio for tests.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

from kisanmitra.services.languages import VoiceConfig

# Slightly slower than normal for clarity
SPEAKING_RATE = 0.95


class SpeechSynthesizer(Protocol):
    """Protocol for one-shot speech synthesis."""

    async def synthesize(self, text: str, voice: VoiceConfig) -> bytes:
        """Return MP3 bytes for *text* spoken by *voice* (empty if none produced)."""
        ...


class GoogleSpeechSynthesizer:
    """Production synthesizer backed by Google Cloud Text-to-Speech.

    ``google.cloud.texttospeech`` is imported lazily so the module loads
    without the SDK installed.
    """

    def __init__(self) -> None:
        from google.cloud import texttospeech

        self._client = texttospeech.TextToSpeechClient()

    async def synthesize(self, text: str, voice: VoiceConfig) -> bytes:
        """Synthesize *text* as MP3 and return the raw audio content."""
        from google.cloud import texttospeech

        response = await asyncio.to_thread(
            self._client.synthesize_speech,
            input=texttospeech.SynthesisInput(text=text),
            voice=texttospeech.VoiceSelectionParams(
                language_code=voice.language_code,
                name=voice.name,
                ssml_gender=texttospeech.SsmlVoiceGender[voice.ssml_gender],
            ),
            audio_config=texttospeech.AudioConfig(
                audio_encoding=texttospeech.AudioEncoding.MP3,
                speaking_rate=SPEAKING_RATE,
                pitch=0.0,
                volume_gain_db=0.0,
            ),
        )
        return response.audio_content


class InMemorySpeechSynthesizer:
    """Test double that records calls and returns canned audio bytes."""

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.audio: bytes = b"ID3fake-mp3"

    async def synthesize(self, text: str, voice: VoiceConfig) -> bytes:
        """Append call details and return the canned audio."""
        self.calls.append({"text": text, "voice": voice})
        return self.audio
