"""Speech-to-Text abstraction with protocol-based swappable implementations.

``GoogleSpeechRecognizer`` wraps the synchronous ``google-cloud-speech``
client in ``asyncio.to_thread`` so it never blocks the event loop.
``InMemorySpeechRecognizer`` returns canned segments for tests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Protocol

# Browser MediaRecorder output
RECOGNITION_ENCODING = "WEBM_OPUS"
RECOGNITION_SAMPLE_RATE_HZ = 48000


@dataclass(frozen=True)
class RecognitionSegment:
    """Best alternative of one recognition result."""

    transcript: str
    confidence: float


class SpeechRecognizer(Protocol):
    """Protocol for one-shot speech recognition."""

    async def recognize(self, audio: bytes, language_code: str) -> list[RecognitionSegment]:
        """Recognize *audio* in *language_code*, one segment per result."""
        ...


class GoogleSpeechRecognizer:
    """Production recognizer backed by Google Cloud Speech-to-Text.

    ``google.cloud.speech`` is imported lazily so the module loads without
    the SDK installed.
    """

    def __init__(self) -> None:
        from google.cloud import speech

        self._client = speech.SpeechClient()

    async def recognize(self, audio: bytes, language_code: str) -> list[RecognitionSegment]:
        """Run synchronous recognition and keep the top alternative of each result."""
        from google.cloud import speech

        config = speech.RecognitionConfig(
            encoding=speech.RecognitionConfig.AudioEncoding[RECOGNITION_ENCODING],
            sample_rate_hertz=RECOGNITION_SAMPLE_RATE_HZ,
            language_code=language_code,
            enable_automatic_punctuation=True,
            model="default",
            use_enhanced=True,
        )
        response = await asyncio.to_thread(
            self._client.recognize,
            config=config,
            audio=speech.RecognitionAudio(content=audio),
        )
        segments: list[RecognitionSegment] = []
        for result in response.results:
            if not result.alternatives:
                continue
            best = result.alternatives[0]
            segments.append(RecognitionSegment(best.transcript, best.confidence))
        return segments


class InMemorySpeechRecognizer:
    """Test double that records calls and returns canned segments."""

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.segments: list[RecognitionSegment] = [
            RecognitionSegment("my tomato leaves are curling", 0.9),
        ]

    async def recognize(self, audio: bytes, language_code: str) -> list[RecognitionSegment]:
        """Append call details and return the canned segments."""
        self.calls.append({"audio": audio, "language_code": language_code})
        return list(self.segments)
