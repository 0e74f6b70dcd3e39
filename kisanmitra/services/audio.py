"""Audio bridge: speech recognition of uploaded clips and speech synthesis.

Both operations validate, call the speech provider once and touch the blob
store under the caller's own ``audio/{uid}/`` namespace.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import structlog

from kisanmitra.errors import (
    AudioNotFoundError,
    AuthorizationError,
    SynthesisError,
    UnauthenticatedError,
)
from kisanmitra.schemas.audio import SynthesisResult, TranscriptionResult
from kisanmitra.services.blob_store import BlobStore
from kisanmitra.services.languages import speech_locale, tts_voice
from kisanmitra.services.speech_client import RecognitionSegment, SpeechRecognizer
from kisanmitra.services.tts_client import SpeechSynthesizer
from kisanmitra.services.validators import (
    AUDIO_PATH_PREFIX,
    SPEECH_TEXT_MAX_LENGTH,
    validate_audio_path,
    validate_language,
    validate_required_fields,
    validate_text_length,
)

logger = structlog.get_logger()

NO_SPEECH_MESSAGE = "No speech detected in audio"
SYNTHESIZED_CONTENT_TYPE = "audio/mpeg"


def user_audio_prefix(uid: str) -> str:
    return f"{AUDIO_PATH_PREFIX}{uid}/"


def average_confidence(segments: list[RecognitionSegment]) -> float:
    """Mean of the segment confidences the provider actually reported, to 2 dp.

    Segments with a zero confidence carry no score and are left out; with no
    scored segments the result is 0.
    """
    scores = [segment.confidence for segment in segments if segment.confidence > 0]
    if not scores:
        return 0.0
    return round(sum(scores) / len(scores), 2)


async def transcribe_audio(
    data: Mapping[str, Any],
    uid: str | None,
    *,
    blob_store: BlobStore,
    recognizer: SpeechRecognizer,
) -> TranscriptionResult:
    """Transcribe an uploaded clip stored under the caller's audio namespace."""
    if not uid:
        raise UnauthenticatedError("Unauthenticated: No auth token provided")

    validate_required_fields(data, ("audioPath", "language"))
    audio_path = validate_audio_path(data["audioPath"])
    language = validate_language(data["language"])

    if not audio_path.startswith(user_audio_prefix(uid)):
        raise AuthorizationError("Unauthorized: Cannot access audio file")

    if not await blob_store.exists(audio_path):
        raise AudioNotFoundError("Audio file not found")
    audio = await blob_store.read(audio_path)

    segments = await recognizer.recognize(audio, speech_locale(language))
    if not segments:
        logger.info("transcription_complete", uid=uid, language=language, segments=0)
        return TranscriptionResult(transcript="", confidence=0.0, message=NO_SPEECH_MESSAGE)

    transcript = " ".join(s.transcript for s in segments if s.transcript).strip()
    confidence = average_confidence(segments)

    logger.info(
        "transcription_complete",
        uid=uid,
        language=language,
        segments=len(segments),
        confidence=confidence,
    )
    return TranscriptionResult(transcript=transcript, confidence=confidence)


async def synthesize_speech(
    data: Mapping[str, Any],
    uid: str | None,
    *,
    synthesizer: SpeechSynthesizer,
    blob_store: BlobStore,
    url_ttl: timedelta,
    clock: Callable[[], float] = time.time,
) -> SynthesisResult:
    """Speak *text* in the caller's language and store the MP3 for playback."""
    if not uid:
        raise UnauthenticatedError("Unauthenticated: No auth token provided")

    validate_required_fields(data, ("text", "language"))
    text = validate_text_length(data["text"], SPEECH_TEXT_MAX_LENGTH)
    language = validate_language(data["language"])

    audio = await synthesizer.synthesize(text, tts_voice(language))
    if not audio:
        raise SynthesisError("No audio content generated")

    now = clock()
    storage_path = f"{user_audio_prefix(uid)}response-{int(now * 1000)}.mp3"
    await blob_store.write(
        storage_path,
        audio,
        content_type=SYNTHESIZED_CONTENT_TYPE,
        metadata={
            "userId": uid,
            "language": language,
            "generatedAt": datetime.fromtimestamp(now, tz=timezone.utc).isoformat(),
        },
    )
    audio_url = await blob_store.signed_url(storage_path, url_ttl)

    logger.info(
        "synthesis_complete",
        uid=uid,
        language=language,
        text_length=len(text),
        audio_bytes=len(audio),
        storage_path=storage_path,
    )
    return SynthesisResult(audio_url=audio_url, storage_path=storage_path)
