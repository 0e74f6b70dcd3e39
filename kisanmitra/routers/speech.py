"""POST /transcribeAudio and POST /synthesizeSpeech."""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from kisanmitra.config import settings
from kisanmitra.dependencies import (
    get_blob_store,
    get_callable_data,
    get_caller_uid,
    get_speech_recognizer,
    get_speech_synthesizer,
)
from kisanmitra.errors import callable_failure
from kisanmitra.schemas.audio import SynthesizeSpeechResponse, TranscribeAudioResponse
from kisanmitra.schemas.callable import CallableErrorResponse
from kisanmitra.services.audio import synthesize_speech, transcribe_audio
from kisanmitra.services.blob_store import BlobStore
from kisanmitra.services.speech_client import SpeechRecognizer
from kisanmitra.services.tts_client import SpeechSynthesizer

TRANSCRIBE_ERROR_PREFIX = "Failed to transcribe audio"
SYNTHESIZE_ERROR_PREFIX = "Failed to synthesize speech"

_ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": CallableErrorResponse},
    401: {"model": CallableErrorResponse},
    500: {"model": CallableErrorResponse},
}

router = APIRouter(tags=["speech"])


@router.post(
    "/transcribeAudio",
    responses=_ERROR_RESPONSES,
    response_model_exclude_none=True,
)
async def transcribe(
    uid: Annotated[str, Depends(get_caller_uid)],
    data: Annotated[dict[str, Any], Depends(get_callable_data)],
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
    recognizer: Annotated[SpeechRecognizer, Depends(get_speech_recognizer)],
) -> TranscribeAudioResponse:
    """Transcribe the clip at ``data.audioPath`` spoken in ``data.language``."""
    try:
        result = await transcribe_audio(
            data, uid, blob_store=blob_store, recognizer=recognizer
        )
    except Exception as exc:
        raise callable_failure(
            exc, operation="transcribeAudio", prefix=TRANSCRIBE_ERROR_PREFIX, uid=uid
        ) from exc
    return TranscribeAudioResponse(result=result)


@router.post("/synthesizeSpeech", responses=_ERROR_RESPONSES)
async def synthesize(
    uid: Annotated[str, Depends(get_caller_uid)],
    data: Annotated[dict[str, Any], Depends(get_callable_data)],
    synthesizer: Annotated[SpeechSynthesizer, Depends(get_speech_synthesizer)],
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
) -> SynthesizeSpeechResponse:
    """Speak ``data.text`` in ``data.language`` and return a playback URL."""
    try:
        result = await synthesize_speech(
            data,
            uid,
            synthesizer=synthesizer,
            blob_store=blob_store,
            url_ttl=timedelta(days=settings.synthesis_url_ttl_days),
        )
    except Exception as exc:
        raise callable_failure(
            exc, operation="synthesizeSpeech", prefix=SYNTHESIZE_ERROR_PREFIX, uid=uid
        ) from exc
    return SynthesizeSpeechResponse(result=result)
