"""transcribeAudio / synthesizeSpeech response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TranscriptionResult(BaseModel):
    transcript: str
    confidence: float = Field(ge=0.0, le=1.0)
    message: str | None = None


class TranscribeAudioResponse(BaseModel):
    """Callable success envelope for transcribeAudio."""

    result: TranscriptionResult


class SynthesisResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    audio_url: str
    storage_path: str


class SynthesizeSpeechResponse(BaseModel):
    """Callable success envelope for synthesizeSpeech."""

    result: SynthesisResult
