"""askGemini request/response schemas, the model output contract and ChatRecord.

Wire names are camelCase (``farmProfile``, ``soilType``, ``chatId``) to stay
compatible with the web client; Python attributes are snake_case.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Confidence = Literal["High", "Medium", "Low"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _display_text(value: Any) -> str | None:
    """Coerce a scalar profile value to text; containers become ``None``."""
    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return None
    return str(value)


class Location(_CamelModel):
    village: str | None = None
    district: str | None = None
    state: str | None = None

    @field_validator("village", "district", "state", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _display_text(value)


class FarmArea(_CamelModel):
    value: int | float | str | None = None
    unit: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> int | float | str | None:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return None
        return value

    @field_validator("unit", mode="before")
    @classmethod
    def _coerce_unit(cls, value: Any) -> str | None:
        return _display_text(value)


class FarmProfile(_CamelModel):
    """Farm context supplied by the client.

    Every field is optional and parsed leniently: a value of the wrong shape
    is dropped (and later rendered as "Not specified") instead of failing
    the request.  A bare ``area`` number is read as its value, a single crop
    string as a one-item list.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    crops: list[str] | None = None
    location: Location | None = None
    soil_type: str | None = None
    irrigation_type: str | None = None
    area: FarmArea | None = None
    season: str | None = None

    @field_validator("crops", mode="before")
    @classmethod
    def _coerce_crops(cls, value: Any) -> list[str] | None:
        if isinstance(value, str):
            return [value] if value.strip() else None
        if not isinstance(value, (list, tuple)):
            return None
        return [text for text in map(_display_text, value) if text]

    @field_validator("location", mode="before")
    @classmethod
    def _coerce_location(cls, value: Any) -> Any:
        return value if isinstance(value, Mapping) else None

    @field_validator("area", mode="before")
    @classmethod
    def _coerce_area(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return value
        if isinstance(value, (int, float, str)) and not isinstance(value, bool):
            return {"value": value}
        return None

    @field_validator("soil_type", "irrigation_type", "season", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _display_text(value)


class AIResponse(BaseModel):
    """Normalized model answer.  Every field is always present and typed."""

    answer: str = Field(min_length=1)
    confidence: Confidence
    sources: list[str]
    suggestions: list[str]


class AskGeminiResult(AIResponse):
    """Payload returned to the caller: the normalized answer plus its chat id."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    chat_id: str


class FarmProfileSnapshot(_CamelModel):
    """Trimmed farm profile stored alongside each chat."""

    crops: list[str] = Field(default_factory=list)
    location: dict[str, str] = Field(default_factory=dict)
    soil_type: str = ""

    @classmethod
    def from_profile(cls, profile: FarmProfile) -> FarmProfileSnapshot:
        location = profile.location.model_dump(exclude_none=True) if profile.location else {}
        return cls(
            crops=list(profile.crops or []),
            location=location,
            soil_type=profile.soil_type or "",
        )


class ChatRecord(_CamelModel):
    """One persisted question/answer exchange.  Written once, never mutated."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    question: str
    answer: str
    confidence: Confidence
    sources: list[str]
    suggestions: list[str]
    language: str
    farm_profile: FarmProfileSnapshot


class AskGeminiResponse(BaseModel):
    """Callable success envelope for askGemini."""

    result: AskGeminiResult
