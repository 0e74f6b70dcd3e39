"""askGemini orchestration: validate -> prompt -> model -> parse -> persist.

Every step runs strictly after the previous one and the model is called
exactly once.  Collaborators are passed in explicitly; the router supplies
the active instances from ``kisanmitra.dependencies``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from kisanmitra.config import is_model_configured
from kisanmitra.errors import ConfigurationError, InvalidInputError, UnauthenticatedError
from kisanmitra.schemas.advice import AskGeminiResult, ChatRecord, FarmProfile, FarmProfileSnapshot
from kisanmitra.services.chat_store import ChatStore
from kisanmitra.services.gemini_client import LLMClient
from kisanmitra.services.prompts import build_agricultural_prompt
from kisanmitra.services.response_parser import parse_ai_response
from kisanmitra.services.validators import (
    QUESTION_MAX_LENGTH,
    validate_language,
    validate_required_fields,
    validate_text_length,
)

logger = structlog.get_logger()

ASK_REQUIRED_FIELDS = ("question", "farmProfile", "language")


def parse_farm_profile(raw: Any) -> FarmProfile:
    """Read the client-supplied farm profile; only a non-object is rejected."""
    if not isinstance(raw, Mapping):
        raise InvalidInputError("Invalid farm profile")
    try:
        return FarmProfile.model_validate(dict(raw))
    except ValidationError as exc:
        raise InvalidInputError("Invalid farm profile") from exc


async def answer_question(
    data: Mapping[str, Any],
    uid: str | None,
    *,
    llm_client: LLMClient,
    chat_store: ChatStore,
    api_key: str,
) -> AskGeminiResult:
    """Answer a farmer's question and record the exchange.

    Steps:
    1. Require an authenticated *uid*.
    2. Validate question (max 1000 chars), farm profile and language.
    3. Require a configured model credential (before any external call).
    4. Build the prompt and call the model once.
    5. Parse and normalize the reply.
    6. Persist a ChatRecord; a failed write fails the whole call.
    """
    if not uid:
        raise UnauthenticatedError("Unauthenticated: No auth token provided")

    validate_required_fields(data, ASK_REQUIRED_FIELDS)
    question = validate_text_length(data["question"], QUESTION_MAX_LENGTH)
    language = validate_language(data["language"])
    farm_profile = parse_farm_profile(data["farmProfile"])

    if not is_model_configured(api_key):
        raise ConfigurationError("Gemini API key not configured")

    prompt = build_agricultural_prompt(farm_profile, language, question)
    raw = await llm_client.generate(prompt)
    ai_response = parse_ai_response(raw)

    record = ChatRecord(
        question=question,
        answer=ai_response.answer,
        confidence=ai_response.confidence,
        sources=ai_response.sources,
        suggestions=ai_response.suggestions,
        language=language,
        farm_profile=FarmProfileSnapshot.from_profile(farm_profile),
    )
    chat_id = await chat_store.create_chat(uid, record)

    logger.info(
        "ask_gemini_complete",
        uid=uid,
        chat_id=chat_id,
        language=language,
        confidence=ai_response.confidence,
        question_length=len(question),
    )

    return AskGeminiResult(**ai_response.model_dump(), chat_id=chat_id)
