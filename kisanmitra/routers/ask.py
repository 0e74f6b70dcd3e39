"""POST /askGemini: farmer question answering.

Identity is resolved by the ``get_caller_uid`` dependency before the body is
read by ``get_callable_data``; the rest of the pipeline lives in
``services.advisor``.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from kisanmitra.config import settings
from kisanmitra.dependencies import (
    get_callable_data,
    get_caller_uid,
    get_chat_store,
    get_gemini_client,
)
from kisanmitra.errors import callable_failure
from kisanmitra.schemas.advice import AskGeminiResponse
from kisanmitra.schemas.callable import CallableErrorResponse
from kisanmitra.services.advisor import answer_question
from kisanmitra.services.chat_store import ChatStore
from kisanmitra.services.gemini_client import LLMClient

ASK_ERROR_PREFIX = "Failed to get AI response"

router = APIRouter(tags=["advisor"])


@router.post(
    "/askGemini",
    responses={
        400: {"model": CallableErrorResponse},
        401: {"model": CallableErrorResponse},
        500: {"model": CallableErrorResponse},
    },
)
async def ask_gemini(
    uid: Annotated[str, Depends(get_caller_uid)],
    data: Annotated[dict[str, Any], Depends(get_callable_data)],
    llm_client: Annotated[LLMClient, Depends(get_gemini_client)],
    chat_store: Annotated[ChatStore, Depends(get_chat_store)],
) -> AskGeminiResponse:
    """Answer ``data.question`` for ``data.farmProfile`` in ``data.language``."""
    try:
        result = await answer_question(
            data,
            uid,
            llm_client=llm_client,
            chat_store=chat_store,
            api_key=settings.gemini_api_key,
        )
    except Exception as exc:
        raise callable_failure(
            exc, operation="askGemini", prefix=ASK_ERROR_PREFIX, uid=uid
        ) from exc
    return AskGeminiResponse(result=result)
