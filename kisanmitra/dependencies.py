"""Centralized FastAPI dependencies for use with Depends()."""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastapi import Depends, Header, Request
from pydantic import ValidationError

from kisanmitra.errors import (
    INVALID_ARGUMENT,
    CallableError,
    InternalError,
    KisanMitraError,
    UnauthenticatedError,
)
from kisanmitra.schemas.callable import CallableRequest
from kisanmitra.services.blob_store import BlobStore, InMemoryBlobStore
from kisanmitra.services.chat_store import ChatStore, InMemoryChatStore
from kisanmitra.services.gemini_client import InMemoryLLMClient, LLMClient
from kisanmitra.services.identity import IdentityResolver, InMemoryIdentityResolver
from kisanmitra.services.speech_client import InMemorySpeechRecognizer, SpeechRecognizer
from kisanmitra.services.tts_client import InMemorySpeechSynthesizer, SpeechSynthesizer

_llm_client: LLMClient = InMemoryLLMClient()
_chat_store: ChatStore = InMemoryChatStore()
_blob_store: BlobStore = InMemoryBlobStore()
_speech_recognizer: SpeechRecognizer = InMemorySpeechRecognizer()
_speech_synthesizer: SpeechSynthesizer = InMemorySpeechSynthesizer()
_identity_resolver: IdentityResolver = InMemoryIdentityResolver()

logger = structlog.get_logger()


def init_production_deps(
    firebase_project: str,
    storage_bucket: str,
    gemini_api_key: str,
    gemini_model: str,
) -> None:
    """Swap InMemory test doubles for real Firebase/GCP-backed implementations.

    Uses lazy imports so the module loads without the Google SDKs installed.
    The Gemini client is only built when a key is present; without one,
    askGemini fails with a configuration error before calling the model.
    """
    global _llm_client, _chat_store, _blob_store  # noqa: PLW0603
    global _speech_recognizer, _speech_synthesizer, _identity_resolver  # noqa: PLW0603

    import firebase_admin

    from kisanmitra.config import is_model_configured
    from kisanmitra.services.blob_store import FirebaseBlobStore
    from kisanmitra.services.chat_store import FirestoreChatStore
    from kisanmitra.services.gemini_client import GeminiClient
    from kisanmitra.services.identity import FirebaseIdentityResolver
    from kisanmitra.services.speech_client import GoogleSpeechRecognizer
    from kisanmitra.services.tts_client import GoogleSpeechSynthesizer

    if not firebase_admin._apps:  # noqa: SLF001
        options = {"projectId": firebase_project}
        if storage_bucket:
            options["storageBucket"] = storage_bucket
        firebase_admin.initialize_app(options=options)

    _chat_store = FirestoreChatStore()
    _blob_store = FirebaseBlobStore(storage_bucket)
    _identity_resolver = FirebaseIdentityResolver()
    _speech_recognizer = GoogleSpeechRecognizer()
    _speech_synthesizer = GoogleSpeechSynthesizer()
    if is_model_configured(gemini_api_key):
        _llm_client = GeminiClient(gemini_api_key, gemini_model)


def get_gemini_client() -> LLMClient:
    """Return the application LLM client instance.

    Defaults to InMemoryLLMClient for development and testing.
    Swapped to production implementations by ``init_production_deps()``.
    """
    return _llm_client


def get_chat_store() -> ChatStore:
    """Return the chat history store."""
    return _chat_store


def get_blob_store() -> BlobStore:
    """Return the audio blob store."""
    return _blob_store


def get_speech_recognizer() -> SpeechRecognizer:
    return _speech_recognizer


def get_speech_synthesizer() -> SpeechSynthesizer:
    return _speech_synthesizer


def get_identity_resolver() -> IdentityResolver:
    return _identity_resolver


async def get_caller_uid(
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Resolve the caller's uid from ``Authorization: Bearer <ID token>``.

    Runs as a dependency, ahead of body parsing, request validation or any
    external call.  A resolver fault other than a rejected token surfaces as
    ``InternalError`` carrying the original message.
    """
    if not authorization:
        raise UnauthenticatedError("Unauthenticated: No auth token provided")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthenticatedError("Unauthenticated: Invalid auth token")
    try:
        uid = await resolver.resolve(token.strip())
    except KisanMitraError:
        raise
    except Exception as exc:
        logger.exception("identity_resolution_failed", error_type=type(exc).__name__)
        raise InternalError(f"Failed to verify auth token: {exc}") from exc
    structlog.contextvars.bind_contextvars(uid=uid)
    return uid


async def get_callable_data(
    request: Request,
    uid: Annotated[str, Depends(get_caller_uid)],
) -> dict[str, Any]:
    """Decode the ``{"data": {...}}`` envelope once the caller is known.

    The body is read here rather than declared on the route so that an
    unauthenticated call is rejected before its payload is looked at.
    """
    try:
        body = await request.json()
        envelope = CallableRequest.model_validate(body)
    except (ValueError, ValidationError) as exc:
        logger.info("callable_envelope_rejected", error_type=type(exc).__name__)
        raise CallableError(INVALID_ARGUMENT, "Bad Request") from exc
    return envelope.data


__all__ = [
    "get_blob_store",
    "get_callable_data",
    "get_caller_uid",
    "get_chat_store",
    "get_gemini_client",
    "get_identity_resolver",
    "get_speech_recognizer",
    "get_speech_synthesizer",
    "init_production_deps",
]
