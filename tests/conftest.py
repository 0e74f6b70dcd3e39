"""Shared fixtures: in-memory collaborators and a FastAPI test client."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from kisanmitra.config import settings
from kisanmitra.dependencies import (
    get_blob_store,
    get_chat_store,
    get_gemini_client,
    get_identity_resolver,
    get_speech_recognizer,
    get_speech_synthesizer,
)
from kisanmitra.main import app
from kisanmitra.services.blob_store import InMemoryBlobStore
from kisanmitra.services.chat_store import InMemoryChatStore
from kisanmitra.services.gemini_client import InMemoryLLMClient
from kisanmitra.services.identity import InMemoryIdentityResolver
from kisanmitra.services.speech_client import InMemorySpeechRecognizer
from kisanmitra.services.tts_client import InMemorySpeechSynthesizer

TEST_UID = "u123"
TEST_TOKEN = "valid-id-token"
AUTH_HEADERS = {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture(autouse=True)
def gemini_api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Give every test a configured model credential unless it overrides it."""
    monkeypatch.setattr(settings, "gemini_api_key", "test-api-key")
    return "test-api-key"


@pytest.fixture
def mock_gemini_client() -> InMemoryLLMClient:
    """Create a fresh in-memory LLM client for test inspection."""
    return InMemoryLLMClient()


@pytest.fixture
def mock_chat_store() -> InMemoryChatStore:
    return InMemoryChatStore()


@pytest.fixture
def mock_blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def mock_recognizer() -> InMemorySpeechRecognizer:
    return InMemorySpeechRecognizer()


@pytest.fixture
def mock_synthesizer() -> InMemorySpeechSynthesizer:
    return InMemorySpeechSynthesizer()


@pytest.fixture
def mock_identity_resolver() -> InMemoryIdentityResolver:
    """Resolver that knows exactly one token, mapped to ``TEST_UID``."""
    return InMemoryIdentityResolver({TEST_TOKEN: TEST_UID})


@pytest.fixture
async def client(
    mock_gemini_client: InMemoryLLMClient,
    mock_chat_store: InMemoryChatStore,
    mock_blob_store: InMemoryBlobStore,
    mock_recognizer: InMemorySpeechRecognizer,
    mock_synthesizer: InMemorySpeechSynthesizer,
    mock_identity_resolver: InMemoryIdentityResolver,
) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient with every collaborator overridden.

    No Firebase project, Google SDK or network access is needed; tests inspect
    the in-memory doubles to see which external calls happened.
    """
    app.dependency_overrides[get_gemini_client] = lambda: mock_gemini_client
    app.dependency_overrides[get_chat_store] = lambda: mock_chat_store
    app.dependency_overrides[get_blob_store] = lambda: mock_blob_store
    app.dependency_overrides[get_speech_recognizer] = lambda: mock_recognizer
    app.dependency_overrides[get_speech_synthesizer] = lambda: mock_synthesizer
    app.dependency_overrides[get_identity_resolver] = lambda: mock_identity_resolver
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers carrying the token ``mock_identity_resolver`` accepts."""
    return dict(AUTH_HEADERS)


@pytest.fixture
def test_uid() -> str:
    return TEST_UID
