"""Tests for the Gemini client abstraction.

All tests are mock-based -- no real Gemini API calls are made.
"""

from unittest.mock import AsyncMock, MagicMock, patch

from kisanmitra.services.gemini_client import GeminiClient, InMemoryLLMClient
from kisanmitra.services.response_parser import parse_ai_response

# ---------------------------------------------------------------------------
# InMemoryLLMClient
# ---------------------------------------------------------------------------


async def test_in_memory_client_default_response_parses() -> None:
    """The canned reply is a complete, valid model answer."""
    client = InMemoryLLMClient()
    raw = await client.generate("prompt")

    result = parse_ai_response(raw)
    assert result.answer == "test answer"
    assert result.confidence == "High"
    assert result.sources == ["ICAR"]
    assert result.suggestions == ["Test soil first"]


async def test_in_memory_client_captures_prompts() -> None:
    client = InMemoryLLMClient()

    await client.generate("prompt-a")
    await client.generate("prompt-b")

    assert client.calls == ["prompt-a", "prompt-b"]


async def test_in_memory_client_custom_response() -> None:
    client = InMemoryLLMClient()
    client.response = "plain text"

    assert await client.generate("p") == "plain text"


# ---------------------------------------------------------------------------
# GeminiClient (SDK patched)
# ---------------------------------------------------------------------------


async def test_gemini_client_sends_prompt_once() -> None:
    with patch("google.genai.Client") as mock_client_cls:
        sdk = MagicMock()
        sdk.aio.models.generate_content = AsyncMock(
            return_value=MagicMock(text='{"answer": "ok"}')
        )
        mock_client_cls.return_value = sdk

        client = GeminiClient("key-123", "gemini-1.5-flash")
        raw = await client.generate("What is DAP?")

    mock_client_cls.assert_called_once_with(api_key="key-123")
    sdk.aio.models.generate_content.assert_awaited_once_with(
        model="gemini-1.5-flash", contents="What is DAP?"
    )
    assert raw == '{"answer": "ok"}'


async def test_gemini_client_empty_text_becomes_empty_string() -> None:
    """A blocked or empty candidate yields ``None`` text from the SDK."""
    with patch("google.genai.Client") as mock_client_cls:
        sdk = MagicMock()
        sdk.aio.models.generate_content = AsyncMock(return_value=MagicMock(text=None))
        mock_client_cls.return_value = sdk

        raw = await GeminiClient("key", "model").generate("p")

    assert raw == ""
