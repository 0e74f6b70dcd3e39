"""Gemini LLM client abstraction with protocol-based swappable implementations.

Production code uses ``GeminiClient`` which wraps the ``google-genai`` SDK's
native async API (``client.aio.models.generate_content``) with a Gemini
Developer API key.  Tests use ``InMemoryLLMClient`` which captures prompts and
returns a configurable canned reply without the SDK or network access.

The ``google.genai`` import is lazy so this module loads without the SDK
installed.
"""

from __future__ import annotations

from typing import Protocol


class LLMClient(Protocol):
    """Protocol for single-shot text generation."""

    async def generate(self, prompt: str) -> str:
        """Send *prompt* once and return the model's raw text reply."""
        ...


class GeminiClient:
    """Production Gemini client using the google-genai SDK.

    One request per call: no retries, no streaming.  The request deadline is
    whatever the hosting platform enforces.
    """

    def __init__(self, api_key: str, model: str) -> None:
        from google import genai

        self._client = genai.Client(api_key=api_key)
        self._model = model

    async def generate(self, prompt: str) -> str:
        """Generate a reply to *prompt*, returning the raw text."""
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=prompt,
        )
        return response.text or ""


class InMemoryLLMClient:
    """Test double that records prompts and returns a canned reply."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.response: str = (
            '{"answer":"test answer","confidence":"High",'
            '"sources":["ICAR"],"suggestions":["Test soil first"]}'
        )

    async def generate(self, prompt: str) -> str:
        """Record *prompt* and return the canned reply."""
        self.calls.append(prompt)
        return self.response
