"""Caller identity resolution from Firebase ID tokens.

``FirebaseIdentityResolver`` verifies tokens with ``firebase_admin.auth``.
``InMemoryIdentityResolver`` maps fixed tokens to uids for tests and local
development; with no tokens registered every caller is unauthenticated.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

import structlog

from kisanmitra.errors import UnauthenticatedError

logger = structlog.get_logger()


class IdentityResolver(Protocol):
    """Protocol for turning a bearer token into a stable user id."""

    async def resolve(self, token: str) -> str:
        """Return the uid for *token* or raise ``UnauthenticatedError``."""
        ...


class FirebaseIdentityResolver:
    """Production resolver verifying Firebase Auth ID tokens.

    Requires ``firebase_admin.initialize_app`` to have run.
    """

    def __init__(self) -> None:
        from firebase_admin import auth

        self._auth = auth

    async def resolve(self, token: str) -> str:
        """Verify *token* and return its ``uid`` claim."""
        try:
            claims = await asyncio.to_thread(self._auth.verify_id_token, token)
        except (ValueError, self._auth.InvalidIdTokenError, self._auth.UserDisabledError) as exc:
            logger.info("id_token_rejected", error=type(exc).__name__)
            raise UnauthenticatedError("Unauthenticated: Invalid auth token") from exc

        uid = claims.get("uid")
        if not uid:
            raise UnauthenticatedError("Unauthenticated: Invalid auth token")
        return uid


class InMemoryIdentityResolver:
    """Test double resolving tokens from a fixed mapping."""

    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self.tokens: dict[str, str] = dict(tokens or {})
        self.calls: list[str] = []

    async def resolve(self, token: str) -> str:
        self.calls.append(token)
        uid = self.tokens.get(token)
        if not uid:
            raise UnauthenticatedError("Unauthenticated: Invalid auth token")
        return uid
