"""Chat history persistence with protocol-based swappable implementations.

Records live at ``users/{uid}/chats/{chatId}``.  ``FirestoreChatStore``
writes through ``firebase_admin.firestore`` (blocking client, called via
``asyncio.to_thread``) and stamps records with the server timestamp.
``InMemoryChatStore`` keeps records per user for assertions.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import Protocol

from kisanmitra.schemas.advice import ChatRecord

USERS_COLLECTION = "users"
CHATS_COLLECTION = "chats"


class ChatStore(Protocol):
    """Protocol for creating chat records."""

    async def create_chat(self, uid: str, record: ChatRecord) -> str:
        """Persist *record* under *uid* and return its generated id."""
        ...


class FirestoreChatStore:
    """Production chat store backed by Cloud Firestore.

    Requires ``firebase_admin.initialize_app`` to have run.
    """

    def __init__(self) -> None:
        from firebase_admin import firestore

        self._db = firestore.client()

    async def create_chat(self, uid: str, record: ChatRecord) -> str:
        """Create a new chat document with a Firestore-generated id."""
        from firebase_admin import firestore

        ref = (
            self._db.collection(USERS_COLLECTION)
            .document(uid)
            .collection(CHATS_COLLECTION)
            .document()
        )
        payload = record.model_dump(by_alias=True)
        payload["timestamp"] = firestore.SERVER_TIMESTAMP
        await asyncio.to_thread(ref.set, payload)
        return ref.id


class InMemoryChatStore:
    """Test double that stores records per user."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, ChatRecord]] = {}

    async def create_chat(self, uid: str, record: ChatRecord) -> str:
        """Store *record* under a random id and return the id."""
        chat_id = uuid.uuid4().hex
        self.records.setdefault(uid, {})[chat_id] = record
        return chat_id
