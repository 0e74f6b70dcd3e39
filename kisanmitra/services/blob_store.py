"""Blob storage abstraction for uploaded and generated audio.

``FirebaseBlobStore`` uses the project's default Firebase Storage bucket via
``firebase_admin.storage`` (``google-cloud-storage`` blobs underneath), with
each blocking call wrapped in ``asyncio.to_thread``.  ``InMemoryBlobStore``
keeps blobs in a dict and records every access for assertions.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from google.cloud.storage import Bucket


class BlobStore(Protocol):
    """Protocol for path-addressed binary objects."""

    async def exists(self, path: str) -> bool: ...

    async def read(self, path: str) -> bytes: ...

    async def write(
        self, path: str, data: bytes, content_type: str, metadata: dict[str, str]
    ) -> None: ...

    async def signed_url(self, path: str, expires_in: timedelta) -> str:
        """Return a read-only URL for *path* valid for *expires_in*."""
        ...


class FirebaseBlobStore:
    """Production blob store backed by Firebase Storage.

    Requires ``firebase_admin.initialize_app`` to have run.
    """

    def __init__(self, bucket_name: str | None = None) -> None:
        from firebase_admin import storage

        self._bucket: Bucket = storage.bucket(bucket_name or None)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._bucket.blob(path).exists)

    async def read(self, path: str) -> bytes:
        return await asyncio.to_thread(self._bucket.blob(path).download_as_bytes)

    async def write(
        self, path: str, data: bytes, content_type: str, metadata: dict[str, str]
    ) -> None:
        """Upload *data* to *path* with custom *metadata*."""
        blob = self._bucket.blob(path)
        blob.metadata = metadata
        await asyncio.to_thread(blob.upload_from_string, data, content_type=content_type)

    async def signed_url(self, path: str, expires_in: timedelta) -> str:
        blob = self._bucket.blob(path)
        return await asyncio.to_thread(
            blob.generate_signed_url, version="v4", expiration=expires_in, method="GET"
        )


class InMemoryBlobStore:
    """Test double holding blobs in memory."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self.metadata: dict[str, dict[str, str]] = {}
        self.content_types: dict[str, str] = {}
        self.accessed: list[str] = []

    async def exists(self, path: str) -> bool:
        self.accessed.append(path)
        return path in self.blobs

    async def read(self, path: str) -> bytes:
        self.accessed.append(path)
        return self.blobs[path]

    async def write(
        self, path: str, data: bytes, content_type: str, metadata: dict[str, str]
    ) -> None:
        self.accessed.append(path)
        self.blobs[path] = data
        self.content_types[path] = content_type
        self.metadata[path] = dict(metadata)

    async def signed_url(self, path: str, expires_in: timedelta) -> str:
        return f"https://storage.test/{path}?expires={int(expires_in.total_seconds())}"
