"""Callable-protocol envelopes shared by every operation.

Requests arrive as ``{"data": {...}}``; the operation fields inside ``data``
are validated by the service layer so that every missing field is reported at
once rather than field by field.
"""

from typing import Any

from pydantic import BaseModel, Field


class CallableRequest(BaseModel):
    """Incoming callable invocation."""

    data: dict[str, Any] = Field(default_factory=dict)


class CallableErrorDetail(BaseModel):
    status: str
    message: str


class CallableErrorResponse(BaseModel):
    """Error envelope: ``{"error": {"status": ..., "message": ...}}``."""

    error: CallableErrorDetail
