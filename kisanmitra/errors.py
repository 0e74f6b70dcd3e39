"""Error taxonomy for the callable operations.

Every error raised by the validation, orchestration and audio layers derives
from ``KisanMitraError`` and carries the callable status it maps to on the
wire.  Routers convert them into ``CallableError`` via ``to_callable_error`` so
the response body follows the Firebase callable error contract::

    {"error": {"status": "INTERNAL", "message": "..."}}
"""

from __future__ import annotations

import structlog

UNAUTHENTICATED = "UNAUTHENTICATED"
FAILED_PRECONDITION = "FAILED_PRECONDITION"
INVALID_ARGUMENT = "INVALID_ARGUMENT"
INTERNAL = "INTERNAL"

HTTP_STATUS_BY_CALLABLE_STATUS: dict[str, int] = {
    UNAUTHENTICATED: 401,
    FAILED_PRECONDITION: 400,
    INVALID_ARGUMENT: 400,
    INTERNAL: 500,
}

CONFIGURATION_MESSAGE = "Gemini API key not configured. Please contact support."


class KisanMitraError(Exception):
    """Base class for all errors raised by the callable operations."""

    status: str = INTERNAL


class UnauthenticatedError(KisanMitraError):
    """The caller presented no identity, or an identity that failed verification."""

    status = UNAUTHENTICATED


class AuthorizationError(KisanMitraError):
    """The caller tried to access a resource owned by another identity."""


class ConfigurationError(KisanMitraError):
    """A provider credential is missing -- a deployment defect, not a user error."""

    status = FAILED_PRECONDITION


class InvalidRequestError(KisanMitraError):
    """Base class for request validation failures."""


class MissingFieldError(InvalidRequestError):
    """One or more required fields are absent, null or empty."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class InvalidInputError(InvalidRequestError):
    """A field has the wrong type or shape."""


class UnsupportedLanguageError(InvalidRequestError):
    """The language code is not one of the supported codes."""


class TextTooLongError(InvalidRequestError):
    """A text field exceeds its length cap."""

    def __init__(self, max_length: int) -> None:
        self.max_length = max_length
        super().__init__(f"Text too long. Maximum length: {max_length} characters")


class InvalidAIResponseError(KisanMitraError):
    """The model reply parsed, but carried no usable answer."""


class InternalError(KisanMitraError):
    """Provider or persistence failure."""


class AudioNotFoundError(InternalError):
    """The requested audio blob does not exist."""


class SynthesisError(InternalError):
    """The speech provider returned no audio payload."""


class CallableError(Exception):
    """Wire-level error rendered as ``{"error": {"status", "message"}}``."""

    def __init__(self, status: str, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_CALLABLE_STATUS.get(self.status, 500)

    def to_body(self) -> dict:
        return {"error": {"status": self.status, "message": self.message}}


def to_callable_error(exc: Exception, prefix: str) -> CallableError:
    """Map any exception raised by an operation to its wire-level error.

    Authentication and configuration failures keep distinct statuses; every
    other failure becomes ``INTERNAL`` with *prefix* and the underlying message.
    """
    if isinstance(exc, CallableError):
        return exc
    status = exc.status if isinstance(exc, KisanMitraError) else INTERNAL
    if status == UNAUTHENTICATED:
        return CallableError(UNAUTHENTICATED, str(exc))
    if status == FAILED_PRECONDITION:
        return CallableError(FAILED_PRECONDITION, CONFIGURATION_MESSAGE)
    return CallableError(INTERNAL, f"{prefix}: {exc}")


def callable_failure(exc: Exception, *, operation: str, prefix: str, uid: str) -> CallableError:
    """Log a failed operation and return the wire-level error to raise.

    Expected failures (``KisanMitraError``) log a warning; anything else is a
    provider or platform fault and logs with its traceback.
    """
    logger = structlog.get_logger()
    if isinstance(exc, KisanMitraError):
        logger.warning(
            "callable_failed",
            operation=operation,
            uid=uid,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    else:
        logger.exception("callable_failed", operation=operation, uid=uid)
    return to_callable_error(exc, prefix)
