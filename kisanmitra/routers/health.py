"""Health check endpoint reporting model credential status."""

from fastapi import APIRouter

from kisanmitra.config import is_model_configured, settings
from kisanmitra.schemas.health import HealthResponse

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    """Report liveness and whether a Gemini API key is configured.

    Always 200: a missing key surfaces as ``model="not_configured"`` here and
    as a failed-precondition error on askGemini.
    """
    model = "configured" if is_model_configured(settings.gemini_api_key) else "not_configured"
    return HealthResponse(status="ok", model=model)
