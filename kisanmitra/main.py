"""FastAPI application factory with lifespan context manager."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kisanmitra.config import settings
from kisanmitra.errors import (
    INTERNAL,
    CallableError,
    KisanMitraError,
    to_callable_error,
)
from kisanmitra.logging_config import bind_request_context, configure_logging
from kisanmitra.routers import ask, health, speech


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and, when a Firebase project is set, production clients."""
    configure_logging(json_logs=not settings.debug, log_level=settings.log_level)

    if settings.firebase_project:
        from kisanmitra.dependencies import init_production_deps

        init_production_deps(
            firebase_project=settings.firebase_project,
            storage_bucket=settings.storage_bucket,
            gemini_api_key=settings.gemini_api_key,
            gemini_model=settings.gemini_model,
        )

    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_origin_regex=settings.cors_origin_regex or None,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CallableError)
async def callable_error_handler(request: Request, exc: CallableError) -> JSONResponse:
    """Render a callable error as ``{"error": {"status", "message"}}``."""
    return JSONResponse(status_code=exc.http_status, content=exc.to_body())


@app.exception_handler(KisanMitraError)
async def kisanmitra_error_handler(request: Request, exc: KisanMitraError) -> JSONResponse:
    """Render errors raised outside a router body, such as by the auth dependency."""
    error = to_callable_error(exc, "Request failed")
    return JSONResponse(status_code=error.http_status, content=error.to_body())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any unhandled exception as an ``INTERNAL`` callable error."""
    logger = structlog.get_logger()
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    error = CallableError(INTERNAL, "Internal server error")
    return JSONResponse(status_code=error.http_status, content=error.to_body())


@app.middleware("http")
async def bind_log_context(request: Request, call_next):
    """Tag every log line of the request with the operation being invoked."""
    bind_request_context(operation=request.url.path.strip("/") or "root")
    return await call_next(request)


app.include_router(health.router)
app.include_router(ask.router)
app.include_router(speech.router)
