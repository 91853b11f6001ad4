# src/hitboard/main.py
"""Main entry point for the Hitboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.responses import Response

from hitboard.api.v1 import counters_router
from hitboard.core.body_limit import BodySizeLimitMiddleware
from hitboard.core.errors import HitboardError, StorageUnavailableError
from hitboard.core.settings import settings
from hitboard.db.session import create_tables

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Hitboard API",
    description="Play and download counters with per-metric leaderboards",
    version=settings.app_version,
)

# Cap request bodies before any route parses them
app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    max_age=settings.cors_max_age,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(counters_router, prefix=settings.api_prefix)


@app.middleware("http")
async def disable_caching(request: Request, call_next) -> Response:
    """Counts change on every hit; never let intermediaries cache responses."""
    response = await call_next(request)
    response.headers["cache-control"] = "no-store"
    return response


@app.exception_handler(HitboardError)
async def handle_hitboard_error(request: Request, exc: HitboardError) -> JSONResponse:
    content: dict[str, object] = {"ok": False, "error": str(exc)}
    if isinstance(exc, StorageUnavailableError):
        content["retryable"] = True
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "JSON body expected"
    if errors and errors[0].get("type") not in ("json_invalid", "missing", "model_attributes_type"):
        message = str(errors[0].get("msg") or message)
    return JSONResponse(status_code=400, content={"ok": False, "error": message})


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(level=settings.log_level.upper())
    if settings.auto_create_tables:
        create_tables()
    logger.info("Hitboard %s started", settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Play and download counters with per-metric leaderboards",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("hitboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
