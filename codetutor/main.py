"""
Code Tutor — Learning Assistant API
====================================
FastAPI entry point for the mobile learning assistant.
  • Global exception handler — never crashes, always returns JSON
  • Quiz questions from Gemini with canned fallback
  • Tutor chat, onboarding, topic catalog, learner preferences
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from codetutor.core.config import settings
from codetutor.schemas.common import ErrorResponse
from codetutor.api.v1.router import api_router
from codetutor.services.storage import StorageError

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
)
logger = logging.getLogger(__name__)

# ── App ──────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="Code Tutor — Learning Assistant API",
    description=(
        "Backend for the Code Tutor mobile app.\n"
        "Pick a topic → take a quiz (Gemini or built-in questions) → chat with the tutor."
    ),
    version="1.0.0",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Wrap HTTPException details in the standard error envelope."""
    if isinstance(exc.detail, dict):
        body = ErrorResponse(
            message=str(exc.detail.get("message", "Request failed.")),
            detail=exc.detail.get("field"),
        )
    else:
        body = ErrorResponse(message=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    body = ErrorResponse(
        message="Invalid request.",
        detail=f"{location}: {first.get('msg', 'invalid value')}" if first else None,
    )
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.url.path}: {exc}")
    body = ErrorResponse(message="Local storage is unavailable.", detail=str(exc))
    return JSONResponse(status_code=503, content=body.model_dump())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all: every unhandled exception returns a clean JSON envelope."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    body = ErrorResponse(
        status="error",
        message="An internal server error occurred.",
        detail=str(exc),
    )
    return JSONResponse(status_code=500, content=body.model_dump())


# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Health Check ─────────────────────────────────────────────────────────────
@app.get("/", tags=["System"])
async def health_check():
    return {
        "status": "operational",
        "service": "Code Tutor Learning Assistant",
        "version": app.version,
    }


app.include_router(api_router)
