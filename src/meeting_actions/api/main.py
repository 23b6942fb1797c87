"""FastAPI application for the meeting-actions service."""

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meeting_actions.clients.assemblyai_client import AssemblyAIClient
from meeting_actions.clients.sendgrid_client import SendGridClient
from meeting_actions.logging import logging_context
from meeting_actions.pipeline import ActionExtractionPipeline
from meeting_actions.services.email_service import DailyEmailQuota, EmailService
from meeting_actions.services.share_store import ShareStore

from .config import get_settings
from .routes.actions import router as actions_router
from .routes.health import router as health_router
from .routes.share import router as share_router
from .routes.upload import router as upload_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the extraction pipeline and provider clients at startup, close them at shutdown."""
    settings = get_settings()

    logger.info(
        "lifespan.startup",
        transcription_enabled=settings.transcription_enabled,
        email_enabled=settings.email_enabled,
    )

    pipeline = ActionExtractionPipeline.from_config()

    # AssemblyAI (optional): audio uploads answer 503 without it
    transcriber: AssemblyAIClient | None = None
    if settings.transcription_enabled:
        transcriber = AssemblyAIClient(
            api_key=settings.ASSEMBLYAI_API_KEY,
            base_url=settings.ASSEMBLYAI_BASE_URL,
            poll_interval_seconds=settings.TRANSCRIPTION_POLL_INTERVAL_SECONDS,
            max_polls=settings.TRANSCRIPTION_MAX_POLLS,
            timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        )
    else:
        logger.warning("lifespan.transcription_disabled", missing="ASSEMBLYAI_API_KEY")

    # SendGrid (optional): e-mail sharing answers 503 without it
    email_client: SendGridClient | None = None
    if settings.email_enabled:
        email_client = SendGridClient(
            api_key=settings.SENDGRID_API_KEY,
            from_email=settings.SENDGRID_FROM_EMAIL,
            timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        )
    else:
        logger.warning("lifespan.email_disabled", missing="SENDGRID_API_KEY")

    # Store on app.state for request handlers
    app.state.pipeline = pipeline
    app.state.transcriber = transcriber
    app.state.email = EmailService(email_client, DailyEmailQuota(limit=settings.EMAIL_DAILY_LIMIT))
    app.state.shares = ShareStore(
        max_shares=settings.SHARE_STORE_MAX_SIZE,
        ttl_seconds=settings.SHARE_TTL_SECONDS,
    )

    logger.info("lifespan.ready")
    yield

    # Shutdown
    logger.info("lifespan.shutdown")
    if transcriber is not None:
        await transcriber.close()
    if email_client is not None:
        await email_client.close()


app = FastAPI(
    title="meeting-actions",
    description="Extracts owner/task action items from meeting transcripts and recordings",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Attach a request ID to every log entry emitted while handling the request."""
    request_id = request.headers.get("x-request-id") or str(uuid4())
    with logging_context(request_id=request_id):
        response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    """Turn unexpected failures into a JSON 500."""
    logger.error(
        "request.failed",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(health_router)
app.include_router(actions_router)
app.include_router(upload_router)
app.include_router(share_router)
