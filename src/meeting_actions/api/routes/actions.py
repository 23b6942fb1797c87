"""POST /api/actions/extract: extract action items from submitted text."""

import asyncio
from typing import Any

import structlog
from fastapi import APIRouter, Body, HTTPException, Request

from meeting_actions.logging import logging_context
from meeting_actions.models.api import ExtractResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/actions")


@router.post("/extract", response_model=ExtractResponse)
async def extract_actions(request: Request, payload: dict[str, Any] = Body(...)):
    """Run the extraction pipeline over the "text" field of the body."""
    text = payload.get("text")
    if not text or not isinstance(text, str):
        raise HTTPException(status_code=400, detail="Text is required")
    if not text.strip():
        raise HTTPException(status_code=400, detail="Text cannot be empty")

    with logging_context(source="text"):
        # CPU-bound; keep it off the event loop
        result = await asyncio.to_thread(request.app.state.pipeline.run, text)
        logger.info(
            "actions.extracted",
            characters=len(text),
            sentences=result.sentence_count,
            action_count=result.count,
            processing_time_ms=result.processing_time_ms,
        )

    return ExtractResponse.from_actions(result.actions)
