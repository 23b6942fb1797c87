"""POST /api/upload: extract action items from a transcript file or recording."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from meeting_actions.errors import (
    EmptyTranscriptError,
    ServiceNotConfiguredError,
    TranscriptionError,
    UnsupportedFileTypeError,
)
from meeting_actions.logging import logging_context
from meeting_actions.models.api import UploadResponse
from meeting_actions.services.transcripts import (
    check_upload_allowed,
    cleanup_file,
    is_audio_file,
    load_transcript,
    store_upload,
)

from ..config import Settings, get_settings

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/upload")


@router.post("", response_model=UploadResponse)
async def upload_transcript(
    request: Request,
    file: UploadFile | None = File(default=None),
    settings: Settings = Depends(get_settings),
):
    """Store the upload, turn it into text, extract action items, remove the upload."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    filename = file.filename
    try:
        check_upload_allowed(filename, file.content_type)
    except UnsupportedFileTypeError as e:
        raise HTTPException(status_code=400, detail=e.message)

    data = await file.read()
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {settings.MAX_UPLOAD_BYTES // (1024 * 1024)}MB limit",
        )

    log = logger.bind(filename=filename, size_bytes=len(data), audio=is_audio_file(filename))
    path = await asyncio.to_thread(store_upload, settings.UPLOAD_DIR, filename, data)

    with logging_context(source="upload"):
        try:
            log.info("upload.received")
            transcript = await load_transcript(path, filename, request.app.state.transcriber)
        except ServiceNotConfiguredError as e:
            raise HTTPException(status_code=503, detail=e.message)
        except TranscriptionError as e:
            log.error("upload.transcription_failed", error=str(e))
            raise HTTPException(status_code=500, detail=e.message)
        except EmptyTranscriptError as e:
            raise HTTPException(status_code=400, detail=e.message)
        finally:
            await asyncio.to_thread(cleanup_file, path)

        result = await asyncio.to_thread(request.app.state.pipeline.run, transcript)
        log.info(
            "upload.extracted",
            sentences=result.sentence_count,
            action_count=result.count,
            processing_time_ms=result.processing_time_ms,
        )

    return UploadResponse.from_transcript(transcript, result.actions)
