"""
Upload handling: file-type checks, temporary storage, and transcript loading.

Text files are read directly; audio files are handed to a transcriber
(anything with ``async transcribe(path) -> str``, normally AssemblyAIClient).
"""

import asyncio
import re
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from ..errors import EmptyTranscriptError, ServiceNotConfiguredError, UnsupportedFileTypeError
from ..logging import get_logger

logger = get_logger(__name__)

TEXT_EXTENSIONS = frozenset({'.txt'})
AUDIO_EXTENSIONS = frozenset({'.mp3', '.wav', '.flac', '.ogg', '.m4a'})

ALLOWED_MIME_TYPES = frozenset({
    'text/plain',
    'text/txt',
    'audio/mpeg',
    'audio/mp3',
    'audio/wav',
    'audio/x-wav',
    'audio/flac',
    'audio/ogg',
    'audio/m4a',
    'application/octet-stream',
})

_EMAIL = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


class Transcriber(Protocol):
    async def transcribe(self, audio_path: str | Path) -> str: ...


def is_valid_email(email: str) -> bool:
    """Loose "local@domain.tld" shape check."""
    return bool(email) and bool(_EMAIL.match(email))


def file_extension(filename: str) -> str:
    return Path(filename or '').suffix.lower()


def is_audio_file(filename: str) -> bool:
    return file_extension(filename) in AUDIO_EXTENSIONS


def check_upload_allowed(filename: str, content_type: str | None) -> None:
    """
    Accept text transcripts and supported audio formats.

    A file passes if either its MIME type or its extension is allowed.

    Raises:
        UnsupportedFileTypeError: Neither MIME type nor extension is allowed
    """
    ext = file_extension(filename)
    if (content_type or '').lower() in ALLOWED_MIME_TYPES:
        return
    if ext in TEXT_EXTENSIONS or ext in AUDIO_EXTENSIONS:
        return
    raise UnsupportedFileTypeError(
        'Invalid file type. Please upload a text file (.txt) '
        'or audio file (.mp3, .wav, .flac, .ogg, .m4a)',
        context={'filename': filename, 'content_type': content_type},
    )


def store_upload(upload_dir: str | Path, filename: str, data: bytes) -> Path:
    """Write upload bytes under upload_dir with a unique, path-safe name."""
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f'{uuid4()}-{Path(filename or "upload").name}'
    path.write_bytes(data)
    return path


def cleanup_file(path: str | Path) -> None:
    """Remove a stored upload; failures are logged, not raised."""
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        logger.error('upload.cleanup_failed', path=str(path), error=str(e))


async def load_transcript(
    path: str | Path,
    filename: str,
    transcriber: Transcriber | None = None,
) -> str:
    """
    Produce transcript text for a stored upload.

    Args:
        path: Location of the stored upload
        filename: Original client filename (decides text vs audio)
        transcriber: Speech-to-text backend for audio files

    Returns:
        Non-blank transcript text

    Raises:
        ServiceNotConfiguredError: Audio upload but no transcriber configured
        TranscriptionError: The transcriber failed
        EmptyTranscriptError: The file yielded no text
    """
    if is_audio_file(filename):
        if transcriber is None:
            raise ServiceNotConfiguredError(
                'Audio-to-text conversion is not available. '
                'Please set up AssemblyAI API key (ASSEMBLYAI_API_KEY).'
            )
        text = await transcriber.transcribe(path)
    else:
        text = await asyncio.to_thread(Path(path).read_text, encoding='utf-8', errors='replace')

    if not text or not text.strip():
        raise EmptyTranscriptError(
            'File is empty or could not be processed',
            context={'filename': filename},
        )
    return text
