"""
AssemblyAI client wrapper for audio transcription.

Handles:
- Uploading raw audio bytes
- Submitting a transcription job
- Polling until the job completes, fails, or the polling budget runs out
- Retry logic with exponential backoff on transport errors
"""

import asyncio
import os
from pathlib import Path
from typing import Any

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..errors import (
    ServiceNotConfiguredError,
    TranscriptionError,
    TranscriptionTimeoutError,
    wrap_assemblyai_error,
)
from ..logging import get_logger

logger = get_logger(__name__)

_transport_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)


class AssemblyAIClient:
    """
    Async AssemblyAI speech-to-text client.

    Configuration via environment variables:
    - ASSEMBLYAI_API_KEY: Required API key
    - ASSEMBLYAI_BASE_URL: API base URL (default: https://api.assemblyai.com/v2)
    """

    DEFAULT_BASE_URL = 'https://api.assemblyai.com/v2'

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        poll_interval_seconds: float = 5.0,
        max_polls: int = 60,
        timeout_seconds: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the AssemblyAI client.

        Args:
            api_key: AssemblyAI API key (defaults to ASSEMBLYAI_API_KEY env var)
            base_url: API base URL (defaults to ASSEMBLYAI_BASE_URL or the public endpoint)
            poll_interval_seconds: Delay between status checks
            max_polls: Maximum number of status checks before timing out
            timeout_seconds: Per-request HTTP timeout
            http_client: Preconfigured httpx client (mainly for tests)
        """
        self.api_key = api_key or os.getenv('ASSEMBLYAI_API_KEY')
        if not self.api_key:
            raise ServiceNotConfiguredError(
                'AssemblyAI API key is not configured. '
                'Please set ASSEMBLYAI_API_KEY in your environment variables.'
            )

        self.base_url = base_url or os.getenv('ASSEMBLYAI_BASE_URL', self.DEFAULT_BASE_URL)
        self.poll_interval_seconds = poll_interval_seconds
        self.max_polls = max_polls

        self._client = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            headers={'authorization': self.api_key},
            timeout=timeout_seconds,
        )

    async def transcribe(self, audio_path: str | Path) -> str:
        """
        Transcribe an audio file to text.

        Args:
            audio_path: Path to the audio file on disk

        Returns:
            Transcribed text (may be empty for silent audio)

        Raises:
            TranscriptionError: Upload, submission or transcription failed
            TranscriptionTimeoutError: Job did not finish within max_polls
        """
        path = Path(audio_path)
        log = logger.bind(file=path.name)

        try:
            audio = await asyncio.to_thread(path.read_bytes)
            upload_url = await self._upload(audio)
            transcript_id = await self._submit(upload_url)
            log.info('transcription.submitted', transcript_id=transcript_id)
            text = await self._wait_for_completion(transcript_id)
        except TranscriptionError:
            raise
        except (httpx.HTTPError, OSError, KeyError, ValueError) as e:
            log.error('transcription.failed', error=str(e), error_type=type(e).__name__)
            raise wrap_assemblyai_error(e, context={'file': path.name}) from e

        log.info('transcription.complete', characters=len(text))
        return text

    @_transport_retry
    async def _upload(self, audio: bytes) -> str:
        """Upload raw audio bytes and return the provider's upload URL."""
        response = await self._client.post('/upload', content=audio)
        _raise_for_error(response, 'Failed to upload audio')
        return response.json()['upload_url']

    @_transport_retry
    async def _submit(self, audio_url: str) -> str:
        """Submit a transcription job and return its ID."""
        response = await self._client.post(
            '/transcript',
            json={
                'audio_url': audio_url,
                'language_code': 'en',
                'punctuate': True,
                'format_text': True,
            },
        )
        _raise_for_error(response, 'Failed to submit transcription')
        return response.json()['id']

    @_transport_retry
    async def _get_status(self, transcript_id: str) -> dict[str, Any]:
        """Fetch the current state of a transcription job."""
        response = await self._client.get(f'/transcript/{transcript_id}')
        _raise_for_error(response, 'Failed to check transcription status')
        return response.json()

    async def _wait_for_completion(self, transcript_id: str) -> str:
        """Poll a job until it completes, errors, or the polling budget runs out."""
        for _ in range(self.max_polls):
            await asyncio.sleep(self.poll_interval_seconds)

            data = await self._get_status(transcript_id)
            status = data.get('status')
            if status == 'completed':
                return data.get('text') or ''
            if status == 'error':
                raise TranscriptionError(
                    f"Transcription failed: {data.get('error')}",
                    context={'transcript_id': transcript_id},
                )

        raise TranscriptionTimeoutError(
            'Transcription timed out. Please try again with a shorter audio file.',
            context={'transcript_id': transcript_id, 'max_polls': self.max_polls},
        )

    async def close(self):
        """Close the client connection."""
        await self._client.aclose()


def _raise_for_error(response: httpx.Response, action: str) -> None:
    """Raise TranscriptionError with the provider's message on a non-2xx response."""
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get('error') if isinstance(body, dict) else None
    raise TranscriptionError(
        f"{action}: {detail or response.reason_phrase}",
        context={'status_code': response.status_code},
    )
