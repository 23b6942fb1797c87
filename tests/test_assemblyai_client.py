"""
Tests for the AssemblyAI client against a mocked HTTP transport.
"""

import json

import httpx
import pytest

from meeting_actions.clients.assemblyai_client import AssemblyAIClient
from meeting_actions.errors import (
    ServiceNotConfiguredError,
    TranscriptionError,
    TranscriptionTimeoutError,
)

BASE_URL = 'https://api.assemblyai.com/v2'


def _client(handler, **kwargs) -> AssemblyAIClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return AssemblyAIClient(
        api_key='aai-test',
        poll_interval_seconds=0,
        http_client=http_client,
        **kwargs,
    )


def _provider(statuses, requests=None):
    """Handler serving upload/submit, then the given job statuses in order."""
    statuses = list(statuses)

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if request.url.path == '/v2/upload':
            return httpx.Response(200, json={'upload_url': 'https://cdn.assemblyai.com/upload/abc'})
        if request.url.path == '/v2/transcript':
            return httpx.Response(200, json={'id': 't_123', 'status': 'queued'})
        if request.url.path == '/v2/transcript/t_123':
            return httpx.Response(200, json=statuses.pop(0) if len(statuses) > 1 else statuses[0])
        return httpx.Response(404)

    return handler


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / 'call.mp3'
    path.write_bytes(b'ID3\x00\x00')
    return path


class TestAssemblyAIClient:
    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv('ASSEMBLYAI_API_KEY', raising=False)

        with pytest.raises(ServiceNotConfiguredError):
            AssemblyAIClient(api_key=None)

    @pytest.mark.asyncio
    async def test_transcribe_success(self, audio_file):
        requests = []
        client = _client(
            _provider(
                [
                    {'status': 'processing'},
                    {'status': 'completed', 'text': 'Sarah will send the deck.'},
                ],
                requests,
            )
        )

        text = await client.transcribe(audio_file)
        await client.close()

        assert text == 'Sarah will send the deck.'
        assert requests[0].content == b'ID3\x00\x00'
        submitted = json.loads(requests[1].content)
        assert submitted['audio_url'] == 'https://cdn.assemblyai.com/upload/abc'
        assert submitted['language_code'] == 'en'
        assert submitted['punctuate'] is True
        assert len(requests) == 4

    @pytest.mark.asyncio
    async def test_completed_without_text(self, audio_file):
        client = _client(_provider([{'status': 'completed', 'text': None}]))

        assert await client.transcribe(audio_file) == ''

    @pytest.mark.asyncio
    async def test_job_error(self, audio_file):
        client = _client(_provider([{'status': 'error', 'error': 'Audio file is corrupt'}]))

        with pytest.raises(TranscriptionError) as exc_info:
            await client.transcribe(audio_file)

        assert exc_info.value.message == 'Transcription failed: Audio file is corrupt'

    @pytest.mark.asyncio
    async def test_polling_budget_exhausted(self, audio_file):
        client = _client(_provider([{'status': 'processing'}]), max_polls=3)

        with pytest.raises(TranscriptionTimeoutError) as exc_info:
            await client.transcribe(audio_file)

        assert exc_info.value.context['max_polls'] == 3

    @pytest.mark.asyncio
    async def test_upload_rejected(self, audio_file):
        def handler(request):
            return httpx.Response(401, json={'error': 'Invalid API key'})

        client = _client(handler)

        with pytest.raises(TranscriptionError) as exc_info:
            await client.transcribe(audio_file)

        assert exc_info.value.message == 'Failed to upload audio: Invalid API key'
        assert exc_info.value.context['status_code'] == 401

    @pytest.mark.asyncio
    async def test_malformed_response(self, audio_file):
        def handler(request):
            return httpx.Response(200, json={'unexpected': True})

        client = _client(handler)

        with pytest.raises(TranscriptionError) as exc_info:
            await client.transcribe(audio_file)

        assert exc_info.value.context['error_type'] == 'KeyError'

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        client = _client(_provider([{'status': 'completed', 'text': 'x'}]))

        with pytest.raises(TranscriptionError):
            await client.transcribe(tmp_path / 'gone.mp3')
