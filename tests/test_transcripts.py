"""
Tests for upload checks, storage and transcript loading.
"""

from unittest.mock import AsyncMock

import pytest

from meeting_actions.errors import (
    EmptyTranscriptError,
    ServiceNotConfiguredError,
    UnsupportedFileTypeError,
)
from meeting_actions.services.transcripts import (
    check_upload_allowed,
    cleanup_file,
    is_audio_file,
    is_valid_email,
    load_transcript,
    store_upload,
)


class TestEmailValidation:
    @pytest.mark.parametrize('email', ['a@example.com', 'first.last@sub.example.org'])
    def test_valid(self, email):
        assert is_valid_email(email) is True

    @pytest.mark.parametrize('email', ['', 'plain', 'a@b', 'a b@example.com', '@example.com'])
    def test_invalid(self, email):
        assert is_valid_email(email) is False


class TestUploadChecks:
    def test_audio_extensions(self):
        assert is_audio_file('call.MP3') is True
        assert is_audio_file('notes.txt') is False
        assert is_audio_file('') is False

    @pytest.mark.parametrize(
        'filename, content_type',
        [
            ('notes.txt', 'text/plain'),
            ('call.wav', 'audio/wav'),
            ('notes.txt', None),
            ('call.m4a', 'video/mp4'),
            ('blob', 'application/octet-stream'),
        ],
    )
    def test_allowed(self, filename, content_type):
        check_upload_allowed(filename, content_type)

    def test_rejected(self):
        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            check_upload_allowed('slides.pdf', 'application/pdf')

        assert exc_info.value.context['filename'] == 'slides.pdf'


class TestStorage:
    def test_store_upload_uses_unique_safe_name(self, tmp_path):
        path = store_upload(tmp_path / 'uploads', '../../etc/notes.txt', b'hello')

        assert path.parent == tmp_path / 'uploads'
        assert path.name.endswith('-notes.txt')
        assert path.read_bytes() == b'hello'

    def test_cleanup_removes_file(self, tmp_path):
        path = store_upload(tmp_path, 'notes.txt', b'hello')

        cleanup_file(path)

        assert not path.exists()

    def test_cleanup_missing_file_is_silent(self, tmp_path):
        cleanup_file(tmp_path / 'never-written.txt')


class TestLoadTranscript:
    @pytest.mark.asyncio
    async def test_reads_text_file(self, tmp_path):
        path = store_upload(tmp_path, 'notes.txt', 'Sarah will send the deck.'.encode('utf-8'))

        assert await load_transcript(path, 'notes.txt') == 'Sarah will send the deck.'

    @pytest.mark.asyncio
    async def test_invalid_utf8_is_replaced(self, tmp_path):
        path = store_upload(tmp_path, 'notes.txt', b'Lee will call\xff back')

        text = await load_transcript(path, 'notes.txt')

        assert text == 'Lee will call� back'

    @pytest.mark.asyncio
    async def test_blank_text_file(self, tmp_path):
        path = store_upload(tmp_path, 'notes.txt', b'  \n ')

        with pytest.raises(EmptyTranscriptError):
            await load_transcript(path, 'notes.txt')

    @pytest.mark.asyncio
    async def test_audio_uses_transcriber(self, tmp_path):
        path = store_upload(tmp_path, 'call.mp3', b'\x00\x01')
        transcriber = AsyncMock()
        transcriber.transcribe.return_value = 'Lee will book the venue.'

        text = await load_transcript(path, 'call.mp3', transcriber)

        assert text == 'Lee will book the venue.'
        transcriber.transcribe.assert_awaited_once_with(path)

    @pytest.mark.asyncio
    async def test_audio_without_transcriber(self, tmp_path):
        path = store_upload(tmp_path, 'call.mp3', b'\x00\x01')

        with pytest.raises(ServiceNotConfiguredError):
            await load_transcript(path, 'call.mp3')

    @pytest.mark.asyncio
    async def test_silent_audio(self, tmp_path):
        path = store_upload(tmp_path, 'call.mp3', b'\x00\x01')
        transcriber = AsyncMock()
        transcriber.transcribe.return_value = ''

        with pytest.raises(EmptyTranscriptError):
            await load_transcript(path, 'call.mp3', transcriber)
