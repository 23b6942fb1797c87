"""
Services around the extraction engine: e-mail sharing, share links, uploads.
"""

from .email_service import DailyEmailQuota, EmailService
from .share_store import SharedResult, ShareStore
from .transcripts import (
    check_upload_allowed,
    cleanup_file,
    is_audio_file,
    is_valid_email,
    load_transcript,
    store_upload,
)

__all__ = [
    'DailyEmailQuota',
    'EmailService',
    'SharedResult',
    'ShareStore',
    'check_upload_allowed',
    'cleanup_file',
    'is_audio_file',
    'is_valid_email',
    'load_transcript',
    'store_upload',
]
