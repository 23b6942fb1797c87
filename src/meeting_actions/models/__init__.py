"""
Data models for the meeting-actions service.
"""

from .action_item import UNASSIGNED, ActionItem, MatchCandidate
from .api import (
    EmailQuota,
    ExtractRequest,
    ExtractResponse,
    SharedActions,
    ShareEmailRequest,
    ShareEmailResponse,
    ShareLinkRequest,
    ShareLinkResponse,
    UploadResponse,
)

__all__ = [
    # Core
    'UNASSIGNED',
    'ActionItem',
    'MatchCandidate',
    # API payloads
    'ExtractRequest',
    'ExtractResponse',
    'UploadResponse',
    'ShareEmailRequest',
    'ShareEmailResponse',
    'ShareLinkRequest',
    'ShareLinkResponse',
    'SharedActions',
    'EmailQuota',
]
